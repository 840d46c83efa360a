"""Typed request failures raised by the query and mutation layers.

Every error carries the HTTP status it maps to; the server installs a single
handler that turns a TodoError into a JSON response.
"""


class TodoError(Exception):
    """Base class for failures that terminate a todo request."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedIdentifier(TodoError):
    """Path id is not a legal store identifier."""

    status_code = 400


class TodoValidationError(TodoError):
    """A query parameter or create payload failed validation."""

    status_code = 400


class TodoNotFound(TodoError):
    """Lookup or delete by id matched no record."""

    status_code = 404
