"""Todos API: list, lookup, create and delete over the todo store."""

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from ..config.loader import BASE_CONFIG
from ..database.todo_repo import delete_todo_by_id, find_todo_by_id, find_todos, insert_todo
from ..errors import MalformedIdentifier, TodoNotFound, TodoValidationError
from ..query.builder import build_query, parse_category
from ..todos.todo_models import NewTodo, Todo
from ..utils.id_generator import is_legal_todo_id
from ..utils.logging import get_logger
from .models import TodoCreated

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = get_logger(__name__)


def _describe_validation_error(exc: ValidationError) -> str:
    """Name the first offending field of a rejected create payload."""
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "body"
    if first.get("type") in ("missing", "value_error"):
        return f"Todo must have a non-empty {field}"
    return f"Invalid {field}: {first.get('msg')}"


def list_todos(
    session: "Session",
    params: Mapping[str, str],
    query_config: Optional[Dict[str, Any]] = None,
) -> List[Todo]:
    """
    List todos matching the request parameters.

    Args:
        session: SQLAlchemy session
        params: Raw query parameters (owner, body, contains, status, category,
            limit, sort key, sortorder); unknown names are ignored
        query_config: The "query" config section; defaults apply when None

    Returns:
        Todos in sort order, capped at limit when one was given

    Raises:
        TodoValidationError: If status, category, limit or the sort key is invalid
    """
    query = build_query(params, query_config)
    logger.debug("Listing todos with %s", query)
    return [Todo.model_validate(row) for row in find_todos(session, query)]


def get_todo(session: "Session", todo_id: str) -> Todo:
    """
    Resolve one todo by its path id.

    Raises:
        MalformedIdentifier: If todo_id isn't a legal identifier
        TodoNotFound: If no todo has that id
    """
    if not is_legal_todo_id(todo_id):
        raise MalformedIdentifier("The requested todo id wasn't a legal identifier.")

    row = find_todo_by_id(session, todo_id.lower())
    if row is None:
        raise TodoNotFound("The requested todo was not found")
    return Todo.model_validate(row)


def create_todo(
    session: "Session",
    payload: Any,
    query_config: Optional[Dict[str, Any]] = None,
) -> TodoCreated:
    """
    Validate a candidate todo and insert it.

    Raises:
        TodoValidationError: If owner, body or category is missing or empty,
            category is outside the enumeration, or status isn't a boolean
    """
    query_config = query_config or BASE_CONFIG["query"]
    if not isinstance(payload, dict):
        raise TodoValidationError("Todo must be a JSON object")

    try:
        candidate = NewTodo.model_validate(payload)
    except ValidationError as exc:
        raise TodoValidationError(f"{_describe_validation_error(exc)}; body was {payload}") from None

    category = parse_category(candidate.category, query_config["category_case_sensitive"])
    row = insert_todo(
        session,
        owner=candidate.owner,
        body=candidate.body,
        category=category,
        status=candidate.status,
    )
    logger.info("Created todo %s for %s", row.id, row.owner)
    return TodoCreated(id=row.id)


def delete_todo(session: "Session", todo_id: str) -> None:
    """
    Delete one todo by id.

    Malformed ids can never match a record and are reported as not found.

    Raises:
        TodoNotFound: If nothing was deleted
    """
    deleted = delete_todo_by_id(session, todo_id.lower()) if is_legal_todo_id(todo_id) else 0
    if deleted != 1:
        raise TodoNotFound(
            f"Was unable to delete ID {todo_id}; perhaps illegal ID or an ID for an item not in the system?"
        )
    logger.info("Deleted todo %s", todo_id)
