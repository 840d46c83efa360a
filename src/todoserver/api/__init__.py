"""API layer: canonical query/mutation surface for the HTTP server and CLI.

Key rules:

1. No SQLAlchemy imports at runtime - only call repo functions
2. Validate request input eagerly and raise typed TodoError subclasses
3. Return Pydantic models only
"""
