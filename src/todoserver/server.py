"""
Todo HTTP Server
================
FastAPI application exposing the todos API.

Endpoints (under the configured api_prefix):
    GET    /todos        → Filtered, sorted, capped list of todos
    GET    /todos/{id}   → One todo
    POST   /todos        → Create a todo, returns {"id": ...}
    DELETE /todos/{id}   → Delete a todo
"""

import json
from typing import Any, Dict, Generator, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from . import __version__
from .api.todos_api import create_todo, delete_todo, get_todo, list_todos
from .config.loader import default_config
from .database.sqlite_client import SessionFactory, get_engine, get_session_factory, session_context
from .errors import TodoError, TodoValidationError
from .utils.logging import get_logger

logger = get_logger(__name__)


# ─────────────────────────────────────────────────────────────
#  Dependencies
# ─────────────────────────────────────────────────────────────

def _get_session(request: Request) -> Generator[Session, None, None]:
    """One session per request, drawn from the app's store handle."""
    with session_context(request.app.state.session_factory) as session:
        yield session


def _query_config(request: Request) -> Dict[str, Any]:
    return request.app.state.config["query"]


# ─────────────────────────────────────────────────────────────
#  Routes
# ─────────────────────────────────────────────────────────────

router = APIRouter()


@router.get("/todos")
def api_list_todos(request: Request, session: Session = Depends(_get_session)):
    """Return todos matching the query parameters."""
    todos = list_todos(session, request.query_params, _query_config(request))
    return JSONResponse([todo.model_dump() for todo in todos])


@router.get("/todos/{todo_id}")
def api_get_todo(todo_id: str, session: Session = Depends(_get_session)):
    """Return one todo by id."""
    return JSONResponse(get_todo(session, todo_id).model_dump())


@router.post("/todos")
async def api_create_todo(request: Request, session: Session = Depends(_get_session)):
    """Create a todo from the JSON body."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise TodoValidationError("Request body must be a JSON todo object") from None
    created = await run_in_threadpool(create_todo, session, payload, _query_config(request))
    return JSONResponse(created.model_dump(), status_code=201)


@router.delete("/todos/{todo_id}")
def api_delete_todo(todo_id: str, session: Session = Depends(_get_session)):
    """Delete one todo by id."""
    delete_todo(session, todo_id)
    return Response(status_code=200)


async def _todo_error_handler(request: Request, exc: TodoError) -> JSONResponse:
    logger.warning("%s %s failed with %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse({"detail": exc.message}, status_code=exc.status_code)


# ─────────────────────────────────────────────────────────────
#  App Setup
# ─────────────────────────────────────────────────────────────

def create_app(
    config: Optional[Dict[str, Any]] = None,
    session_factory: Optional[SessionFactory] = None,
) -> FastAPI:
    """
    Build the FastAPI app around an explicit store handle.

    Args:
        config: Loaded configuration; built-in defaults when None
        session_factory: Session factory for the todo store; when None one is
            built from config's database.sqlite_path

    Returns:
        Configured FastAPI application
    """
    config = config or default_config()
    if session_factory is None:
        session_factory = get_session_factory(get_engine(config["database"]["sqlite_path"]))

    app = FastAPI(title="Todo Server", version=__version__)
    app.state.config = config
    app.state.session_factory = session_factory
    app.add_exception_handler(TodoError, _todo_error_handler)
    app.include_router(router, prefix=config["server"]["api_prefix"])
    return app


def run_server(config: Dict[str, Any]) -> None:
    """Launch the todo server with uvicorn."""
    import uvicorn

    app = create_app(config)
    host = config["server"]["host"]
    port = config["server"]["port"]
    logger.info("Serving todos on http://%s:%s%s/todos", host, port, config["server"]["api_prefix"])
    uvicorn.run(app, host=host, port=port, log_level=config["logging"]["level"].lower())
