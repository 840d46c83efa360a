"""CLI entrypoint for the todo server."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from todoserver.api.todos_api import create_todo, list_todos
from todoserver.config.loader import load_config
from todoserver.database.sqlite_client import get_engine, get_session_factory, session_context
from todoserver.database.todo_repo import count_todos
from todoserver.errors import TodoError
from todoserver.todos.todo_models import Todo
from todoserver.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

# CLI flag name -> query parameter name
LIST_FILTER_FLAGS = {
    "owner": "owner",
    "body": "body",
    "status": "status",
    "category": "category",
    "limit": "limit",
    "sortby": "sortby",
    "sortorder": "sortorder",
}


def _load(args: argparse.Namespace) -> Dict[str, Any]:
    config = load_config(args.config)
    configure_logging(config["logging"]["level"])
    return config


def _session_factory(config: Dict[str, Any]):
    return get_session_factory(get_engine(config["database"]["sqlite_path"]))


def _print_todos(todos: List[Todo]) -> None:
    if not todos:
        print("No todos found.")
        return
    print(f"{'ID':<24}  {'ST':<4}  {'OWNER':<12}  {'CATEGORY':<16}  BODY")
    print("-" * 80)
    for t in todos:
        st = "DONE" if t.status else "TODO"
        print(f"{t.id:<24}  {st:<4}  {t.owner:<12}  {t.category:<16}  {t.body}")


def cmd_init(args: argparse.Namespace) -> int:
    config = _load(args)
    get_engine(config["database"]["sqlite_path"])
    print(f"Initialized database at: {config['database']['sqlite_path']}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    config = _load(args)
    if args.host:
        config["server"]["host"] = args.host
    if args.port:
        config["server"]["port"] = args.port

    from todoserver.server import run_server

    run_server(config)
    return 0


def cmd_seed(args: argparse.Namespace) -> int:
    config = _load(args)
    data_path = Path(args.file).expanduser().resolve()
    try:
        entries = json.loads(data_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Unable to read seed file {data_path}: {e}")
        return 1
    if not isinstance(entries, list):
        logger.error(f"Seed file {data_path} must contain a JSON array of todos")
        return 1

    inserted = 0
    with session_context(_session_factory(config)) as session:
        for index, entry in enumerate(entries):
            try:
                create_todo(session, entry, config["query"])
            except TodoError as e:
                logger.error(f"Skipping seed entry {index}: {e.message}")
                continue
            inserted += 1
    print(f"Seeded {inserted} of {len(entries)} todos from {data_path}")
    return 0 if inserted == len(entries) else 1


def cmd_list(args: argparse.Namespace) -> int:
    config = _load(args)
    params = {
        param: str(getattr(args, flag))
        for flag, param in LIST_FILTER_FLAGS.items()
        if getattr(args, flag) is not None
    }
    if "sortby" in params:
        params[config["query"]["sort_key_params"][0]] = params.pop("sortby")
    with session_context(_session_factory(config)) as session:
        try:
            todos = list_todos(session, params, config["query"])
        except TodoError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 2
        total = count_todos(session)
    _print_todos(todos)
    print(f"\n{len(todos)} shown, {total} total")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todoserver",
        description="Todo query service backed by SQLite",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config YAML (default: ./todoserver.config.yaml if present)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    init_parser = subparsers.add_parser("init", help="Create the database schema")
    init_parser.set_defaults(func=cmd_init)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP server")
    serve_parser.add_argument("--host", type=str, help="Override server.host")
    serve_parser.add_argument("--port", type=int, help="Override server.port")
    serve_parser.set_defaults(func=cmd_serve)

    seed_parser = subparsers.add_parser("seed", help="Insert todos from a JSON array file")
    seed_parser.add_argument("file", help="JSON file holding a list of todo objects")
    seed_parser.set_defaults(func=cmd_seed)

    list_parser = subparsers.add_parser("list", help="List todos using the same filters as GET /todos")
    list_parser.add_argument("--owner", type=str, help="Owner substring (case-insensitive)")
    list_parser.add_argument("--body", type=str, help="Body substring (case-insensitive)")
    list_parser.add_argument("--status", type=str, help="complete, incomplete, true or false")
    list_parser.add_argument("--category", type=str, help="One of the fixed categories")
    list_parser.add_argument("--limit", type=int, help="Maximum number of todos to show")
    list_parser.add_argument("--sortby", type=str, help="Sort key (default: owner)")
    list_parser.add_argument(
        "--sortorder",
        type=str,
        choices=["asc", "desc"],
        help="Sort direction (default: asc)",
    )
    list_parser.set_defaults(func=cmd_list)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    sys.exit(main())
