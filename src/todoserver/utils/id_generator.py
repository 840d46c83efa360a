import re
import uuid

TODO_ID_LENGTH = 24

_TODO_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")


def new_todo_id() -> str:
    return uuid.uuid4().hex[:TODO_ID_LENGTH]


def is_legal_todo_id(value: str) -> bool:
    return isinstance(value, str) and bool(_TODO_ID_RE.match(value))
