"""Repository functions for todo persistence and filtered retrieval."""

from typing import List, Optional

from sqlalchemy import and_, delete, func, select, true
from sqlalchemy.orm import Session

from ..query.predicates import Conjunction, Equality, ExactMatch, Predicate, SortSpec, TextMatch, TodoQuery
from ..utils.id_generator import new_todo_id
from ..utils.logging import get_logger
from .schema import TodoRow

logger = get_logger(__name__)

_COLUMNS = {
    "id": TodoRow.id,
    "owner": TodoRow.owner,
    "status": TodoRow.status,
    "body": TodoRow.body,
    "category": TodoRow.category,
}


def _column(field: str):
    try:
        return _COLUMNS[field]
    except KeyError:
        raise ValueError(f"Unknown todo field: {field}") from None


def _compile_predicate(predicate: Predicate):
    column = _column(predicate.field)
    if isinstance(predicate, TextMatch):
        # autoescape makes %, _ and the escape char literal
        return column.icontains(predicate.text, autoescape=True)
    if isinstance(predicate, ExactMatch):
        if predicate.case_sensitive:
            return column == predicate.value
        return func.lower(column) == predicate.value.lower()
    if isinstance(predicate, Equality):
        return column == predicate.value
    raise TypeError(f"Unsupported predicate: {predicate!r}")


def compile_filter(conjunction: Conjunction):
    """Fold a Conjunction into one SQL clause; empty means always-true."""
    if conjunction.matches_all:
        return true()
    return and_(*(_compile_predicate(clause) for clause in conjunction.clauses))


def compile_sort(sort: SortSpec):
    column = _column(sort.field)
    return column.desc() if sort.descending else column.asc()


def find_todos(session: Session, query: TodoQuery) -> List[TodoRow]:
    """
    Filter, sort and (optionally) cap the todo collection.

    Args:
        session: SQLAlchemy session
        query: Validated query; limit None means no cap

    Returns:
        Matching rows in sort order
    """
    stmt = select(TodoRow).where(compile_filter(query.predicate)).order_by(compile_sort(query.sort))
    if query.limit is not None:
        stmt = stmt.limit(query.limit)
    return list(session.scalars(stmt).all())


def find_todo_by_id(session: Session, todo_id: str) -> Optional[TodoRow]:
    return session.get(TodoRow, todo_id)


def count_todos(session: Session) -> int:
    return session.scalar(select(func.count()).select_from(TodoRow)) or 0


def insert_todo(
    session: Session,
    *,
    owner: str,
    body: str,
    category: str,
    status: bool = False,
    todo_id: Optional[str] = None,
) -> TodoRow:
    """Insert one todo and commit. The id is assigned here unless given."""
    row = TodoRow(
        id=todo_id or new_todo_id(),
        owner=owner,
        status=status,
        body=body,
        category=category,
    )
    session.add(row)
    session.commit()
    logger.debug("Inserted todo %s", row.id)
    return row


def delete_todo_by_id(session: Session, todo_id: str) -> int:
    """Delete at most one todo by exact id; return the number of rows deleted."""
    result = session.execute(delete(TodoRow).where(TodoRow.id == todo_id))
    session.commit()
    return result.rowcount or 0
