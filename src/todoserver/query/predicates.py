"""Typed filter clauses over Todo fields.

A query is a Conjunction of clauses; each clause is one of three variants:

- TextMatch: case-insensitive substring match against literal text
- ExactMatch: whole-value match, optionally case-insensitive
- Equality: strict equality on a non-text field (status)

The database layer compiles these into store clauses; nothing here knows
about the store.
"""

from dataclasses import dataclass, field
from typing import Tuple, Union

ASCENDING = "asc"
DESCENDING = "desc"


@dataclass(frozen=True)
class TextMatch:
    field: str
    text: str


@dataclass(frozen=True)
class ExactMatch:
    field: str
    value: str
    case_sensitive: bool = True


@dataclass(frozen=True)
class Equality:
    field: str
    value: bool


Predicate = Union[TextMatch, ExactMatch, Equality]


@dataclass(frozen=True)
class Conjunction:
    """AND of clauses. An empty conjunction matches every record."""
    clauses: Tuple[Predicate, ...] = ()

    @property
    def matches_all(self) -> bool:
        return not self.clauses


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: str = ASCENDING

    @property
    def descending(self) -> bool:
        return self.direction == DESCENDING


@dataclass(frozen=True)
class TodoQuery:
    """Everything the store needs to answer a list request."""
    predicate: Conjunction = field(default_factory=Conjunction)
    sort: SortSpec = field(default_factory=lambda: SortSpec("owner"))
    limit: int | None = None
