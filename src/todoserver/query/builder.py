"""Turn raw request parameters into a validated TodoQuery.

Validation is eager: the first bad parameter raises TodoValidationError and no
partial query is returned.
"""

import re
from typing import Any, Dict, List, Mapping, Optional

from ..config.loader import BASE_CONFIG, SORTABLE_FIELDS
from ..errors import TodoValidationError
from ..todos.todo_models import TODO_CATEGORIES
from .predicates import (
    ASCENDING,
    DESCENDING,
    Conjunction,
    Equality,
    ExactMatch,
    Predicate,
    SortSpec,
    TextMatch,
    TodoQuery,
)

OWNER_KEY = "owner"
BODY_KEY = "body"
CONTAINS_KEY = "contains"
STATUS_KEY = "status"
CATEGORY_KEY = "category"
LIMIT_KEY = "limit"
SORT_ORDER_KEY = "sortorder"

# SQLite integers are signed 64-bit
MAX_LIMIT = 2**63 - 1

_LIMIT_RE = re.compile(r"^[+-]?[0-9]+\Z")

STATUS_VALUES = {
    "complete": True,
    "true": True,
    "incomplete": False,
    "false": False,
}


def parse_status(value: str) -> bool:
    """Map complete/true and incomplete/false (any case) to a boolean."""
    try:
        return STATUS_VALUES[value.strip().lower()]
    except KeyError:
        raise TodoValidationError(
            f"Invalid status '{value}'; allowed values are complete, incomplete, true, false"
        ) from None


def parse_category(value: str, case_sensitive: bool = True) -> str:
    """Return the canonical category name, or raise if it isn't in the enumeration."""
    if case_sensitive:
        if value in TODO_CATEGORIES:
            return value
    else:
        lowered = value.lower()
        for category in TODO_CATEGORIES:
            if category == lowered:
                return category
    raise TodoValidationError(
        f"Invalid category '{value}'; must be one of {', '.join(TODO_CATEGORIES)}"
    )


def parse_limit(value: str) -> int:
    """Parse a plain-digit positive limit, capped at the store's largest integer."""
    if not isinstance(value, str) or not _LIMIT_RE.match(value):
        raise TodoValidationError(f"Invalid limit '{value}'; limit must be a positive integer")
    limit = int(value)
    if limit < 1:
        raise TodoValidationError(f"Invalid limit '{value}'; limit must be a positive integer")
    return min(limit, MAX_LIMIT)


def build_filter(params: Mapping[str, str], query_config: Optional[Dict[str, Any]] = None) -> Conjunction:
    """
    Build the conjunctive filter for a list request.

    Args:
        params: Query parameters (name -> single string value)
        query_config: The "query" config section; defaults apply when None

    Returns:
        Conjunction of typed clauses; empty when no filter parameter is present
    """
    query_config = query_config or BASE_CONFIG["query"]
    clauses: List[Predicate] = []

    if OWNER_KEY in params:
        clauses.append(TextMatch(OWNER_KEY, params[OWNER_KEY]))
    if BODY_KEY in params:
        clauses.append(TextMatch(BODY_KEY, params[BODY_KEY]))
    if CONTAINS_KEY in params:
        clauses.append(TextMatch(BODY_KEY, params[CONTAINS_KEY]))
    if STATUS_KEY in params:
        clauses.append(Equality(STATUS_KEY, parse_status(params[STATUS_KEY])))
    if CATEGORY_KEY in params:
        case_sensitive = query_config["category_case_sensitive"]
        category = parse_category(params[CATEGORY_KEY], case_sensitive)
        clauses.append(ExactMatch(CATEGORY_KEY, category, case_sensitive=case_sensitive))

    return Conjunction(tuple(clauses))


def build_sort(params: Mapping[str, str], query_config: Optional[Dict[str, Any]] = None) -> SortSpec:
    """Single-key sort from the first configured sort-key parameter present, plus sortorder."""
    query_config = query_config or BASE_CONFIG["query"]

    sort_key = None
    for name in query_config["sort_key_params"]:
        if params.get(name):
            sort_key = params[name]
            break
    sort_key = sort_key or query_config["default_sort_key"]

    if sort_key not in SORTABLE_FIELDS:
        raise TodoValidationError(
            f"Invalid sort key '{sort_key}'; must be one of {', '.join(SORTABLE_FIELDS)}"
        )

    direction = DESCENDING if params.get(SORT_ORDER_KEY, "").lower() == DESCENDING else ASCENDING
    return SortSpec(sort_key, direction)


def build_query(params: Mapping[str, str], query_config: Optional[Dict[str, Any]] = None) -> TodoQuery:
    predicate = build_filter(params, query_config)
    sort = build_sort(params, query_config)
    limit = parse_limit(params[LIMIT_KEY]) if LIMIT_KEY in params else None
    return TodoQuery(predicate=predicate, sort=sort, limit=limit)
