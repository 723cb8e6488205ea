"""
Query Execution

DESIGN DECISION: Queries are DETERMINISTIC and run over in-memory
collections. Every search follows the same pipeline:

    text match -> exact filters -> sort -> paginate

Filters are applied in a fixed order so that ``total`` always counts the
matches BEFORE pagination. Sorting is stable: records with equal keys keep
their stored order, in both directions.
"""

import math
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

from myhub.models import (
    Budget,
    Page,
    PasswordEntry,
    Priority,
    Routine,
    SearchBudgetRequest,
    SearchPasswordRequest,
    SearchRoutineRequest,
    SearchTransactionRequest,
    Transaction,
)

ItemT = TypeVar("ItemT")

DEFAULT_PAGE_LIMIT = 50

PRIORITY_ORDER = {
    Priority.LOW: 0,
    Priority.MEDIUM: 1,
    Priority.HIGH: 2,
    Priority.CRITICAL: 3,
}


# =============================================================================
# BUILDING BLOCKS
# =============================================================================

def matches_text(query: Optional[str], values: Iterable[Optional[str]]) -> bool:
    """Case-insensitive substring match against any of the values."""
    if not query:
        return True
    needle = query.lower()
    return any(value and needle in value.lower() for value in values)


def has_any_tag(tags: Sequence[str], wanted: Optional[Sequence[str]]) -> bool:
    """True if the tag sets intersect. An empty or missing filter matches all."""
    if not wanted:
        return True
    return bool(set(tags) & set(wanted))


def sort_key(value: Any) -> tuple:
    """
    Normalise a field value for ordering.

    Strings compare case-folded. None sorts before every real value.
    """
    if value is None:
        return (0, "")
    if isinstance(value, str):
        return (1, value.casefold())
    return (1, value)


def sort_items(
    items: list[ItemT],
    key: Callable[[ItemT], Any],
    direction: str = "asc",
) -> list[ItemT]:
    return sorted(
        items,
        key=lambda item: sort_key(key(item)),
        reverse=direction == "desc",
    )


def paginate(
    items: list[ItemT],
    limit: Optional[int] = None,
    offset: int = 0,
    default_limit: int = DEFAULT_PAGE_LIMIT,
) -> Page[ItemT]:
    """
    Slice one page out of the matches.

    ``offset`` is a raw item offset, not a page number. The reported page
    is ``offset // limit + 1``.
    """
    limit = limit or default_limit
    total = len(items)
    return Page[Any](
        items=items[offset:offset + limit],
        total=total,
        page=offset // limit + 1,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )


def single_page(items: list[ItemT]) -> Page[ItemT]:
    """Everything as one page, for unparameterised listings."""
    return Page[Any](
        items=items,
        total=len(items),
        page=1,
        limit=len(items),
        total_pages=1,
    )


def _in_range(
    value: Any,
    lower: Optional[Any],
    upper: Optional[Any],
) -> bool:
    if lower is not None and value < lower:
        return False
    if upper is not None and value > upper:
        return False
    return True


# =============================================================================
# PASSWORDS
# =============================================================================

def password_text_fields(entry: PasswordEntry) -> list[Optional[str]]:
    return [entry.app_name, entry.username, entry.website, entry.notes, *entry.tags]


def filter_passwords(
    entries: list[PasswordEntry],
    request: SearchPasswordRequest,
) -> list[PasswordEntry]:
    results = [
        e for e in entries
        if matches_text(request.query, password_text_fields(e))
    ]
    if request.category is not None:
        results = [e for e in results if e.category == request.category]
    if request.tags:
        results = [e for e in results if has_any_tag(e.tags, request.tags)]
    if request.is_favorite is not None:
        results = [e for e in results if e.is_favorite == request.is_favorite]
    return results


def query_passwords(
    entries: list[PasswordEntry],
    request: Optional[SearchPasswordRequest],
    default_limit: int = DEFAULT_PAGE_LIMIT,
) -> Page[PasswordEntry]:
    if request is None:
        return single_page(entries)

    results = filter_passwords(entries, request)
    if request.sort_by:
        field = request.sort_by
        results = sort_items(results, lambda e: getattr(e, field), request.sort_direction)
    return paginate(results, request.limit, request.offset, default_limit)


# =============================================================================
# BUDGETS AND TRANSACTIONS
# =============================================================================

def filter_budgets(budgets: list[Budget], request: SearchBudgetRequest) -> list[Budget]:
    results = [
        b for b in budgets
        if matches_text(request.query, [b.name, b.description])
    ]
    if request.category is not None:
        results = [b for b in results if b.category == request.category]
    if request.type is not None:
        results = [b for b in results if b.type == request.type]
    if request.currency is not None:
        results = [b for b in results if b.currency == request.currency]
    if request.is_active is not None:
        results = [b for b in results if b.is_active == request.is_active]
    if request.date_from or request.date_to:
        results = [
            b for b in results
            if _in_range(b.start_date, request.date_from, request.date_to)
        ]
    return results


def query_budgets(
    budgets: list[Budget],
    request: Optional[SearchBudgetRequest],
    default_limit: int = DEFAULT_PAGE_LIMIT,
) -> Page[Budget]:
    if request is None:
        return single_page(budgets)

    results = filter_budgets(budgets, request)
    if request.sort_by:
        field = request.sort_by
        results = sort_items(results, lambda b: getattr(b, field), request.sort_direction)
    return paginate(results, request.limit, request.offset, default_limit)


def filter_transactions(
    transactions: list[Transaction],
    request: SearchTransactionRequest,
) -> list[Transaction]:
    results = [
        t for t in transactions
        if matches_text(request.query, [t.description, *t.tags])
    ]
    if request.budget_id is not None:
        results = [t for t in results if t.budget_id == request.budget_id]
    if request.category is not None:
        results = [t for t in results if t.category == request.category]
    if request.type is not None:
        results = [t for t in results if t.type == request.type]
    if request.date_from or request.date_to:
        results = [
            t for t in results
            if _in_range(t.date, request.date_from, request.date_to)
        ]
    if request.amount_min is not None or request.amount_max is not None:
        results = [
            t for t in results
            if _in_range(t.amount, request.amount_min, request.amount_max)
        ]
    if request.tags:
        results = [t for t in results if has_any_tag(t.tags, request.tags)]
    return results


def query_transactions(
    transactions: list[Transaction],
    request: Optional[SearchTransactionRequest],
    default_limit: int = DEFAULT_PAGE_LIMIT,
) -> Page[Transaction]:
    if request is None:
        return single_page(transactions)

    results = filter_transactions(transactions, request)
    if request.sort_by:
        field = request.sort_by
        results = sort_items(results, lambda t: getattr(t, field), request.sort_direction)
    return paginate(results, request.limit, request.offset, default_limit)


def sum_amounts(transactions: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in transactions), Decimal("0"))


# =============================================================================
# ROUTINES
# =============================================================================

def _routine_sort_value(routine: Routine, field: str) -> Any:
    if field == "priority":
        return PRIORITY_ORDER[routine.priority]
    return getattr(routine, field)


def filter_routines(routines: list[Routine], request: SearchRoutineRequest) -> list[Routine]:
    results = [
        r for r in routines
        if matches_text(request.query, [r.title, r.description])
    ]
    if request.category is not None:
        results = [r for r in results if r.category == request.category]
    if request.priority is not None:
        results = [r for r in results if r.priority == request.priority]
    if request.is_active is not None:
        results = [r for r in results if r.is_active == request.is_active]
    if request.day_of_week is not None:
        results = [r for r in results if request.day_of_week in r.days_of_week]
    return results


def query_routines(
    routines: list[Routine],
    request: Optional[SearchRoutineRequest],
    default_limit: int = DEFAULT_PAGE_LIMIT,
) -> Page[Routine]:
    if request is None:
        return single_page(routines)

    results = filter_routines(routines, request)
    if request.sort_by:
        field = request.sort_by
        results = sort_items(
            results,
            lambda r: _routine_sort_value(r, field),
            request.sort_direction,
        )
    return paginate(results, request.limit, request.offset, default_limit)


def most_recent(
    items: list[ItemT],
    key: Callable[[ItemT], Optional[datetime]],
    count: int,
) -> list[ItemT]:
    """The ``count`` items with the latest non-empty timestamp, newest first."""
    dated = [item for item in items if key(item) is not None]
    return sorted(dated, key=key, reverse=True)[:count]
