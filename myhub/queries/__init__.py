"""Search, filter, sort and pagination over stored collections."""

from myhub.queries.executor import (
    DEFAULT_PAGE_LIMIT,
    matches_text,
    most_recent,
    paginate,
    query_budgets,
    query_passwords,
    query_routines,
    query_transactions,
    single_page,
    sort_items,
    sum_amounts,
)

__all__ = [
    "DEFAULT_PAGE_LIMIT",
    "matches_text",
    "most_recent",
    "paginate",
    "query_budgets",
    "query_passwords",
    "query_routines",
    "query_transactions",
    "single_page",
    "sort_items",
    "sum_amounts",
]
