"""Paged reads for Supabase queries."""

from collections.abc import Callable
from typing import Any

# PostgREST caps a single response at 1000 rows by default.
PAGE_SIZE = 1000


def fetch_all(
    build_query: Callable[[], Any], page_size: int = PAGE_SIZE
) -> list[dict[str, Any]]:
    """Return every row of a query by walking it with ``range`` pages.

    ``build_query`` must return a fresh filter builder on each call.
    """
    rows: list[dict[str, Any]] = []
    start = 0
    while True:
        response = build_query().range(start, start + page_size - 1).execute()
        page = response.data or []
        rows.extend(page)
        if len(page) < page_size:
            return rows
        start += page_size
