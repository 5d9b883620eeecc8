"""Translation of Supabase client errors into engine errors."""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from supabase import PostgrestAPIError

from portion_advisor.domain.errors import ConcurrencyConflict, StoreUnavailable

UNIQUE_VIOLATION = "23505"


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Raise ConcurrencyConflict or StoreUnavailable for failed store calls."""
    try:
        yield
    except PostgrestAPIError as exc:
        if exc.code == UNIQUE_VIOLATION:
            raise ConcurrencyConflict(f"{action}: {exc.message}") from exc
        raise StoreUnavailable(f"{action} failed: {exc.message}") from exc
    except httpx.HTTPError as exc:
        raise StoreUnavailable(f"{action} failed: {exc}") from exc
