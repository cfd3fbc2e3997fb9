"""Translate sqlite3 failures into the service error taxonomy."""

import contextlib
import sqlite3
from collections.abc import Iterator

from shared.errors import GenericError


@contextlib.contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Re-raise any sqlite3.Error inside the block as GenericError, chaining the cause."""
    try:
        yield
    except sqlite3.Error as exc:
        raise GenericError(f"{action} failed") from exc
