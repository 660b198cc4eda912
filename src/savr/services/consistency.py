"""Optimistic concurrency for read-modify-write document updates."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from savr.domain.errors import ConcurrentUpdateError

T = TypeVar("T")

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Versioned(Generic[T]):
    """A stored document together with its version counter."""

    value: T
    version: int


@dataclass(frozen=True)
class SwapResult(Generic[T]):
    """Outcome of a compare-and-swap update."""

    value: T | None
    created: bool = False
    written: bool = False


def compare_and_swap(
    load: Callable[[], Versioned[T] | None],
    store: Callable[[T, int | None], bool],
    mutate: Callable[[T | None], T | None],
    *,
    attempts: int,
    label: str,
) -> SwapResult[T]:
    """Apply ``mutate`` to the stored document and write it back atomically.

    ``store`` receives the version that was read (``None`` when the document
    did not exist) and returns False when another writer got there first, in
    which case the document is re-read and ``mutate`` runs again. Returning
    ``None`` or an unchanged value from ``mutate`` skips the write.
    """
    for attempt in range(1, attempts + 1):
        stored = load()
        current = stored.value if stored is not None else None
        updated = mutate(current)
        if updated is None:
            return SwapResult(value=current)
        if updated == current:
            return SwapResult(value=updated)
        expected_version = stored.version if stored is not None else None
        if store(updated, expected_version):
            return SwapResult(value=updated, created=stored is None, written=True)
        _logger.warning(
            "Write conflict on %s (attempt %s/%s)", label, attempt, attempts
        )
    raise ConcurrentUpdateError(f"Gave up updating {label} after {attempts} attempts")
