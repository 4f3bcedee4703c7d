from __future__ import annotations

import json
import logging
from itertools import islice
from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")


# ============================================================
# Direction-aware comparisons
# ============================================================

def is_within_limit(reverse: bool, value: Any, limit: Any) -> bool:
    """value <= limit going forward, value >= limit going backward."""
    return value >= limit if reverse else value <= limit


def is_outside_limit(reverse: bool, value: Any, limit: Any) -> bool:
    return value < limit if reverse else value > limit


def sorted_by_reversible(items: Iterable[T], reverse: bool, key: Callable[[T], Any]) -> List[T]:
    """Stable sort, descending when `reverse`."""
    return sorted(items, key=key, reverse=reverse)


# ============================================================
# Merge
# ============================================================

_END = object()


def merge_with(this: Iterable[T], other: Iterable[T], reverse: bool = False) -> Iterator[T]:
    """
    Lazily merge two already ordered iterables (ascending, or descending
    when `reverse`). Only the two current heads are ever held, so either
    side may be infinite. On ties the head of `this` goes first.
    """
    this_it = iter(this)
    other_it = iter(other)
    a = next(this_it, _END)
    b = next(other_it, _END)

    while a is not _END and b is not _END:
        if is_within_limit(reverse, a, b):
            yield a  # type: ignore[misc]
            a = next(this_it, _END)
        else:
            yield b  # type: ignore[misc]
            b = next(other_it, _END)

    if a is not _END:
        yield a  # type: ignore[misc]
        yield from this_it
    if b is not _END:
        yield b  # type: ignore[misc]
        yield from other_it


# ============================================================
# Lazy sequence base
# ============================================================

class EventSequence(Generic[T]):
    """
    Re-iterable, lazily evaluated event stream.

    The object holds only immutable configuration; every iter() starts a
    fresh generator with its own cursor, so independent consumers never
    share state.
    """

    def __iter__(self) -> Iterator[T]:
        return self._generate()

    def _generate(self) -> Iterator[T]:
        raise NotImplementedError

    def first(self) -> Optional[T]:
        return next(iter(self), None)

    def take(self, n: int) -> List[T]:
        return list(islice(self, n))


# ============================================================
# Logging
# ============================================================

def log_debug(logger: logging.Logger, event: str, **fields: Any) -> None:
    """Structured debug record; skipped entirely unless DEBUG is enabled."""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(json.dumps({"event": event, **fields}, default=str))
