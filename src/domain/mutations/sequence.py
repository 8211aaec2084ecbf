"""Helpers for the newest-first embedded sequences of an aggregate."""

from collections.abc import Callable, Iterable
from typing import Protocol, TypeVar
from uuid import UUID


class Identified(Protocol):
    id: UUID


T = TypeVar("T")
IdT = TypeVar("IdT", bound=Identified)


def find_first(items: Iterable[T], predicate: Callable[[T], bool]) -> T | None:
    """Return the first matching entry, or None when nothing matches."""
    for item in items:
        if predicate(item):
            return item
    return None


def find_by_id(items: Iterable[IdT], record_id: UUID) -> IdT | None:
    return find_first(items, lambda item: item.id == record_id)


def prepend(items: list[T], entry: T) -> None:
    items.insert(0, entry)


def remove_entry(items: list[T], entry: T) -> None:
    """Remove exactly ``entry`` (matched by identity, not equality).

    Raises LookupError if the entry is no longer in the list.
    """
    for position, item in enumerate(items):
        if item is entry:
            del items[position]
            return
    raise LookupError("entry is not part of this sequence")
