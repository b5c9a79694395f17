"""Keyed-set diffing of old and new desired state."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, fields
from typing import Generic, TypeVar

from .model import GlobalSecondaryIndex, TableSpec

T = TypeVar("T")


@dataclass(frozen=True)
class KeyedDiff(Generic[T]):
    """Three-way partition of two keyed collections.

    ``updates`` holds the new item for every key present on both sides whose
    compared value differs. Keys with equal values appear in no partition.
    """

    adds: tuple[T, ...]
    updates: tuple[T, ...]
    deletes: tuple[T, ...]

    def __bool__(self) -> bool:
        return bool(self.adds or self.updates or self.deletes)


def diff_keyed(
    old: Iterable[T],
    new: Iterable[T],
    *,
    key: Callable[[T], Hashable],
    value: Callable[[T], Hashable],
) -> KeyedDiff[T]:
    old_by_key = {key(item): item for item in old}
    new_by_key = {key(item): item for item in new}

    adds = tuple(item for k, item in new_by_key.items() if k not in old_by_key)
    updates = tuple(
        item for k, item in new_by_key.items() if k in old_by_key and value(old_by_key[k]) != value(item)
    )
    deletes = tuple(item for k, item in old_by_key.items() if k not in new_by_key)
    return KeyedDiff(adds=adds, updates=updates, deletes=deletes)


def _index_name(gsi: GlobalSecondaryIndex) -> str:
    return gsi.index_name


def _index_capacity(gsi: GlobalSecondaryIndex) -> tuple[int, int]:
    return (int(gsi.read_capacity), int(gsi.write_capacity))


def diff_indexes(old: TableSpec, new: TableSpec) -> KeyedDiff[GlobalSecondaryIndex]:
    return diff_keyed(old.indexes, new.indexes, key=_index_name, value=_index_capacity)


def changed_fields(old: TableSpec, new: TableSpec) -> set[str]:
    changed: set[str] = set()
    for f in fields(TableSpec):
        before = getattr(old, f.name)
        after = getattr(new, f.name)
        if f.name == "global_secondary_indexes":
            before, after = before or (), after or ()
        if before != after:
            changed.add(f.name)
    return changed
