"""Matching and ordering rules for key resolution."""

from collections.abc import Iterable

from realm_keys.crypto.types import KeyDescriptor, KeyUse
from realm_keys.keys.errors import NoActiveKeyError
from realm_keys.keys.source import ComponentRecord, KeySource


def matches(key: KeyDescriptor, use: KeyUse, algorithm: str) -> bool:
    """Return True if the key serves ``use`` with ``algorithm``."""
    return key.use == use and algorithm in key.algorithms


def _priority_order(record: ComponentRecord) -> tuple[int, str]:
    return (-record.priority, record.id)


def sort_components(records: Iterable[ComponentRecord]) -> list[ComponentRecord]:
    """Order records by priority descending, then id ascending."""
    return sorted(records, key=_priority_order)


def find_active_key(
    sources: Iterable[KeySource], realm_id: str, use: KeyUse, algorithm: str
) -> KeyDescriptor:
    """Return the first active matching key across ``sources`` in order."""
    for source in sources:
        for key in source.get_keys():
            if key.status.is_active and matches(key, use, algorithm):
                return key
    raise NoActiveKeyError(realm_id, use, algorithm)
