"""In-memory collection backing one dashboard page.

Keeps records in insertion order with at most one record per ``id`` and
applies mutation events without refetching the whole list.
"""

from __future__ import annotations

import copy
import logging
import re
from typing import Any, Iterable

from schooldesk.lib.mutation_events import Key, MutationEvent, MutationKind, Record


def normalize_key(key: Key) -> Key:
    """Map numeric strings to ints so ``5`` and ``"5"`` address the same record."""
    if isinstance(key, bool):
        return int(key)
    if isinstance(key, str):
        stripped = key.strip()
        if re.fullmatch(r"-?[0-9]+", stripped):
            return int(stripped)
        return stripped
    return key


class CollectionStore:
    """Ordered set of records keyed by ``id``."""

    def __init__(self, records: Iterable[Record] | None = None) -> None:
        self._records: list[Record] = []
        if records is not None:
            self.load(records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: Any) -> bool:
        return self._index_of(key) is not None

    def _index_of(self, key: Key) -> int | None:
        wanted = normalize_key(key)
        for idx, record in enumerate(self._records):
            if normalize_key(record["id"]) == wanted:
                return idx
        return None

    @staticmethod
    def _check(record: Record) -> Record:
        if not isinstance(record, dict) or record.get("id") is None:
            raise ValueError(f"Record has no id: {record!r}")
        return copy.deepcopy(record)

    def load(self, records: Iterable[Record]) -> None:
        """Replace the whole collection."""
        self._records = []
        for record in records:
            self._upsert(self._check(record))
        logging.debug(f"Loaded {len(self._records)} records")

    def _upsert(self, record: Record) -> bool:
        """Replace in place when the id exists, append otherwise. Returns True if replaced."""
        idx = self._index_of(record["id"])
        if idx is None:
            self._records.append(record)
            return False
        self._records[idx] = record
        return True

    def apply_created(self, record: Record) -> None:
        """Append a new record; a repeated create replaces the existing one."""
        if self._upsert(self._check(record)):
            logging.debug(f"Duplicate create for id {record['id']}, replaced existing record")

    def apply_updated(self, record: Record) -> None:
        """Replace the record with the same id; append if it is not loaded yet."""
        if not self._upsert(self._check(record)):
            logging.debug(f"Update for unknown id {record['id']}, appended")

    def apply_deleted(self, key: Key) -> bool:
        """Remove the record with this id. Returns False when nothing matched."""
        idx = self._index_of(key)
        if idx is None:
            return False
        del self._records[idx]
        return True

    def apply(self, event: MutationEvent) -> bool:
        """Apply a mutation event. Returns False when the caller must refetch instead."""
        if event.needs_refetch:
            return False
        if event.kind is MutationKind.CREATED:
            self.apply_created(event.record)
        elif event.kind is MutationKind.UPDATED:
            self.apply_updated(event.record)
        else:
            self.apply_deleted(event.id)
        return True

    def find(self, key: Key) -> Record | None:
        idx = self._index_of(key)
        return None if idx is None else copy.deepcopy(self._records[idx])

    def snapshot(self) -> list[Record]:
        """Return a copy of the records in order; changes to it never reach the store."""
        return copy.deepcopy(self._records)
