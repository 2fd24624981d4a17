"""
Keyed record table with secondary indexes.

Records are plain dicts keyed by one field. Each secondary index maps a field
value to the keys holding it, in insertion order.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Iterable, List, Optional


class Table:
    """
    In-memory table of dict records.

    Usage:
        questions = Table("questions", indexes={"by_subject": "subject"})
        questions.put({"id": "q-1", "subject": "Math"})
        questions.get_all_by_index("by_subject", "Math")
    """

    def __init__(self, name: str, key: str = "id", indexes: Optional[Dict[str, str]] = None):
        self.name = name
        self.key = key
        self.indexes: Dict[str, str] = dict(indexes or {})
        self._records: Dict[Any, dict] = {}
        self._index_data: Dict[str, Dict[Any, Dict[Any, None]]] = {
            index: {} for index in self.indexes
        }

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key) -> bool:
        return key in self._records

    def put(self, record: dict) -> None:
        """Insert or replace a record (stored as a deep copy)."""
        if self.key not in record:
            raise KeyError(f"Record for table '{self.name}' is missing key field '{self.key}'")

        key = record[self.key]
        if key in self._records:
            self._unindex(key, self._records[key])

        stored = deepcopy(record)
        self._records[key] = stored
        for index, field_name in self.indexes.items():
            self._index_data[index].setdefault(stored.get(field_name), {})[key] = None

    def get(self, key) -> Optional[dict]:
        record = self._records.get(key)
        return deepcopy(record) if record is not None else None

    def delete(self, key) -> bool:
        """Remove a record; returns False if it did not exist."""
        record = self._records.pop(key, None)
        if record is None:
            return False
        self._unindex(key, record)
        return True

    def all(self) -> List[dict]:
        return [deepcopy(r) for r in self._records.values()]

    def get_all_by_index(self, index: str, value) -> List[dict]:
        """All records whose indexed field equals ``value``."""
        if index not in self._index_data:
            raise KeyError(f"Table '{self.name}' has no index '{index}'")
        keys = self._index_data[index].get(value, {})
        return [deepcopy(self._records[k]) for k in keys]

    def ordered_by(self, index: str, reverse: bool = False) -> List[dict]:
        """All records sorted by an indexed field (missing values first)."""
        if index not in self._index_data:
            raise KeyError(f"Table '{self.name}' has no index '{index}'")
        field_name = self.indexes[index]
        return sorted(
            self.all(),
            key=lambda r: (r.get(field_name) is not None, r.get(field_name) or ""),
            reverse=reverse,
        )

    def load(self, records: Iterable[dict]) -> None:
        """Replace the table contents."""
        self._records.clear()
        for data in self._index_data.values():
            data.clear()
        for record in records:
            self.put(record)

    def _unindex(self, key, record: dict) -> None:
        for index, field_name in self.indexes.items():
            bucket = self._index_data[index].get(record.get(field_name))
            if bucket is not None:
                bucket.pop(key, None)
                if not bucket:
                    del self._index_data[index][record.get(field_name)]
