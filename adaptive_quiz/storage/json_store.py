"""
File-backed store: one JSON document per table.

Features:
- Validate every record against its JSON Schema before writing
- Save tables to <data_dir>/<table>.json with atomic replace
- Lazy load on first use, indexes rebuilt in memory
- File I/O runs in worker threads; writes are serialized by an asyncio lock
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional

from ..errors import StorageError
from ..utils.validation import get_record_validator
from .memory import MemoryQuizStore

logger = logging.getLogger(__name__)


class JsonQuizStore(MemoryQuizStore):
    """
    Persistent quiz store in a directory of JSON files.

    Usage:
        store = JsonQuizStore("data/quiz")
        questions = await store.load_questions_by_subject("Math")
    """

    def __init__(self, data_dir: Path | str, validate: bool = True):
        """
        Initialize the store.

        Args:
            data_dir: Directory holding questions.json, attempts.json, sessions.json
            validate: Whether to validate records before saving
        """
        super().__init__()
        self.data_dir = Path(data_dir)
        self.validate = validate
        self._loaded = False
        self._lock = asyncio.Lock()

    def table_path(self, table: str) -> Path:
        return self.data_dir / f"{table}.json"

    async def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        async with self._lock:
            if self._loaded:
                return
            for name, table in self.tables.items():
                records = await asyncio.to_thread(self._read_table, name)
                try:
                    table.load(records)
                except (KeyError, TypeError) as e:
                    raise StorageError(f"Failed to read {self.table_path(name)}: {e}") from e
            self._loaded = True
            logger.debug("Loaded quiz store from %s", self.data_dir)

    def _before_put(self, table: str, record: dict) -> None:
        if not self.validate:
            return
        result = get_record_validator(table).validate(record)
        if not result:
            raise StorageError(
                f"Refusing to save invalid {table} record {record.get('id')!r}: "
                + "; ".join(result.errors)
            )

    async def _commit(self, table: str) -> None:
        async with self._lock:
            # Snapshot under the lock: the file only ever holds committed records
            records = self.tables[table].all()
            await asyncio.to_thread(self._write_table, table, records)

    def _read_table(self, table: str) -> List[dict]:
        path = self.table_path(table)
        if not path.exists():
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"Failed to read {path}: expected a JSON list of records")
        return data

    def _write_table(self, table: str, records: List[dict]) -> None:
        path = self.table_path(table)
        tmp_name: Optional[str] = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{table}-", suffix=".json", dir=self.data_dir)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to save {path}: {e}") from e
