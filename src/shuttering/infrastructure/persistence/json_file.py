"""Whole-file JSON collection shared by the JSON repositories.

Each collection is a flat list of records.  It is read in full on every
access and written in full on every change.  A file that cannot be
parsed is not fatal: the collection falls back to its seed records and
the next save overwrites the damaged file.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)


class JsonFile:

    def __init__(self, file_path: Path, seed: Callable[[], list[dict]]) -> None:
        self._file_path = file_path
        self._seed = seed
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            return self.fallback(exc)
        if not isinstance(records, list):
            return self.fallback(TypeError(f"expected a list, got {type(records).__name__}"))
        return records

    def fallback(self, exc: Exception) -> list[dict]:
        logger.warning(
            "Could not read %s (%s); falling back to seed data", self._file_path, exc
        )
        return self._seed()

    def persist(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self.persist(self._seed())
