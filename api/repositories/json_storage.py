"""
JSON file persistence adapter for the employee store.

The store never touches the file: the app lifespan calls ``load`` once at
startup to seed it and ``save`` once at shutdown with its snapshot.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping
import json
import logging

from api.core.config import DEFAULT_DATA_FILE

logger = logging.getLogger(__name__)


class EmployeeFileStorage:
    """Reads/writes the whole employee set as a JSON array."""

    def __init__(self, path: Path | str = DEFAULT_DATA_FILE) -> None:
        self.path = Path(path)

    def _ensure_data_file(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.write_text("[]", encoding="utf-8")

    def load(self) -> list[dict]:
        """Return the persisted records, or [] when the file is missing/corrupt."""
        try:
            self._ensure_data_file()
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as exc:
            logger.error("Error loading employees from %s: %s", self.path, exc)
            return []
        if not isinstance(data, list):
            logger.error("Error loading employees from %s: expected a JSON array", self.path)
            return []
        records = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                logger.warning("Ignoring entry %d in %s: not an object", index, self.path)
                continue
            records.append(item)
        return records

    def save(self, records: Iterable[Mapping]) -> None:
        """Write every record; failures are logged, never raised."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps([dict(r) for r in records], ensure_ascii=False, indent=2)
            self.path.write_text(payload, encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Error saving employees to %s: %s", self.path, exc)
            return
        logger.info("Saved employees to %s", self.path)
