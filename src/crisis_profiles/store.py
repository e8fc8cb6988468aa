"""Crisis record stores: in-memory and JSON Lines file."""

import asyncio
import copy
import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryCrisisStore:
    """Keep records in a dict keyed by generated id.

    Records are deep-copied on the way in and out so callers can never
    mutate what was persisted.
    """

    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}

    async def create(self, record: dict[str, Any]) -> str:
        record_id = str(uuid.uuid4())
        self._records[record_id] = copy.deepcopy(record)
        return record_id

    async def get(self, record_id: str) -> dict[str, Any] | None:
        record = self._records.get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def __len__(self) -> int:
        return len(self._records)


class JsonlCrisisStore:
    """Append records as JSON lines to a file, one ``{"id": ..., "record": ...}`` per line.

    Args:
        path: File to append to. Parent directories are created on first write.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def create(self, record: dict[str, Any]) -> str:
        record_id = str(uuid.uuid4())
        line = json.dumps({"id": record_id, "record": record}, ensure_ascii=False) + "\n"
        # File writes run off the event loop
        await asyncio.to_thread(self._append, line)
        logger.debug(f"Wrote record {record_id} to {self._path}")
        return record_id

    def _append(self, line: str) -> None:
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as f:
                f.write(line)

    async def get(self, record_id: str) -> dict[str, Any] | None:
        for entry in self._entries():
            if entry["id"] == record_id:
                return entry["record"]
        return None

    def _entries(self) -> list[dict[str, Any]]:
        if not self._path.exists():
            return []
        with self._path.open(encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]

    def __len__(self) -> int:
        return len(self._entries())
