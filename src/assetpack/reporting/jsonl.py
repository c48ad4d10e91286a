from __future__ import annotations

import json
import sys
from typing import Any, Dict
from .base import Reporter, TaskRecord, get_verbosity


class JsonLinesReporter(Reporter):
    """Machine-readable JSON lines reporter (one event per line)."""

    def __init__(self, stream=None):
        super().__init__()
        self._stream = stream

    @property
    def stream(self):
        return self._stream if self._stream is not None else sys.stdout

    def _emit(self, obj: dict) -> None:
        self.stream.write(json.dumps(obj, sort_keys=True, default=str) + "\n")

    def _on_start(self, rec: TaskRecord) -> None:
        self._emit(
            {
                "event": "task_start",
                "id": rec.task_id,
                "name": rec.name,
                "total": rec.total,
                **rec.meta,
            }
        )

    def _on_advance(self, rec: TaskRecord, meta: Dict[str, Any]) -> None:
        self._emit(
            {
                "event": "task_progress",
                "id": rec.task_id,
                "completed": rec.completed,
                **meta,
            }
        )

    def _on_end(self, rec: TaskRecord, final_meta: Dict[str, Any]) -> None:
        self._emit(
            {
                "event": "task_end",
                "id": rec.task_id,
                "status": rec.status.name.lower(),
                "completed": rec.completed,
                "duration": round(rec.duration, 4),
                **final_meta,
            }
        )

    def status(self, message: str, **fields: Any) -> None:
        self._emit({"event": "status", "message": message, **fields})

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        if get_verbosity() < level:
            return
        self._emit({"event": "verbose", "level": level, "message": message, **fields})

    def error(self, message: str, **fields: Any) -> None:
        self._emit({"event": "error", "message": message, **fields})

    def warning(self, message: str, **fields: Any) -> None:
        self._emit({"event": "warning", "message": message, **fields})

    def section(self, title: str) -> None:
        self._emit({"event": "section", "title": title})
