from __future__ import annotations

import sys
from typing import Any, Dict
from .base import Reporter, TaskStatus, TaskRecord, format_stats, get_verbosity

ICONS = {
    TaskStatus.SUCCESS: "✔",
    TaskStatus.FAILED: "✖",
}


class PlainReporter(Reporter):
    """Plain deterministic reporter with minimal icons and optional color."""

    def __init__(self, stream=None, use_color: bool | None = None):
        super().__init__()
        self._stream = stream
        self.use_color = (
            use_color
            if use_color is not None
            else getattr(self.stream, "isatty", lambda: False)()
        )

    @property
    def stream(self):
        # resolved per write so a swapped sys.stderr is honoured
        return self._stream if self._stream is not None else sys.stderr

    def _c(self, code: str, text: str) -> str:
        if not self.use_color:
            return text
        return f"\x1b[{code}m{text}\x1b[0m"

    def _write(self, line: str) -> None:
        self.stream.write(line + "\n")

    def _on_advance(self, rec: TaskRecord, meta: Dict[str, Any]) -> None:
        # per-file lines only when asked for
        if get_verbosity() < 1:
            return
        item = meta.get("current_item") or f"item#{rec.completed}"
        total = rec.total if rec.total is not None else "?"
        self._write(f"   · {rec.name}: {item} ({rec.completed}/{total})")

    def _on_end(self, rec: TaskRecord, final_meta: Dict[str, Any]) -> None:
        icon = ICONS.get(rec.status, "?")
        self._write(
            f" {icon} {rec.name}{rec.progress_label} ({rec.duration:.2f}s)"
            f"{format_stats(rec.meta)}"
        )

    def status(self, message: str, **fields: Any) -> None:
        self._write(f"{self._c('32', 'INFO')}: {message}")

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        if get_verbosity() < level:
            return
        self._write(f"{self._c('36', f'VERB{level}')}: {message}")

    def error(self, message: str, **fields: Any) -> None:
        self._write(f"{self._c('31', 'ERROR')}: {message}")

    def warning(self, message: str, **fields: Any) -> None:
        self._write(f"{self._c('33', 'WARN')}: {message}")

    def section(self, title: str) -> None:
        self._write(f"\n[{title}]")
