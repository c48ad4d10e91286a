from __future__ import annotations

import os
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from .base import Reporter, TaskStatus, TaskRecord, format_stats, get_verbosity

_STATUS_ICON = {
    TaskStatus.SUCCESS: "[green]✔[/]",
    TaskStatus.FAILED: "[red]✖[/]",
}


class RichReporter(Reporter):
    """Progress bars and colored messages on a ``rich`` console (stderr)."""

    supports_progress = True

    def __init__(self, console: Console | None = None):
        super().__init__()
        self.console = console or Console(
            stderr=True, highlight=False, soft_wrap=False
        )
        self._transient = os.getenv(
            "ASSETPACK_PROGRESS_TRANSIENT", "0"
        ).lower() in ("1", "true", "yes")
        self.progress: Progress | None = None
        self._task_ids: Dict[str, TaskID] = {}
        self._completions: List[str] = []

    def _ensure_progress(self) -> Progress:
        if self.progress is None:
            self.progress = Progress(
                SpinnerColumn(spinner_name="dots"),
                TextColumn("{task.description}"),
                BarColumn(bar_width=None),
                TextColumn("{task.completed}/{task.total}"),
                TimeElapsedColumn(),
                TextColumn("[dim]{task.fields[current]}"),
                transient=self._transient,
                console=self.console,
                expand=True,
            )
            self.progress.start()
        return self.progress

    def _stop_progress(self) -> None:
        if self.progress is None:
            return
        try:
            self.progress.stop()
        finally:
            self.progress = None
            self._task_ids.clear()
            if self._completions:
                self.console.print("\n".join(self._completions))
                self._completions.clear()

    def _on_start(self, rec: TaskRecord) -> None:
        # tasks without a known total are rendered as a rule, not a bar
        if rec.total is None:
            self.console.rule(escape(rec.name))
            return
        progress = self._ensure_progress()
        self._task_ids[rec.task_id] = progress.add_task(
            escape(rec.name), total=rec.total, current=""
        )

    def _on_advance(self, rec: TaskRecord, meta: Dict[str, Any]) -> None:
        rid = self._task_ids.get(rec.task_id)
        if rid is not None and self.progress is not None:
            self.progress.update(
                rid,
                completed=rec.completed,
                current=escape(str(meta.get("current_item", ""))),
            )

    def _on_end(self, rec: TaskRecord, final_meta: Dict[str, Any]) -> None:
        rid = self._task_ids.pop(rec.task_id, None)
        if rid is not None and self.progress is not None and rec.total is not None:
            self.progress.update(rid, completed=rec.total, current="")
        line = (
            f"{_STATUS_ICON.get(rec.status, '')} {escape(rec.name)}"
            f"{rec.progress_label} ({rec.duration:.2f}s)"
            f"{escape(format_stats(rec.meta))}"
        )
        if self._transient and self.progress is not None:
            self._completions.append(line)
        else:
            self.console.print(line)
        if not self.has_open_tasks:
            self._stop_progress()

    def status(self, message: str, **fields: Any) -> None:
        self.console.print(f"[green]INFO[/]: {escape(message)}")

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        if get_verbosity() < level:
            return
        self.console.print(f"[cyan]VERB{level}[/]: {escape(message)}")

    def error(self, message: str, **fields: Any) -> None:
        self.console.print(f"[bold red]ERROR[/]: {escape(message)}")

    def warning(self, message: str, **fields: Any) -> None:
        self.console.print(f"[yellow]WARN[/]: {escape(message)}")

    def section(self, title: str) -> None:
        self.console.rule(escape(title))

    def flush(self) -> None:
        self._stop_progress()
