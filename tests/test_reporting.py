import io

import pytest
from rich.console import Console

from assetpack.reporting import (
    JsonLinesReporter,
    PlainReporter,
    RichReporter,
    SilentReporter,
    TaskStatus,
    make_reporter,
    set_reporter,
    set_verbosity,
    task,
)


def test_plain_task_line():
    buf = io.StringIO()
    rep = PlainReporter(stream=buf, use_color=False)
    rep.start_task("t", "Read payloads", total=2)
    rep.advance("t", current_item="a.png")
    rep.advance("t", current_item="b.png")
    rep.end_task("t", files=2, bytes=20)
    out = buf.getvalue()
    assert "Read payloads 2/2" in out
    assert "[files=2 bytes=20]" in out
    # per-item lines are verbose only
    assert "a.png" not in out


def test_plain_verbose_items():
    buf = io.StringIO()
    rep = PlainReporter(stream=buf, use_color=False)
    set_verbosity(1)
    rep.start_task("t", "Write payloads", total=1)
    rep.advance("t", current_item="a.png")
    assert "a.png (1/1)" in buf.getvalue()


def test_task_context_marks_failure():
    buf = io.StringIO()
    set_reporter(PlainReporter(stream=buf, use_color=False))
    with pytest.raises(RuntimeError):
        with task("t", "Failing", total=1):
            raise RuntimeError("boom")
    assert "✖ Failing" in buf.getvalue()


def test_rich_reporter_renders_without_markup_errors():
    buf = io.StringIO()
    rep = RichReporter(console=Console(file=buf, force_terminal=False, width=120))
    rep.status("tags: [rocks] [/weird]")
    rep.warning("careful")
    rep.start_task("t", "Read payloads", total=1)
    rep.advance("t", current_item="textures/objects/[x].png")
    rep.end_task("t", files=1, bytes=3)
    rep.flush()
    out = buf.getvalue()
    assert "[rocks] [/weird]" in out
    assert "files=1 bytes=3" in out


def test_json_lines_status():
    buf = io.StringIO()
    rep = JsonLinesReporter(stream=buf)
    rep.status("hello")
    rep.start_task("t", "x", total=None)
    rep.end_task("t", TaskStatus.FAILED)
    lines = buf.getvalue().splitlines()
    assert '"message": "hello"' in lines[0]
    assert '"status": "failed"' in lines[-1]


def test_make_reporter():
    assert isinstance(make_reporter("silent"), SilentReporter)
    assert isinstance(make_reporter("json"), JsonLinesReporter)
    assert isinstance(make_reporter("rich", tty=False), PlainReporter)
    assert isinstance(make_reporter("rich", tty=True), RichReporter)
    assert isinstance(make_reporter("plain"), PlainReporter)


def test_logging_routes_to_reporter():
    from assetpack.logging import configure_logging, get_logger

    buf = io.StringIO()
    set_reporter(PlainReporter(stream=buf, use_color=False))
    configure_logging(0)
    logger = get_logger()
    logger.debug("hidden")
    logger.info("shown %d", 1)
    logger.warning("careful")
    logger.error("broken")
    out = buf.getvalue()
    assert "hidden" not in out
    assert "INFO: shown 1" in out
    assert "WARN: careful" in out
    assert "ERROR: broken" in out


def test_task_bookkeeping_is_shared_by_backends():
    rep = SilentReporter()
    rep.start_task("t", "Extract files", total=2)
    assert rep.has_open_tasks
    rep.advance("unknown")
    rep.advance("t", current_item="a.png")
    rep.end_task("t")
    assert not rep.has_open_tasks
    # ending twice is harmless
    rep.end_task("t")
