from __future__ import annotations

from .base import Reporter


class SilentReporter(Reporter):
    """Keeps task bookkeeping but renders nothing (``-r silent``).

    Commands that print JSON to stdout (``inspect``, ``diff``) use it to
    keep their output machine readable.
    """
