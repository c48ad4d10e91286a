import logging

import pytest

from assetpack.reporting import PlainReporter, set_reporter, set_verbosity


@pytest.fixture(autouse=True)
def _reset_reporting():
    set_reporter(PlainReporter(use_color=False))
    set_verbosity(0)
    yield
    logger = logging.getLogger("assetpack")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
