"""Tests for the package logging setup."""

import logging

import pytest

from polybevel.builders import build_box
from polybevel.errors import RadiusTooLargeError
from polybevel.logging_config import setup_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logging.getLogger("polybevel").handlers.clear()


def test_single_handler():
    setup_logging()
    logger = setup_logging(verbose=True)
    assert logger.name == "polybevel"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_quiet_by_default():
    assert setup_logging().level == logging.WARNING


def test_warnings_reach_stderr(capsys):
    setup_logging()
    with pytest.raises(RadiusTooLargeError):
        build_box().round(1.0)
    err = capsys.readouterr().err
    assert "WARNING polybevel.bevel: Radius 1 rejected" in err
