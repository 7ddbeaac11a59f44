import logging

import pytest

from address_directory.app.core.config import Settings
from address_directory.app.core.logging_config import HANDLER_PREFIX, resolve_level, setup_logging


@pytest.fixture
def target():
    logger = logging.getLogger("address_directory.tests.logging")
    logger.propagate = False
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def _owned(logger):
    return [h.get_name() for h in logger.handlers if (h.get_name() or "").startswith(HANDLER_PREFIX)]


@pytest.mark.parametrize(
    "settings, expected",
    [
        (Settings(log_level="WARNING", debug=False), logging.WARNING),
        (Settings(log_level="debug", debug=False), logging.DEBUG),
        (Settings(log_level="no-such-level", debug=False), logging.INFO),
        (Settings(log_level="ERROR", debug=True), logging.DEBUG),
    ],
)
def test_resolve_level(settings, expected):
    assert resolve_level(settings) == expected


def test_setup_logging_applies_level_from_settings(target):
    logger = setup_logging(Settings(log_level="ERROR", debug=False), target)

    assert logger is target
    assert target.level == logging.ERROR
    assert _owned(target) == [f"{HANDLER_PREFIX}.console"]


def test_setup_logging_does_not_stack_handlers(target):
    settings = Settings(log_level="INFO")

    setup_logging(settings, target)
    setup_logging(settings, target)

    assert _owned(target) == [f"{HANDLER_PREFIX}.console"]


def test_setup_logging_keeps_foreign_handlers(target):
    foreign = logging.NullHandler()
    target.addHandler(foreign)

    setup_logging(Settings(), target)

    assert foreign in target.handlers
    assert len(target.handlers) == 2


def test_setup_logging_writes_to_log_file(target, tmp_path):
    log_file = tmp_path / "directory.log"
    settings = Settings(log_level="INFO", log_file=str(log_file))

    setup_logging(settings, target)
    setup_logging(settings, target)
    target.info("Created address record with id: %s", 7)
    for handler in target.handlers:
        handler.flush()

    assert len(_owned(target)) == 2
    contents = log_file.read_text(encoding="utf-8")
    assert "[INFO] address_directory.tests.logging: Created address record with id: 7" in contents
