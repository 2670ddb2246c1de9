import pytest

from alfred_todoist.logger import LOG_LEVELS, logger, setup_logging
from alfred_todoist.settings_schema import LOG_LEVEL_NAMES


@pytest.fixture
def messages():
    captured = []
    yield captured
    setup_logging("error")


def test_every_log_level_setting_is_mapped():
    assert set(LOG_LEVELS) == set(LOG_LEVEL_NAMES)


def test_warn_level(messages):
    setup_logging("warn", sink=messages.append)
    logger.info("hidden")
    logger.warning("shown")
    assert len(messages) == 1
    assert "shown" in messages[0]


def test_trace_level(messages):
    setup_logging("trace", sink=messages.append)
    logger.trace("very detailed")
    assert len(messages) == 1


def test_silent_level(messages):
    setup_logging("silent", sink=messages.append)
    logger.error("nobody listens")
    assert messages == []


def test_log_dir_gets_a_file(tmp_path, messages):
    setup_logging("debug", log_dir=tmp_path / "logs", sink=messages.append)
    logger.debug("to file")
    logger.complete()
    assert list((tmp_path / "logs").glob("*.log"))


def test_unknown_level():
    with pytest.raises(ValueError):
        setup_logging("verbose")
