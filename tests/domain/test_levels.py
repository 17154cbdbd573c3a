from __future__ import annotations

import logging

import pytest

from lib_log_amqp.domain.levels import STANDARD_LEVELS, LogLevel


@pytest.mark.parametrize(
    "name, expected",
    [
        ("panic", LogLevel.PANIC),
        ("FATAL", LogLevel.FATAL),
        ("critical", LogLevel.FATAL),
        ("Error", LogLevel.ERROR),
        ("warn", LogLevel.WARNING),
        (" warning ", LogLevel.WARNING),
        ("info", LogLevel.INFO),
        ("debug", LogLevel.DEBUG),
        ("trace", LogLevel.TRACE),
    ],
)
def test_from_name_accepts_names_and_aliases(name: str, expected: LogLevel) -> None:
    assert LogLevel.from_name(name) is expected


def test_from_name_rejects_unknown_levels() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        LogLevel.from_name("loud")


@pytest.mark.parametrize(
    "level, expected",
    [
        (logging.DEBUG, LogLevel.DEBUG),
        (logging.INFO, LogLevel.INFO),
        (logging.WARNING, LogLevel.WARNING),
        (logging.ERROR, LogLevel.ERROR),
        (logging.CRITICAL, LogLevel.FATAL),
        (1, LogLevel.TRACE),
        (35, LogLevel.WARNING),
        (99, LogLevel.FATAL),
    ],
)
def test_from_python_level_snaps_to_known_levels(level: int, expected: LogLevel) -> None:
    assert LogLevel.from_python_level(level) is expected


@pytest.mark.parametrize("level", [LogLevel.FATAL, LogLevel.PANIC])
def test_fatal_and_panic_map_to_critical(level: LogLevel) -> None:
    assert level.to_python_level() == logging.CRITICAL


def test_from_numeric_rejects_non_standard_values() -> None:
    with pytest.raises(ValueError, match="Unsupported log level numeric"):
        LogLevel.from_numeric(15)


def test_standard_levels_are_ordered_most_severe_first() -> None:
    assert [level.severity for level in STANDARD_LEVELS] == ["panic", "fatal", "error", "warning", "info", "debug"]
