from __future__ import annotations

from datetime import UTC, datetime

import pytest

from mapkit_token.duration import (
    DAY,
    HOUR,
    MINUTE,
    SECOND,
    YEAR,
    format_duration,
    parse_duration,
    resolve_timestamp,
)
from mapkit_token.errors import ConfigurationError

NOW = datetime(2024, 1, 1, tzinfo=UTC)
NOW_SECONDS = 1704067200


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("0", 0),
        ("100", 100),
        ("250ms", 250),
        ("10s", 10 * SECOND),
        ("5 minutes", 5 * MINUTE),
        ("1hr", HOUR),
        ("1.5h", 1.5 * HOUR),
        ("2d", 2 * DAY),
        ("364d", 364 * DAY),
        ("1w", 7 * DAY),
        ("1y", YEAR),
        ("2 Years", 2 * YEAR),
        ("-1h", -HOUR),
        (".5s", 500),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "1 fortnight", "h", "1" * 101])
def test_parse_duration_rejects_invalid(text):
    with pytest.raises(ConfigurationError):
        parse_duration(text)


def test_resolve_timestamp_now():
    assert resolve_timestamp("0", NOW) == NOW_SECONDS


def test_resolve_timestamp_default_expiry():
    assert resolve_timestamp("364d", NOW) == NOW_SECONDS + 364 * 86400


def test_resolve_timestamp_rounds_to_nearest_second():
    assert resolve_timestamp("1500", NOW) == NOW_SECONDS + 2
    assert resolve_timestamp("1499", NOW) == NOW_SECONDS + 1


@pytest.mark.parametrize(
    ("ms", "expected"),
    [
        (364 * DAY, "364 days"),
        (DAY, "1 day"),
        (HOUR, "1 hour"),
        (1.5 * HOUR, "2 hours"),
        (30 * MINUTE, "30 minutes"),
        (SECOND, "1 second"),
        (500, "500 ms"),
    ],
)
def test_format_duration(ms, expected):
    assert format_duration(ms) == expected
