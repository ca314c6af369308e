from decimal import Decimal

import pytest

from delaytime.delay_times import Unit
from delaytime.formatting import (
    format_absent,
    format_raw,
    format_tempo,
    format_value,
    parse_tempo,
    round_half_away,
)


def test_format_value_rounds_half_away_from_zero():
    assert format_value(125.0005, Unit.MILLISECONDS) == "125.001 ms"
    assert format_value(125.0004, Unit.MILLISECONDS) == "125.000 ms"


def test_format_value_always_shows_three_digits():
    assert format_value(500.0, Unit.MILLISECONDS) == "500.000 ms"
    assert format_value(2.0, Unit.HERTZ) == "2.000 Hz"
    assert format_value(333.3333333333333, Unit.MILLISECONDS) == "333.333 ms"
    assert format_value(0.0625, Unit.HERTZ) == "0.063 Hz"


def test_format_value_large_numbers():
    assert format_value(1.5e30, Unit.MILLISECONDS) == "1500000000000000000000000000000.000 ms"


@pytest.mark.parametrize(
    "value, digits, expected",
    [
        (0.0005, 3, "0.001"),
        (-0.0005, 3, "-0.001"),
        (2.5, 0, "3"),
        (-2.5, 0, "-3"),
        (1.2344, 3, "1.234"),
    ],
)
def test_round_half_away(value, digits, expected):
    assert round_half_away(value, digits) == Decimal(expected)


def test_format_absent():
    assert format_absent() == "N/A"


@pytest.mark.parametrize(
    "tempo, expected",
    [
        (120.0, "120"),
        (120.5, "120.5"),
        (133.33333333, "133.333"),
        (99.9996, "100"),
        (0.5, "0.5"),
        (-3.0, "-3"),
    ],
)
def test_format_tempo(tempo, expected):
    assert format_tempo(tempo) == expected


@pytest.mark.parametrize("text", ["abc", "-5", "0", "", "   ", "nan", "inf", "-inf", "12O", None])
def test_parse_tempo_rejects(text):
    assert parse_tempo(text) is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("120", 120.0),
        (" 98.5 ", 98.5),
        ("1e2", 100.0),
        ("0.25", 0.25),
    ],
)
def test_parse_tempo(text, expected):
    assert parse_tempo(text) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (750.0, "750"),
        (333.3333333333333, "333.3333333333333"),
        (15.625, "15.625"),
        (2.5e20, "250000000000000000000"),
        (-0.0, "0"),
    ],
)
def test_format_raw(value, expected):
    assert format_raw(value) == expected
