import pytest

from delaytime.__main__ import build_parser, config_from_args
from delaytime.config import CalculatorConfig
from delaytime.delay_times import Unit


def test_defaults():
    config = config_from_args(build_parser().parse_args([]))
    assert config == CalculatorConfig()
    assert config.tempo == 120.0
    assert config.unit is Unit.MILLISECONDS
    assert config.tap_reset_ms == 2000
    assert config.tap_window == 8


def test_options():
    args = build_parser().parse_args(
        ["--tempo", "87.5", "--unit", "hz", "--tap-timeout", "1500", "--tap-window", "4"]
    )
    config = config_from_args(args)
    assert config == CalculatorConfig(tempo=87.5, unit=Unit.HERTZ, tap_reset_ms=1500, tap_window=4)


@pytest.mark.parametrize(
    "argv",
    [
        ["--tempo", "0"],
        ["--tempo", "fast"],
        ["--unit", "s"],
        ["--tap-window", "0"],
        ["--tap-timeout", "2.5"],
    ],
)
def test_invalid_options_exit(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(argv)
    assert exc.value.code == 2


@pytest.mark.parametrize(
    "kwargs",
    [
        {"tempo": 0.0},
        {"tempo": float("nan")},
        {"tap_reset_ms": 0},
        {"tap_window": 0},
    ],
)
def test_invalid_config(kwargs):
    with pytest.raises(ValueError):
        CalculatorConfig(**kwargs)


def test_config_accepts_unit_suffix():
    assert CalculatorConfig(unit="Hz").unit is Unit.HERTZ
