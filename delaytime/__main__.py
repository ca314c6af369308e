import argparse
import logging
import sys

from .config import (
    DEFAULT_TAP_RESET_MS,
    DEFAULT_TAP_WINDOW,
    DEFAULT_TEMPO,
    CalculatorConfig,
)
from .delay_times import Unit
from .formatting import parse_tempo

logger = logging.getLogger(__name__)

_UNITS = {"ms": Unit.MILLISECONDS, "hz": Unit.HERTZ}


def _tempo(text: str) -> float:
    tempo = parse_tempo(text)
    if tempo is None:
        raise argparse.ArgumentTypeError(f"not a positive tempo: {text!r}")
    return tempo


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="delaytime",
        description="Delay times for every note value at a tempo, with tap tempo.",
    )
    parser.add_argument("--tempo", type=_tempo, default=DEFAULT_TEMPO,
                        help=f"initial tempo in BPM (default {DEFAULT_TEMPO:g})")
    parser.add_argument("--unit", choices=sorted(_UNITS), default="ms",
                        help="initial unit (default ms)")
    parser.add_argument("--tap-timeout", type=_positive_int, default=DEFAULT_TAP_RESET_MS,
                        metavar="MS", help="gap that starts a new tap session")
    parser.add_argument("--tap-window", type=_positive_int, default=DEFAULT_TAP_WINDOW,
                        metavar="N", help="number of tap intervals averaged")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def config_from_args(args: argparse.Namespace) -> CalculatorConfig:
    return CalculatorConfig(
        tempo=args.tempo,
        unit=_UNITS[args.unit],
        tap_reset_ms=args.tap_timeout,
        tap_window=args.tap_window,
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))
    config = config_from_args(args)
    logger.info("Starting at %g BPM (%s)", config.tempo, config.unit)

    from PyQt5.QtWidgets import QApplication
    from .gui import MainWindow

    app = QApplication(sys.argv[:1])
    w = MainWindow(config)
    w.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
