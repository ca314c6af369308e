from dataclasses import dataclass

from .delay_times import Unit, is_usable_tempo

DEFAULT_TEMPO = 120.0
DEFAULT_UNIT = Unit.MILLISECONDS

# Tap tempo: a gap longer than this starts a new session
DEFAULT_TAP_RESET_MS = 2000
# Tap tempo: number of recent intervals averaged
DEFAULT_TAP_WINDOW = 8

ROUND_LIMIT = 3
NOT_APPLICABLE = "N/A"

WINDOW_TITLE = "Delay Time Calculator"
INITIAL_WINDOW_SIZE = (650, 600)
SPACING = 15


@dataclass
class CalculatorConfig:
    """Startup settings for the calculator window."""
    tempo: float = DEFAULT_TEMPO
    unit: Unit = DEFAULT_UNIT
    tap_reset_ms: int = DEFAULT_TAP_RESET_MS
    tap_window: int = DEFAULT_TAP_WINDOW

    def __post_init__(self):
        if not is_usable_tempo(self.tempo):
            raise ValueError(f"tempo must be a positive finite number, got {self.tempo}")
        if self.tap_reset_ms <= 0:
            raise ValueError(f"tap_reset_ms must be positive, got {self.tap_reset_ms}")
        if self.tap_window < 1:
            raise ValueError(f"tap_window must be at least 1, got {self.tap_window}")
        self.unit = Unit(self.unit)
