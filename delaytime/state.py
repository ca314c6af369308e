"""Calculator state and the intents that change it.

The window never mutates the state directly. It turns button presses and
key presses into intents and hands them to :func:`update`, which is plain
Python and can be exercised without a display.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
import logging
import math

from .config import DEFAULT_TEMPO, CalculatorConfig
from .delay_times import (
    NOTE_VALUES,
    RHYTHMIC_MODIFIERS,
    NoteValue,
    RhythmicModifier,
    Unit,
    compute_table,
)
from .formatting import (
    format_absent,
    format_raw,
    format_tempo,
    format_value,
    parse_tempo,
    round_half_away,
)
from .utils import TapTempo

logger = logging.getLogger(__name__)


@dataclass
class CalculatorState:
    tap_tempo: TapTempo = field(default_factory=TapTempo)
    tempo_text: str = format_tempo(DEFAULT_TEMPO)
    unit: Unit = Unit.MILLISECONDS

    @classmethod
    def from_config(cls, config: CalculatorConfig) -> "CalculatorState":
        return cls(
            tap_tempo=TapTempo(reset_ms=config.tap_reset_ms, window=config.tap_window),
            tempo_text=format_tempo(config.tempo),
            unit=config.unit,
        )

    def tempo(self) -> Optional[float]:
        return parse_tempo(self.tempo_text)


# Intents

@dataclass(frozen=True)
class Tap:
    now: Optional[float] = None  # monotonic seconds, None reads the clock


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class EditTempoText:
    text: str


@dataclass(frozen=True)
class SubmitTempo:
    pass


@dataclass(frozen=True)
class Scale:
    factor: float


@dataclass(frozen=True)
class Offset:
    delta: float


@dataclass(frozen=True)
class RoundTempo:
    pass


@dataclass(frozen=True)
class SelectUnit:
    unit: Unit


@dataclass(frozen=True)
class CopyValue:
    value: float


HALVE = Scale(0.5)
DOUBLE = Scale(2.0)

# Toolkit independent key names; the window translates its key events to these
KEY_BINDINGS = {
    "1": HALVE,
    "2": DOUBLE,
    "h": SelectUnit(Unit.HERTZ),
    "m": SelectUnit(Unit.MILLISECONDS),
    "r": Reset(),
    "t": Tap(),
    "up": Offset(1.0),
    "down": Offset(-1.0),
    "right": Offset(5.0),
    "left": Offset(-5.0),
    "space": RoundTempo(),
}

# Keys still handled while the tempo field has keyboard focus
TEXT_FIELD_KEYS = ("up", "down")


def _modify_tempo(state: CalculatorState, transform):
    tempo = state.tempo()
    if tempo is None:
        return
    tempo = transform(tempo)
    if not math.isfinite(tempo):
        logger.warning("Ignoring tempo change that overflows: %r", tempo)
        return
    state.tempo_text = format_tempo(tempo)


def update(state: CalculatorState, intent) -> Optional[str]:
    """Apply an intent to the state in place.

    Returns the clipboard text for CopyValue and None for everything else.
    """
    if isinstance(intent, Tap):
        tempo = state.tap_tempo.tap(intent.now)
        state.tempo_text = format_absent() if tempo is None else format_tempo(tempo)
    elif isinstance(intent, Reset):
        state.tap_tempo.reset()
    elif isinstance(intent, EditTempoText):
        state.tempo_text = intent.text
    elif isinstance(intent, SubmitTempo):
        _modify_tempo(state, lambda t: t)
    elif isinstance(intent, Scale):
        _modify_tempo(state, lambda t: t * intent.factor)
    elif isinstance(intent, Offset):
        _modify_tempo(state, lambda t: t + intent.delta)
    elif isinstance(intent, RoundTempo):
        _modify_tempo(state, lambda t: float(round_half_away(t, 0)))
    elif isinstance(intent, SelectUnit):
        state.unit = Unit(intent.unit)
    elif isinstance(intent, CopyValue):
        return format_raw(intent.value)
    else:
        raise TypeError(f"Unknown intent: {intent!r}")
    return None


Cell = Tuple[str, Optional[float]]


def table_cells(state: CalculatorState) -> Dict[Tuple[RhythmicModifier, NoteValue], Cell]:
    """Display text and raw value per cell; the value is None when absent."""
    tempo = state.tempo()
    absent = (format_absent(), None)
    if tempo is None:
        return {(m, n): absent for m in RHYTHMIC_MODIFIERS for n in NOTE_VALUES}

    cells = {}
    for key, value in compute_table(tempo, state.unit).items():
        # tempos near the float limits overflow a cell
        if math.isfinite(value) and value > 0:
            cells[key] = (format_value(value, state.unit), value)
        else:
            logger.debug("Cell %s/%s out of range at %r BPM", key[0], key[1], tempo)
            cells[key] = absent
    return cells
