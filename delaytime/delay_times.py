"""Delay times for every note value and rhythmic feel at a given tempo.

A quarter note lasts 60000 / bpm milliseconds. Every other cell scales that
by the note length (in quarter notes) and the modifier, and the Hertz value
is the reciprocal of the period, so ``ms * hz == 1000`` for any cell.
"""
from enum import Enum
from typing import Dict, Tuple
import math


class NoteValue(Enum):
    WHOLE = ("1", 4.0)
    HALF = ("1/2", 2.0)
    QUARTER = ("1/4", 1.0)
    EIGHTH = ("1/8", 0.5)
    SIXTEENTH = ("1/16", 0.25)
    THIRTY_SECOND = ("1/32", 0.125)
    SIXTY_FOURTH = ("1/64", 0.0625)
    HUNDRED_TWENTY_EIGHTH = ("1/128", 0.03125)

    def __init__(self, label: str, beats: float):
        self.label = label
        self.beats = beats  # quarter note = 1.0

    def __str__(self):
        return self.label


class RhythmicModifier(Enum):
    NORMAL = ("Normal", 1.0)
    DOTTED = ("Dotted", 1.5)
    TRIPLET = ("Triplet", 2.0 / 3.0)

    def __init__(self, label: str, scale: float):
        self.label = label
        self.scale = scale

    def __str__(self):
        return self.label


class Unit(Enum):
    MILLISECONDS = "ms"
    HERTZ = "Hz"

    @property
    def suffix(self) -> str:
        return self.value

    def __str__(self):
        return self.value


# Display order, coarse to fine
NOTE_VALUES = list(NoteValue)
RHYTHMIC_MODIFIERS = list(RhythmicModifier)

DelayTimeTable = Dict[Tuple[RhythmicModifier, NoteValue], float]


def is_usable_tempo(tempo) -> bool:
    try:
        return math.isfinite(tempo) and tempo > 0
    except TypeError:
        return False


def compute(tempo: float, note: NoteValue, modifier: RhythmicModifier, unit: Unit) -> float:
    """Delay value of a single cell. ``tempo`` must be positive and finite."""
    if not is_usable_tempo(tempo):
        raise ValueError(f"tempo must be a positive finite number, got {tempo!r}")
    if unit is Unit.MILLISECONDS:
        return (60000.0 / tempo) * note.beats * modifier.scale
    return tempo / (60.0 * note.beats * modifier.scale)


def compute_table(tempo: float, unit: Unit) -> DelayTimeTable:
    """All 24 cells keyed by (modifier, note)."""
    return {
        (modifier, note): compute(tempo, note, modifier, unit)
        for modifier in RHYTHMIC_MODIFIERS
        for note in NOTE_VALUES
    }
