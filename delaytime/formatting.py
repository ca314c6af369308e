from decimal import Context, Decimal, ROUND_HALF_UP

from .config import NOT_APPLICABLE, ROUND_LIMIT
from .delay_times import Unit, is_usable_tempo


def round_half_away(value: float, digits: int = ROUND_LIMIT) -> Decimal:
    """Round to `digits` places, halves away from zero.

    Works on the shortest decimal repr of the float so 125.0005 rounds up
    like it reads, instead of down like its binary value would.
    """
    exact = Decimal(repr(float(value)))
    # enough precision for every integer digit of large values
    context = Context(prec=max(28, exact.adjusted() + digits + 2))
    return exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP, context=context)


def format_value(value: float, unit: Unit) -> str:
    return f"{round_half_away(value, ROUND_LIMIT)} {unit.suffix}"


def format_absent() -> str:
    return NOT_APPLICABLE


def _plain(number: Decimal) -> str:
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_tempo(tempo: float) -> str:
    """Tempo text for the input field: 120 -> "120", 133.3333 -> "133.333"."""
    return _plain(round_half_away(tempo, ROUND_LIMIT))


def format_raw(value: float) -> str:
    """Unrounded value as pasted text: 750.0 -> "750", never in exponent form."""
    return _plain(Decimal(repr(float(value))))


def parse_tempo(text: str) -> float | None:
    try:
        tempo = float(text.strip())
    except (AttributeError, TypeError, ValueError):
        return None
    if not is_usable_tempo(tempo):
        return None
    return tempo
