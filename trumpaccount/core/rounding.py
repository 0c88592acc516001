"""Half-up rounding shared by every calculator."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
BASIS = Decimal("0.0001")


def _to_decimal(value: float) -> Decimal:
    # repr keeps the shortest round-tripping form, so 2.675 stays 2.675
    return Decimal(repr(float(value)))


def round_cents(value: float) -> float:
    """Round a currency amount to the cent, halves away from zero."""
    return float(_to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


def round_rate(value: float) -> float:
    """Round a fraction to four decimal places (hundredths of a percent)."""
    return float(_to_decimal(value).quantize(BASIS, rounding=ROUND_HALF_UP))


def round_to_increment(value: float, increment: float) -> float:
    """Round to the nearest multiple of ``increment`` (IRS-style $50 steps)."""
    step = _to_decimal(increment)
    units = (_to_decimal(value) / step).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float(units * step)
