from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext, localcontext

TWOPLACES = Decimal("0.01")
THREEPLACES = Decimal("0.001")
FOURPLACES = Decimal("0.0001")
ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Working precision for charge arithmetic. Inputs are capped below 10**12, so
# products of two inputs and a percentage fit with room for the fraction.
MONEY_PREC = 50
MAX_ADJUSTED = 11


def money_context():
    """Local decimal context wide enough for charge arithmetic and display rounding."""
    ctx = getcontext().copy()
    ctx.prec = MONEY_PREC
    return localcontext(ctx)


def d(val) -> Decimal:
    """Coerce incoming values to Decimal safely."""
    if isinstance(val, Decimal):
        return val
    return Decimal(str(val))


def nz(val) -> Decimal:
    """Numeric-or-zero: blanks, None, NaN, infinities, junk and values of a trillion or more all become 0."""
    if val is None or isinstance(val, bool):
        return ZERO
    if isinstance(val, str) and not val.strip():
        return ZERO
    try:
        out = d(val)
    except (InvalidOperation, TypeError, ValueError):
        return ZERO
    if not out.is_finite() or (out and out.adjusted() > MAX_ADJUSTED):
        return ZERO
    return out


def _quantize(amount, places: Decimal) -> Decimal:
    with money_context():
        return d(amount).quantize(places, rounding=ROUND_HALF_UP)


def q2(amount) -> Decimal:
    """Round half-up to 2 decimal places (display rounding)."""
    return _quantize(amount, TWOPLACES)


def q3(amount) -> Decimal:
    """Weights are kept to the gram."""
    return _quantize(amount, THREEPLACES)


def q4(amount) -> Decimal:
    return _quantize(amount, FOURPLACES)


def parse_bool(value):
    """Parse a query-string flag. Returns None when the value is not a recognised boolean."""
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    text = str(value).strip().lower()
    if text in ("true", "1", "yes", "on"):
        return True
    if text in ("false", "0", "no", "off"):
        return False
    return None
