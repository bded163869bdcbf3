"""Exact monetary arithmetic on integer cents.

Every monetary value in the engine is an ``int`` count of cents. ``parse`` is
the only place an untrusted decimal amount becomes cents; everything after that
is integer arithmetic, with ``decimal.Decimal`` used wherever a division or a
percentage has to be rounded.

Rounding policy is ROUND_HALF_UP throughout: an exact half rounds away from
zero, so 0.005 -> 1 cent and -0.005 -> -1 cent.
"""

from decimal import Decimal, DecimalException, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Iterable

from babel.numbers import format_currency

from finance_engine.domain.exceptions import AmountOutOfRangeError, InvalidAmountError

MAX_SAFE_INTEGER = 2**53 - 1

# Safe cents stay below 1e16, so major units never exceed 15 integer digits
MAX_MAJOR_EXPONENT = 15

CENTS_FACTOR = Decimal(100)

DEFAULT_CURRENCY = "MXN"
DEFAULT_LOCALE = "es_MX"


def is_safe_integer(value: object) -> bool:
    """True for ints (not bools) whose magnitude fits in 2**53 - 1"""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER


def assert_safe_integer(value: object, label: str) -> None:
    """Raise AmountOutOfRangeError unless ``value`` is a safe integer"""
    if not is_safe_integer(value):
        raise AmountOutOfRangeError(f"{label} is outside the safe integer range: {value!r}")


def round_half_up(value: Decimal, decimals: int = 0) -> Decimal:
    """Round a Decimal to ``decimals`` places, halves away from zero"""
    return value.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


def round_cents(value: Decimal) -> int:
    """Round a fractional cents amount to a whole, safe cents value"""
    cents = int(round_half_up(value))
    assert_safe_integer(cents, "Rounded amount")
    return cents


def _to_decimal(value: str | int | float | Decimal) -> Decimal:
    if value is None or isinstance(value, bool):
        raise InvalidAmountError(f"Invalid amount: {value!r}")

    if isinstance(value, Decimal):
        decimal_value = value
    elif isinstance(value, float):
        # Use the shortest repr so 19.99 means "19.99", not its binary expansion
        decimal_value = Decimal(repr(value))
    elif isinstance(value, (int, str)):
        if isinstance(value, str) and not value.strip():
            raise InvalidAmountError("Invalid amount: empty string")
        try:
            decimal_value = Decimal(value)
        except (InvalidOperation, ValueError) as e:
            raise InvalidAmountError(f"Invalid amount: {value!r}") from e
    else:
        raise InvalidAmountError(f"Invalid amount type: {type(value).__name__}")

    if not decimal_value.is_finite():
        raise InvalidAmountError(f"Invalid amount: {value!r}")

    return decimal_value


def parse(value: str | int | float | Decimal) -> int:
    """
    Convert a major-unit amount ("19.99", 19.99, Decimal("19.99")) to cents.

    Raises:
        InvalidAmountError: empty, None, non-numeric, NaN or infinite input
        AmountOutOfRangeError: the resulting cents are not a safe integer

    Example:
        parse("0.005") -> 1
        parse("0.0049") -> 0
        parse("-42.10") -> -4210
    """
    decimal_value = _to_decimal(value)
    if decimal_value.adjusted() > MAX_MAJOR_EXPONENT:
        raise AmountOutOfRangeError(f"Amount is outside the safe integer range: {value!r}")

    # Below 0.001 nothing can reach half a cent
    if decimal_value.adjusted() < -3:
        return 0

    try:
        # Wide enough that shifting by two places and rounding are both exact
        with localcontext() as ctx:
            ctx.prec = max(len(decimal_value.as_tuple().digits) + 3, 34)
            cents = int(round_half_up(decimal_value.scaleb(2)))
    except DecimalException as e:
        raise AmountOutOfRangeError(f"Amount is outside the safe integer range: {value!r}") from e
    assert_safe_integer(cents, "Amount")
    return cents


def to_major_units(cents: int) -> float:
    """Display-only conversion from cents to major units (3060 -> 30.6)"""
    assert_safe_integer(cents, "Cents")
    return float(Decimal(cents) / CENTS_FACTOR)


def _currency_pattern(min_fraction_digits: int, max_fraction_digits: int) -> str:
    if not 0 <= min_fraction_digits <= max_fraction_digits:
        raise ValueError(
            f"Invalid fraction digits: min={min_fraction_digits}, max={max_fraction_digits}"
        )
    pattern = "¤#,##0"
    if max_fraction_digits:
        optional = max_fraction_digits - min_fraction_digits
        pattern += "." + "0" * min_fraction_digits + "#" * optional
    return pattern


def format_amount(
    cents: int,
    currency: str = DEFAULT_CURRENCY,
    locale: str = DEFAULT_LOCALE,
    min_fraction_digits: int = 0,
    max_fraction_digits: int = 2,
) -> str:
    """
    Render cents as a localized currency string.

    Accepts POSIX ("es_MX") or BCP-47 ("es-MX") locale identifiers.

    Example:
        format_amount(123450) -> "$1,234.5"
    """
    assert_safe_integer(cents, "Cents")
    pattern = _currency_pattern(min_fraction_digits, max_fraction_digits)
    # Round here so display follows half-up, not Babel's half-even
    return format_currency(
        round_half_up(Decimal(cents) / CENTS_FACTOR, max_fraction_digits),
        currency,
        format=pattern,
        locale=locale.replace("-", "_"),
        currency_digits=False,
    )


def sum_cents(values: Iterable[int]) -> int:
    """Integer sum of cents; empty input sums to 0"""
    total = 0
    for value in values:
        assert_safe_integer(value, "Cents")
        total += value
        assert_safe_integer(total, "Running total")
    return total


def percentages(
    part_cents: int,
    total_cents: int,
    clamp: bool = True,
    decimals: int = 2,
) -> float:
    """
    Compute part / total * 100 rounded half-up to ``decimals`` places.

    A non-positive total yields 0 instead of raising. With ``clamp`` the
    result is limited to [0, 100]; signed ratios such as savings rate pass
    ``clamp=False``.
    """
    assert_safe_integer(part_cents, "Part cents")
    assert_safe_integer(total_cents, "Total cents")

    if total_cents <= 0:
        return 0.0

    value = round_half_up(Decimal(part_cents * 100) / Decimal(total_cents), decimals)

    if clamp:
        value = max(Decimal(0), min(Decimal(100), value))

    return float(value)
