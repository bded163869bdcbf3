"""Resolution of stored amounts into cents at the persistence boundary"""

from decimal import Decimal
from typing import Optional

from finance_engine.domain.exceptions import InvalidAmountError
from finance_engine.domain.money import assert_safe_integer, parse


def resolve_amount_cents(
    cents: Optional[int] = None,
    major_units: Optional[str | int | float | Decimal] = None,
) -> int:
    """
    Pick the authoritative cents value from a record.

    Records written before the cents migration only carry a decimal
    ``amount``; newer ones carry ``amount_cents``. Cents win when both are
    present. A record with neither is rejected rather than read as zero.

    Raises:
        AmountOutOfRangeError: ``cents`` is not a safe integer
        InvalidAmountError: no amount at all, or ``major_units`` fails to parse
    """
    if cents is not None:
        assert_safe_integer(cents, "Stored cents")
        return cents

    if major_units is not None:
        return parse(major_units)

    raise InvalidAmountError("Record has neither cents nor a decimal amount")
