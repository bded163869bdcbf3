"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidAmountError(DomainException, ValueError):
    """Monetary input is missing, non-numeric, NaN or infinite"""

    pass


class AmountOutOfRangeError(DomainException, ValueError):
    """Cents value (input or computed) is outside the safe integer range"""

    pass


class InvalidFrequencyError(DomainException, ValueError):
    """Recurrence frequency is not one of weekly/biweekly/monthly/yearly"""

    pass


class InvalidDateError(DomainException, ValueError):
    """Date input cannot be interpreted as a calendar day"""

    pass
