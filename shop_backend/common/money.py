# common/money.py

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from common.exceptions import CommerceValidationError

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def money(value, *, field: str = "amount") -> Decimal:
    """
    Normalize a money value to a 2dp Decimal.

    None/"" are treated as zero. Anything unparsable is a validation error,
    never a silent zero.
    """
    if value is None or value == "":
        return ZERO

    if isinstance(value, bool):
        raise CommerceValidationError(f"{field} must be a number")

    if isinstance(value, Decimal):
        amt = value
    else:
        try:
            amt = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise CommerceValidationError(f"Invalid money value for {field}: {value!r}") from exc

    if not amt.is_finite():
        raise CommerceValidationError(f"Invalid money value for {field}: {value!r}")

    return amt.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def non_negative(value, *, field: str = "amount") -> Decimal:
    amt = money(value, field=field)
    if amt < ZERO:
        raise CommerceValidationError(f"{field} cannot be negative")
    return amt


def positive(value, *, field: str = "amount") -> Decimal:
    amt = money(value, field=field)
    if amt <= ZERO:
        raise CommerceValidationError(f"{field} must be greater than zero")
    return amt


def whole_quantity(value, *, field: str = "quantity") -> int:
    """
    Quantity normalizer.
    Quantities are whole units in this system.
    """
    if isinstance(value, bool) or value is None or value == "":
        raise CommerceValidationError(f"{field} must be a whole number")

    if isinstance(value, int):
        return value

    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())

    raise CommerceValidationError(f"{field} must be a whole number")
