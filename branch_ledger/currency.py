"""
Money Handling Module

Exact Decimal arithmetic for every monetary value in the ledger.
NEVER uses float for monetary values.
"""

from decimal import Decimal, Inexact, InvalidOperation, ROUND_HALF_UP, getcontext, localcontext
from typing import Union
import re

from .errors import InvalidArgumentError

ZERO = Decimal('0')
CENTS = Decimal('0.01')

AmountLike = Union[Decimal, int, str]

_CURRENCY_PREFIX = re.compile(r'^R\$\s*')

# Plain Decimal literal, exponent allowed: "1234.56", ".5", "1e3", "-1E+3"
_PLAIN = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')
# Brazilian dot grouping, optional comma decimals: "1.234", "1.234.567,89"
_BR_GROUPED = re.compile(r'^[+-]?\d{1,3}(\.\d{3})+(,\d+)?$')
# Comma as decimal separator: "300,50"
_BR_DECIMAL = re.compile(r'^[+-]?\d+,\d+$')
# Comma grouping, optional dot decimals: "1,234.56", "1,234,567"
_US_GROUPED = re.compile(r'^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$')


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats

    Accepts plain Decimal literals ("1234.56", "1e3") as well as Brazilian
    formatting ("R$ 1.234,56", "1234,56"). Anything else is rejected
    rather than reinterpreted.

    Args:
        value: String representation of number

    Returns:
        Decimal value

    Raises:
        InvalidArgumentError: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError("Amount must be a non-empty string")

    clean_value = _CURRENCY_PREFIX.sub('', value.strip())

    # A single dot is read as a decimal point, so "1.234" stays 1.234
    if _PLAIN.match(clean_value):
        pass
    elif _BR_GROUPED.match(clean_value):
        clean_value = clean_value.replace('.', '').replace(',', '.')
    elif _BR_DECIMAL.match(clean_value):
        clean_value = clean_value.replace(',', '.')
    elif _US_GROUPED.match(clean_value):
        clean_value = clean_value.replace(',', '')
    else:
        raise InvalidArgumentError(f"Cannot convert '{value}' to Decimal")

    try:
        result = Decimal(clean_value)
    except InvalidOperation:
        raise InvalidArgumentError(f"Cannot convert '{value}' to Decimal")

    if not result.is_finite():
        raise InvalidArgumentError(f"Cannot convert '{value}' to a finite amount")
    return result


def _exact(operation, a: Decimal, b: Decimal) -> Decimal:
    """Run a Decimal operation with enough digits that nothing is rounded"""
    exponent = min(a.as_tuple().exponent, b.as_tuple().exponent)
    digits = max(a.adjusted(), b.adjusted()) - exponent + 2

    with localcontext() as ctx:
        ctx.prec = max(digits, getcontext().prec)
        ctx.traps[Inexact] = True
        try:
            return operation(a, b)
        except Inexact:
            raise InvalidArgumentError(f"Amount cannot be represented exactly: {a}, {b}")


def exact_add(a: Decimal, b: Decimal) -> Decimal:
    """a + b, never rounded"""
    return _exact(lambda x, y: x + y, a, b)


def exact_subtract(a: Decimal, b: Decimal) -> Decimal:
    """a - b, never rounded"""
    return _exact(lambda x, y: x - y, a, b)



def to_amount(value: AmountLike) -> Decimal:
    """
    Coerce an incoming amount to Decimal

    Args:
        value: Decimal, int or string amount

    Returns:
        Exact Decimal value (never rounded)

    Raises:
        InvalidArgumentError: For None, floats, booleans and non-finite values
    """
    if value is None:
        raise InvalidArgumentError("Amount is required")

    # bool is an int subclass
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidArgumentError(
            f"Amount must be a Decimal, int or string, not {type(value).__name__}"
        )

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidArgumentError("Amount must be a finite number")
        return value

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, str):
        return decimal_from_string(value)

    raise InvalidArgumentError(f"Unsupported amount type: {type(value).__name__}")


def is_positive(amount: Decimal) -> bool:
    """Check if amount is strictly positive"""
    return amount > ZERO


def format_brl(amount: Decimal, symbol: str = "R$") -> str:
    """
    Format for display using Brazilian conventions (R$ 1.234,56)

    Presentation helper only; ledger code works on raw Decimal values.
    """
    if amount is None:
        amount = ZERO
    with localcontext() as ctx:
        ctx.prec = max(amount.adjusted() + 4, getcontext().prec)
        rounded = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
        sign = "-" if rounded < ZERO else ""
        us_style = f"{abs(rounded):,.2f}"  # 1,234.56
    br_style = us_style.replace(',', '_').replace('.', ',').replace('_', '.')
    return f"{sign}{symbol} {br_style}"
