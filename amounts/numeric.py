"""
Numeric coercion and IEEE 754 preserving helpers for amount values.

Amount values are plain Python numbers. Invalid arithmetic is never validated:
NaN and infinities flow through every helper here unchanged instead of raising.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator
from typing import Literal

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_type


def std_numeric(
        value,
        *,
        on_error: Literal["raise", "none"] = "raise",
) -> int | float | None:
    """
    Convert numeric types to standard Python int, float, or None.

    Parameters
    ----------
    value : various
        Numeric value to convert. Supports Python int/float/None, Decimal,
        Fraction, and third-party scalars via __index__ or __float__.

    on_error : {"raise", "none"}, default "raise"
        How to handle unsupported types (bool, str, list, dict, ...):

        - "raise": Raise TypeError
        - "none": Return None

        inf and nan inputs are valid numbers and always pass through.

    Returns
    -------
    int
        For Python int, types implementing __index__, and integer-valued
        Decimal/Fraction.

    float
        For floats and anything else convertible via __float__.

    None
        For None input, or type errors when on_error="none".

    Examples
    --------
    >>> std_numeric(42)
    42
    >>> from decimal import Decimal
    >>> std_numeric(Decimal('42.0'))
    42
    >>> std_numeric(Decimal('3.5'))
    3.5
    >>> std_numeric("12", on_error="none") is None
    True
    """
    if value is None:
        return None

    # bool is an int subclass but never a quantity
    if isinstance(value, bool):
        return _type_error(on_error, f"boolean values not supported, got {value}")

    if isinstance(value, (int, float)):
        return value

    if isinstance(value, (str, bytes, bytearray)):
        return _type_error(on_error, f"unsupported numeric type: {fmt_type(value)}")

    # NumPy integers and friends
    if hasattr(value, '__index__'):
        try:
            return operator.index(value)
        except (TypeError, ValueError) as e:
            return _type_error(on_error, f"cannot convert {fmt_type(value)} to int via __index__: {e}")

    # Integer-valued Decimal/Fraction stay exact
    type_name = type(value).__name__
    if type_name in ('Decimal', 'Fraction'):
        try:
            as_int = int(value)
            if value == type(value)(as_int):
                return as_int
        except (TypeError, ValueError, OverflowError):
            pass

    if hasattr(value, '__float__'):
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            return _type_error(on_error, f"cannot convert {fmt_type(value)} to float: {e}")

    return _type_error(
        on_error,
        f"unsupported numeric type: {fmt_type(value)}. "
        f"Expected int, float, None, or types implementing __index__ or __float__"
    )


def ieee_div(a: int | float, b: int | float) -> float:
    """
    Divide like IEEE 754 floats do: x/0 is a signed infinity, 0/0 is nan.

    Examples:
        >>> ieee_div(1, 0)
        inf
        >>> ieee_div(-1, 0.0)
        -inf
        >>> ieee_div(0, 0)
        nan
    """
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a) or math.isnan(b):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def floor_value(x: int | float) -> int | float:
    """math.floor() that lets nan and infinities through."""
    if isinstance(x, float) and not math.isfinite(x):
        return x
    return math.floor(x)


def ceil_value(x: int | float) -> int | float:
    """math.ceil() that lets nan and infinities through."""
    if isinstance(x, float) and not math.isfinite(x):
        return x
    return math.ceil(x)


def min_value(a: int | float, b: int | float) -> int | float:
    """
    min() that returns nan when either argument is nan, regardless of position.

    Examples:
        >>> min_value(3, 5)
        3
        >>> min_value(3, float("nan"))
        nan
    """
    if _is_nan(a) or _is_nan(b):
        return math.nan
    return min(a, b)


def max_value(a: int | float, b: int | float) -> int | float:
    """max() that returns nan when either argument is nan, regardless of position."""
    if _is_nan(a) or _is_nan(b):
        return math.nan
    return max(a, b)


def trunc_value(x: int | float) -> int | float:
    """math.trunc() that lets nan and infinities through."""
    if isinstance(x, float) and not math.isfinite(x):
        return x
    return math.trunc(x)


def fmod_value(x: int | float, n: int | float) -> int | float:
    """
    Remainder with the sign of x, like math.fmod(), but ints stay ints and
    non-finite x yields nan instead of raising.

    Examples:
        >>> fmod_value(125, 60)
        5
        >>> fmod_value(-125, 60)
        -5
    """
    if isinstance(x, float) and not math.isfinite(x):
        return math.nan
    if isinstance(x, int) and isinstance(n, int):
        return int(math.fmod(x, n))
    return math.fmod(x, n)


def round_half_up(x: int | float, decimals: int = 0) -> int | float:
    """
    Round to the nearest value with ties going toward positive infinity.

    With decimals > 0 the value is scaled by 10**decimals, rounded and scaled back.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
        >>> round_half_up(1.2345, 2)
        1.23
    """
    if decimals > 0:
        exp = 10 ** decimals
        return floor_value(x * exp + 0.5) / exp
    return floor_value(x + 0.5)


# Private Methods ------------------------------------------------------------------------------------------------------

def _is_nan(x: int | float) -> bool:
    return isinstance(x, float) and math.isnan(x)


def _type_error(on_error: str, message: str) -> None:
    if on_error == "raise":
        raise TypeError(message)
    return None
