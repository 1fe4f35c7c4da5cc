#
# Amounts Formatting Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
import math
from typing import Any


# @formatter:off

class FmtConf:
    # Longest value repr shown in exception messages before truncation
    MAX_REPR = 120
    ELLIPSIS = "..."


fmt_conf = FmtConf()

# @formatter:on


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_number(number: int | float) -> str:
    """
    Render a raw amount value the way it is shown to humans.

    Integral floats lose their trailing ".0", other floats keep their shortest repr,
    non-finite values render as 'nan', 'inf' and '-inf'.

    Examples:
        >>> fmt_number(512.0)
        '512'
        >>> fmt_number(1.5)
        '1.5'
        >>> fmt_number(float("-inf"))
        '-inf'
    """
    if isinstance(number, bool):
        raise TypeError(f"Expected int | float, got {fmt_type(number)}")

    if isinstance(number, int):
        return str(number)

    number = float(number)

    if math.isnan(number):
        return "nan"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))

    return repr(number)


def fmt_type(obj: Any) -> str:
    """Format type information for exception messages.

    Accepts both types and instances; for instances, type(obj) is formatted.

    Examples:
        >>> fmt_type(42)
        '<type: int>'
        >>> fmt_type(ValueError)
        '<type: ValueError>'
    """
    target_type = obj if isinstance(obj, type) else type(obj)

    try:
        type_name = target_type.__name__
    except AttributeError:
        type_name = str(target_type)

    return _fmt_format_pair("type", type_name)


def fmt_value(x: Any) -> str:
    """
    Format a single value as a type-value pair for exception messages.

    Broken __repr__ methods and very long representations are handled gracefully,
    and ">" inside the repr is escaped so the pair stays unambiguous.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("5 MB")
        "<str: '5 MB'>"
    """
    t = type(x).__name__

    try:
        base_repr = repr(x)
    except Exception as e:
        base_repr = f"<{t} object (repr failed: {type(e).__name__})>"

    base_repr = base_repr.replace(">", "\\>")

    return _fmt_format_pair(t, _fmt_truncate(base_repr, fmt_conf.MAX_REPR))


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_truncate(s: str, max_len: int) -> str:
    """
    Truncate s to at most max_len visible characters before appending the ellipsis.

    Quoted reprs keep their quotes and get the ellipsis outside the closing quote.
    """
    if len(s) <= max_len:
        return s

    if len(s) >= 2 and s[0] in ("'", '"') and s[-1] == s[0]:
        inner = s[1:1 + max(1, max_len - 4)]
        return f"{s[0]}{inner}{s[0]}{fmt_conf.ELLIPSIS}"

    return s[:max(1, max_len)] + fmt_conf.ELLIPSIS


def _fmt_format_pair(type_name: str, value_repr: str) -> str:
    return f"<{type_name}: {value_repr}>"
