#
# Amounts Storage Sizes
#

# Standard library -----------------------------------------------------------------------------------------------------
import re
from enum import IntEnum, unique
from typing import Final, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .amount import Amount, AmountParseError, ExchangeRate
from .tools import fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

class DataAmountParseError(AmountParseError):
    pass


@unique
class DataUnit(IntEnum):
    """Storage units, alternating bits and bytes at each decimal magnitude."""
    BITS = 0
    BYTES = 1
    KILOBITS = 2
    KILOBYTES = 3
    MEGABITS = 4
    MEGABYTES = 5
    GIGABITS = 6
    GIGABYTES = 7
    TERABITS = 8
    TERABYTES = 9


class DataConf:
    DEFAULT_UNIT = DataUnit.BYTES


data_conf = DataConf()

# @formatter:off

# 1 byte = 8 bits, 1 kilobit = 1000 bits = 125 bytes, 1 kilobyte = 8 kilobits, ...
DATA_EXCHANGE_RATES: Final = (
    ExchangeRate(DataUnit.BITS, 1),
    ExchangeRate(DataUnit.BYTES, 8),
    ExchangeRate(DataUnit.KILOBITS, 125),
    ExchangeRate(DataUnit.KILOBYTES, 8),
    ExchangeRate(DataUnit.MEGABITS, 125),
    ExchangeRate(DataUnit.MEGABYTES, 8),
    ExchangeRate(DataUnit.GIGABITS, 125),
    ExchangeRate(DataUnit.GIGABYTES, 8),
    ExchangeRate(DataUnit.TERABITS, 125),
    ExchangeRate(DataUnit.TERABYTES, 8),
)

DATA_PATTERN: Final = re.compile(r"([0-9]+)(\.[0-9]+)?([KMGTkmgt][bB]?|[bB])?")

# Lowercase "b" means bits, uppercase "B" means bytes, magnitude letters are case-insensitive
DATA_UNIT_KEYWORDS: Final[dict[str, DataUnit]] = {
    "b": DataUnit.BITS,
    "B": DataUnit.BYTES,

    "kb": DataUnit.KILOBITS,  "Kb": DataUnit.KILOBITS,
    "kB": DataUnit.KILOBYTES, "KB": DataUnit.KILOBYTES,

    "mb": DataUnit.MEGABITS,  "Mb": DataUnit.MEGABITS,
    "mB": DataUnit.MEGABYTES, "MB": DataUnit.MEGABYTES,

    "gb": DataUnit.GIGABITS,  "Gb": DataUnit.GIGABITS,
    "gB": DataUnit.GIGABYTES, "GB": DataUnit.GIGABYTES,

    "tb": DataUnit.TERABITS,  "Tb": DataUnit.TERABITS,
    "tB": DataUnit.TERABYTES, "TB": DataUnit.TERABYTES,
}

# @formatter:on


class DataAmount(
    Amount[DataUnit],
    units=DataUnit,
    rates=DATA_EXCHANGE_RATES,
    default_unit=data_conf.DEFAULT_UNIT,
    error=DataAmountParseError,
):
    """
    Storage size, e.g. "512b", "1.5MB", "1Mb".

    Bare numbers are bytes. Strings must carry a unit suffix.

    Examples:
        >>> DataAmount.parse("1.5MB")
        DataAmount(value=1.5, unit=<DataUnit.MEGABYTES: 5>)
        >>> DataAmount.parse("1KB").as_unit(DataUnit.BYTES)
        1000.0
        >>> str(DataAmount.parse(2048).to_human())
        '2.048 KILOBYTES'
    """

    @classmethod
    def _parse_string(cls, text: str) -> Self:
        match = DATA_PATTERN.fullmatch(text.strip())
        if match is None:
            raise DataAmountParseError(f"Data value string has invalid format: {fmt_value(text)}.")

        number, fraction, suffix = match.groups()

        unit = DATA_UNIT_KEYWORDS.get(suffix) if suffix else None
        if unit is None:
            raise DataAmountParseError(f"Data value string has invalid unit: {fmt_value(suffix)}.")

        return cls(float(number + (fraction or "")), unit)

    def unit_to_string(self) -> str:
        return self.unit.name
