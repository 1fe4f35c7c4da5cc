#
# Amounts Durations
#

# Standard library -----------------------------------------------------------------------------------------------------
import datetime as dt
import re
from enum import IntEnum, unique
from typing import Final, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .amount import Amount, AmountParseError, ExchangeRate
from .collections import BiDirectionalMap
from .numeric import fmod_value, trunc_value
from .tools import fmt_number, fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

class DurationParseError(AmountParseError):
    pass


@unique
class DurationUnit(IntEnum):
    MILLISECONDS = 0
    SECONDS = 1
    MINUTES = 2
    HOURS = 3
    DAYS = 4
    WEEKS = 5


class DurationConf:
    DEFAULT_UNIT = DurationUnit.SECONDS
    # Zero-padding of hours, minutes, seconds and milliseconds in clock strings
    CLOCK_WIDTHS = (2, 2, 2, 3)


duration_conf = DurationConf()

# @formatter:off

DURATION_EXCHANGE_RATES: Final = (
    ExchangeRate(DurationUnit.MILLISECONDS, 1),
    ExchangeRate(DurationUnit.SECONDS, 1000),
    ExchangeRate(DurationUnit.MINUTES, 60),
    ExchangeRate(DurationUnit.HOURS, 60),
    ExchangeRate(DurationUnit.DAYS, 24),
    ExchangeRate(DurationUnit.WEEKS, 7),
)

# "ms" must be tried before "m"
DURATION_UNIT_PATTERN: Final = re.compile(r"(\d+)\s*(ms|w|d|h|m|s)", re.IGNORECASE)

# Up to five colon-separated groups (weeks:days:hours:minutes:seconds) plus optional .milliseconds
DURATION_CLOCK_PATTERN: Final = re.compile(r"\d+(?::\d+){0,4}(?:\.\d+)?")

DURATION_UNIT_KEYWORDS: Final[BiDirectionalMap[str, DurationUnit]] = BiDirectionalMap({
    "ms": DurationUnit.MILLISECONDS,
    "s": DurationUnit.SECONDS,
    "m": DurationUnit.MINUTES,
    "h": DurationUnit.HOURS,
    "d": DurationUnit.DAYS,
    "w": DurationUnit.WEEKS,
})

# @formatter:on


class Duration(
    Amount[DurationUnit],
    units=DurationUnit,
    rates=DURATION_EXCHANGE_RATES,
    default_unit=duration_conf.DEFAULT_UNIT,
    error=DurationParseError,
):
    """
    Time duration, from suffixed strings ("5m", "250 ms") or clock strings ("1:30", "1:02:03.500").

    Bare numbers are seconds. Clock strings are read right to left starting at seconds,
    or at milliseconds when a ".digits" part is present, and come out expressed in seconds.

    Examples:
        >>> Duration.parse("1:30")
        Duration(value=90, unit=<DurationUnit.SECONDS: 1>)
        >>> str(Duration.parse("5m"))
        '5 m'
        >>> Duration.parse(3725.5).to_human_string()
        '01:02:05.500'
    """

    @classmethod
    def from_timedelta(cls, delta: dt.timedelta) -> Self:
        return cls(delta.total_seconds(), DurationUnit.SECONDS)

    def to_timedelta(self) -> dt.timedelta:
        return dt.timedelta(milliseconds=self.as_unit(DurationUnit.MILLISECONDS))

    @classmethod
    def _parse_string(cls, text: str) -> Self:
        text = text.strip()

        match = DURATION_UNIT_PATTERN.fullmatch(text)
        if match is not None:
            return cls(int(match.group(1)), DURATION_UNIT_KEYWORDS[match.group(2).lower()])

        if DURATION_CLOCK_PATTERN.fullmatch(text) is None:
            raise DurationParseError(f"Duration value string has invalid format: {fmt_value(text)}.")

        segments = text.split(":")
        base = DurationUnit.SECONDS

        # Digits after the period are milliseconds, one level below the seconds segment
        if "." in segments[-1]:
            segments[-1:] = segments[-1].split(".")
            base = DurationUnit.MILLISECONDS

        total = cls(0, DurationUnit.SECONDS)
        for index, segment in enumerate(segments):
            unit = base + (len(segments) - index - 1)
            total = total.plus(cls(int(segment), unit))

        return total

    def unit_to_string(self) -> str:
        return DURATION_UNIT_KEYWORDS.get_key(self.unit)

    def to_human_short_string(self) -> str:
        """Minutes and seconds as "<minutes>:<seconds>", truncated, e.g. "62:5"."""
        minutes = trunc_value(self.as_unit(DurationUnit.MINUTES))
        seconds = fmod_value(trunc_value(self.as_unit(DurationUnit.SECONDS)), 60)

        return f"{fmt_number(minutes)}:{fmt_number(seconds)}"

    def to_human_string(self, show_milliseconds: bool = True) -> str:
        """
        Clock string "HH:MM:SS[.mmm]".

        Hours are total whole hours and may exceed 24. Minutes and seconds are truncated
        and taken modulo 60, milliseconds are the total milliseconds modulo 1000.
        """
        hours = trunc_value(self.as_unit(DurationUnit.HOURS))
        minutes = fmod_value(trunc_value(self.as_unit(DurationUnit.MINUTES)), 60)
        seconds = fmod_value(trunc_value(self.as_unit(DurationUnit.SECONDS)), 60)
        milliseconds = fmod_value(self.as_unit(DurationUnit.MILLISECONDS), 1000)

        h_width, m_width, s_width, ms_width = duration_conf.CLOCK_WIDTHS

        string = f"{_pad(hours, h_width)}:{_pad(minutes, m_width)}:{_pad(seconds, s_width)}"

        if show_milliseconds:
            string += f".{_pad(milliseconds, ms_width)}"

        return string


# Private Methods ------------------------------------------------------------------------------------------------------

def _pad(number: int | float, width: int) -> str:
    return fmt_number(number).zfill(width)
