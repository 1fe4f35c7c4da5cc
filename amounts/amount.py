"""
Generic amount engine: values stored in one unit of an ordered unit axis.

An Amount is an immutable (value, unit) pair. Converting between units walks an
exchange-rate table one step at a time, so irregular per-step ratios (x8 then
x125 for bits and bytes, x1000 then x60 for milliseconds and minutes) compose
exactly as declared.

Concrete kinds subclass Amount once and register their unit axis and table as
class keywords; the engine stores the resulting AmountKind and uses its factory
and parser whenever it needs a new instance of the same kind:

    class DataAmount(Amount[DataUnit], units=DataUnit, rates=DATA_EXCHANGE_RATES,
                     default_unit=DataUnit.BYTES, error=DataAmountParseError):
        @classmethod
        def _parse_string(cls, text: str) -> "DataAmount": ...
"""

# Standard library -----------------------------------------------------------------------------------------------------
import operator
import warnings
from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum
from fractions import Fraction
from typing import Any, Callable, ClassVar, Generic, Literal, Self, TypeVar, Union

# Local ----------------------------------------------------------------------------------------------------------------
from .numeric import ceil_value, floor_value, ieee_div, max_value, min_value, round_half_up, std_numeric
from .tools import fmt_number, fmt_type, fmt_value


# @formatter:off

class AmountConf:
    SEPARATOR = " "


amount_conf = AmountConf()

# @formatter:on

U = TypeVar("U", bound=IntEnum)

AmountLike = Union[int, float, Decimal, Fraction, str, "Amount"]


# Errors ---------------------------------------------------------------------------------------------------------------

class AmountParseError(ValueError):
    """Raised when a value cannot be parsed into an amount of the requested kind."""


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class ExchangeRate(Generic[U]):
    """
    One row of an exchange-rate table.

    Attributes:
        unit: The unit level this row belongs to.
        multiplier: How many of the next finer unit make one of this unit.
                    Row 0 has no finer neighbour and is conventionally 1.
    """
    unit: U
    multiplier: int | float


@dataclass(frozen=True)
class AmountKind(Generic[U]):
    """
    Everything the engine needs to know about one concrete quantity kind.

    Built once, when the concrete Amount subclass is defined, and shared read-only
    by every instance of that kind.
    """
    units: type[U]
    rates: tuple[ExchangeRate[U], ...]
    default_unit: U
    error: type[AmountParseError]
    factory: Callable[[int | float, U], "Amount"]
    parser: Callable[[Any], "Amount"]

    def __post_init__(self):
        object.__setattr__(self, 'rates', tuple(self.rates))

        levels = [int(u) for u in self.units]
        if levels != list(range(len(levels))):
            raise ValueError(
                f"Unit levels of {self.units.__name__} must be contiguous integers from 0, got {levels}"
            )

        if len(self.rates) != len(levels):
            raise ValueError(
                f"Exchange-rate table of {self.units.__name__} must have {len(levels)} rows, got {len(self.rates)}"
            )

        for index, rate in enumerate(self.rates):
            if not isinstance(rate, ExchangeRate):
                raise ValueError(f"Exchange-rate row {index} must be an ExchangeRate, got {fmt_type(rate)}")
            if rate.unit != index:
                raise ValueError(f"Exchange-rate row {index} is for unit {rate.unit!r}, expected level {index}")
            if isinstance(rate.multiplier, bool) or not rate.multiplier > 0:
                raise ValueError(f"Exchange-rate multiplier must be positive, got {fmt_value(rate.multiplier)}")

        if self.default_unit not in self.units:
            raise ValueError(f"Default unit {self.default_unit!r} is not a {self.units.__name__} member")

    def unit_at(self, unit: int) -> U | None:
        """
        The unit member at the given level, or None if the level is off the axis.

        Any integer type implementing __index__ is accepted as a level.

        Raises:
            TypeError: If unit is a bool or is not an integer (1.0 and "m" are rejected).
        """
        if isinstance(unit, bool) or not hasattr(unit, "__index__"):
            raise TypeError(f"Unit level must be an int, got {fmt_type(unit)}")
        level = operator.index(unit)
        if 0 <= level < len(self.rates):
            return self.units(level)
        return None


@dataclass(frozen=True)
class Operand:
    """
    An operator argument resolved once at the call boundary.

    Attributes:
        tag: "number" for raw values already in the receiver's unit,
             "text" for strings to parse, "amount" for existing amounts.
        payload: The value itself, numbers normalized with std_numeric().
    """
    tag: Literal["number", "text", "amount"]
    payload: Any

    @classmethod
    def of(cls, value: AmountLike, kind: AmountKind) -> Self:
        if isinstance(value, Amount):
            return cls("amount", value)
        if isinstance(value, str):
            return cls("text", value)

        number = std_numeric(value, on_error="none")
        if number is None:
            raise kind.error(f"Value should be an amount, number or string, got {fmt_value(value)}.")
        return cls("number", number)

    def in_unit(self, kind: AmountKind, unit: IntEnum) -> int | float:
        """The operand as a plain number expressed in the given unit."""
        if self.tag == "number":
            return self.payload
        return kind.parser(self.payload).as_unit(unit)


@dataclass(frozen=True)
class Amount(Generic[U]):
    """
    Immutable numeric value expressed in one unit of an ordered unit axis.

    Every operation returns a new instance; the value itself is never validated,
    so nan and infinities produced by arithmetic propagate as-is.

    Subclasses register their axis with class keywords:

        units:        IntEnum of contiguous levels starting at 0
        rates:        one ExchangeRate per level
        default_unit: unit assigned to bare numbers by parse()
        error:        AmountParseError subclass raised by parse()

    and implement _parse_string() for their string grammar.
    """

    value: int | float
    unit: U

    kind: ClassVar[AmountKind | None] = None

    def __init_subclass__(
            cls,
            *,
            units: type[IntEnum] | None = None,
            rates=None,
            default_unit: IntEnum | None = None,
            error: type[AmountParseError] = AmountParseError,
            **kwargs
    ):
        super().__init_subclass__(**kwargs)

        if units is None:
            return

        cls.kind = AmountKind(
            units=units,
            rates=rates,
            default_unit=units(0) if default_unit is None else default_unit,
            error=error,
            factory=cls,
            parser=cls.parse,
        )

    def __post_init__(self):
        kind = self._require_kind()
        object.__setattr__(self, 'value', std_numeric(self.value))

        unit = kind.unit_at(self.unit)
        if unit is None:
            raise ValueError(f"Unit level {self.unit!r} is outside of {kind.units.__name__}")
        object.__setattr__(self, 'unit', unit)

    # ----- Parsing -----

    @classmethod
    def parse(cls, value: AmountLike) -> Self:
        """
        Parse a string, number or existing amount into an amount of this kind.

        Raises:
            AmountParseError subclass of this kind for None, unsupported types,
            and strings matching none of the kind's grammars.
        """
        kind = cls._require_kind()

        if value is None:
            raise kind.error("Value is None.")

        if isinstance(value, cls):
            return value

        if isinstance(value, str):
            return cls._parse_string(value)

        number = None if isinstance(value, Amount) else std_numeric(value, on_error="none")
        if number is None:
            raise kind.error(f"Value should be a {cls.__name__}, number or string, got {fmt_type(value)}.")

        return kind.factory(number, kind.default_unit)

    @classmethod
    def try_parse(cls, value: AmountLike) -> Self | None:
        """Like parse(), but returns None instead of raising this kind's parse error."""
        try:
            return cls.parse(value)
        except cls._require_kind().error:
            return None

    @classmethod
    def is_valid(cls, value: AmountLike) -> bool:
        """True if parse() would accept the value."""
        return cls.try_parse(value) is not None

    @classmethod
    def _parse_string(cls, text: str) -> Self:
        raise NotImplementedError(f"{cls.__name__} does not define a string grammar")

    # ----- Units & conversion -----

    @property
    def previous_unit(self) -> int:
        """Level of the next finer unit; may be off the axis."""
        return int(self.unit) - 1

    @property
    def next_unit(self) -> int:
        """Level of the next coarser unit; may be off the axis."""
        return int(self.unit) + 1

    def as_unit(self, unit: int | None = None, decimals: int | None = None) -> int | float | None:
        """
        The value re-expressed in another unit.

        Args:
            unit: Target unit level, current unit if None.
            decimals: Fractional digits to round to (half-up). 0 rounds to an integer,
                      None applies no rounding.

        Returns:
            The converted value, or None if the target unit is off the axis.
        """
        kind = self._require_kind()
        target = kind.unit_at(self.unit if unit is None else unit)
        if target is None:
            return None

        value = self.value

        # One step at a time, irregular ratios must compose in order
        if target < self.unit:
            for i in range(self.unit, target, -1):
                value *= kind.rates[i].multiplier
        elif target > self.unit:
            for i in range(self.unit + 1, target + 1):
                value /= kind.rates[i].multiplier

        if decimals is not None:
            if decimals > 0:
                value = round_half_up(value, decimals)
            elif decimals == 0:
                value = round_half_up(value)

        return value

    def convert(self, unit: int) -> Self | None:
        """A new amount at the target unit, or None if the target unit is off the axis."""
        value = self.as_unit(unit)
        if value is None:
            return None
        return self._create(value, unit)

    # ----- Arithmetic -----

    def plus(self, other: AmountLike) -> Self:
        return self._binary_op(other, lambda a, b: a + b)

    def minus(self, other: AmountLike) -> Self:
        return self._binary_op(other, lambda a, b: a - b)

    def mul(self, other: AmountLike) -> Self:
        return self._binary_op(other, lambda a, b: a * b)

    def div(self, other: AmountLike) -> Self:
        """Divide; division by zero yields inf or nan instead of raising."""
        return self._binary_op(other, ieee_div)

    def floor(self) -> Self:
        return self._unary_op(floor_value)

    def ceil(self) -> Self:
        return self._unary_op(ceil_value)

    def round(self, decimals: int = 0) -> Self:
        """Round the raw value half-up to the given number of fractional digits."""
        if decimals < 0:
            warnings.warn(
                f"Negative decimals are not supported, rounding to an integer instead: {decimals}",
                UserWarning,
                stacklevel=2,
            )
            decimals = 0
        return self._unary_op(lambda a: round_half_up(a, decimals))

    # ----- Bounds -----

    def clamp(self, lo: AmountLike, hi: AmountLike) -> Self:
        """max(lo, min(value, hi)), bounds resolved into this amount's unit."""
        lo_value = self._resolve(lo)
        hi_value = self._resolve(hi)
        return self._create(max_value(lo_value, min_value(self.value, hi_value)), self.unit)

    def at_most(self, hi: AmountLike) -> Self:
        return self._binary_op(hi, min_value)

    def at_least(self, lo: AmountLike) -> Self:
        return self._binary_op(lo, max_value)

    # ----- Humanization & rendering -----

    def to_human(self) -> Self:
        """
        The same quantity in the unit that keeps the displayed value >= 1 and closest to it.

        Below 1, walks toward finer units one step at a time and returns the first unit
        where the value reaches 1. Otherwise walks toward coarser units while the value
        stays >= 1 and returns the last such unit. Falls back to this amount when the
        axis boundary is hit first.

        Unlike the older downward walk, which jumped straight to the finest unit
        (0.5 KB became 4000 BITS) or gave up after one step still below 1, small
        values stop at the first unit reaching 1 (0.5 KB becomes 4 Kb).
        """
        cursor = backtrack = self

        if cursor.value < 1:
            while cursor is not None:
                cursor = cursor.convert(cursor.previous_unit)
                if cursor is not None and cursor.value >= 1:
                    return cursor
            return backtrack

        while True:
            cursor = cursor.convert(cursor.next_unit)
            if cursor is None or cursor.value < 1:
                break
            backtrack = cursor

        return backtrack

    def to_human_string(self) -> str:
        return str(self.to_human())

    def unit_to_string(self) -> str:
        return str(int(self.unit))

    def __str__(self) -> str:
        return f"{fmt_number(self.value)}{amount_conf.SEPARATOR}{self.unit_to_string()}"

    # ----- Python protocols -----

    def __float__(self) -> float:
        return float(self.value)

    def __add__(self, other: AmountLike) -> Self:
        return self.plus(other)

    def __radd__(self, other: AmountLike) -> Self:
        return self.plus(other)

    def __sub__(self, other: AmountLike) -> Self:
        return self.minus(other)

    def __rsub__(self, other: AmountLike) -> Self:
        return self._create(self._resolve(other) - self.value, self.unit)

    def __mul__(self, other: AmountLike) -> Self:
        return self.mul(other)

    def __rmul__(self, other: AmountLike) -> Self:
        return self.mul(other)

    def __truediv__(self, other: AmountLike) -> Self:
        return self.div(other)

    def __neg__(self) -> Self:
        return self._unary_op(lambda a: -a)

    def __abs__(self) -> Self:
        return self._unary_op(abs)

    def __floor__(self) -> Self:
        return self.floor()

    def __ceil__(self) -> Self:
        return self.ceil()

    def __round__(self, ndigits: int | None = None) -> Self:
        return self.round(ndigits or 0)

    def __lt__(self, other: AmountLike) -> bool:
        return self.value < self._resolve(other)

    def __le__(self, other: AmountLike) -> bool:
        return self.value <= self._resolve(other)

    def __gt__(self, other: AmountLike) -> bool:
        return self.value > self._resolve(other)

    def __ge__(self, other: AmountLike) -> bool:
        return self.value >= self._resolve(other)

    # ----- Private -----

    @classmethod
    def _require_kind(cls) -> AmountKind:
        if cls.kind is None:
            raise TypeError(f"{cls.__name__} is abstract, subclass it with units= and rates= to define a kind")
        return cls.kind

    def _create(self, value: int | float, unit: int) -> Self:
        return self._require_kind().factory(value, unit)

    def _resolve(self, other: AmountLike) -> int | float:
        kind = self._require_kind()
        return Operand.of(other, kind).in_unit(kind, self.unit)

    def _unary_op(self, op: Callable[[int | float], int | float]) -> Self:
        return self._create(op(self.value), self.unit)

    def _binary_op(self, other: AmountLike, op: Callable[[int | float, int | float], int | float]) -> Self:
        return self._create(op(self.value, self._resolve(other)), self.unit)
