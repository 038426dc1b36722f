"""
Abstract Syntax Tree node definitions for timelang.

Every node is an immutable value: scalars and compound nodes are frozen
dataclasses, closed keyword sets are enums. Nodes compare equal by value and
order structurally (variant declaration order first, then fields in declared
order). That ordering is syntactic only; "3 days ago" does not sort before
"now" because it happened earlier.

Tagged unions are modelled with class hierarchies. The class of a node is its
variant, so a parsed ``Date`` *is* the specific, absolute time expression and
a ``TimeRange`` is the range expression:

    TimeExpression
    ├── PointInTime
    │   ├── AbsoluteTime: Date, DateTime
    │   └── RelativeTime: Directional, Named, Next, Last
    ├── TimeRange
    └── Duration
"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, ClassVar, Iterator, Optional, Tuple, Union


def _check_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")


def _check_range(name: str, value: Any, low: int, high: int) -> None:
    _check_int(name, value)
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high} (inclusive), got {value}")


def _check_type(name: str, value: Any, expected: type) -> None:
    if not isinstance(value, expected):
        raise TypeError(f"{name} must be a {expected.__name__}, got {type(value).__name__}")


class TimeNode:
    """Base class for all AST nodes."""

    # Position of the node's variant inside the unions it belongs to
    _VARIANT: ClassVar[Tuple[int, ...]] = ()

    def _sort_key(self) -> Tuple[Any, ...]:
        return self._VARIANT + tuple(getattr(self, f.name) for f in fields(self))

    def __lt__(self, other):
        if not isinstance(other, TimeNode):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other):
        if not isinstance(other, TimeNode):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other):
        if not isinstance(other, TimeNode):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other):
        if not isinstance(other, TimeNode):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    def __str__(self) -> str:
        from ..renderer import render
        return render(self)

    @classmethod
    def from_str(cls, text: str, filename: str = "<string>"):
        """Parse ``text`` as this node type. The whole input must be consumed."""
        from .parser import parse_as
        return parse_as(cls, text, filename)


class _OrderedEnum(Enum):
    """Enum whose members order by their values within one enumeration."""

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value >= other.value


class TimeEnum(_OrderedEnum):
    """Keyword enumerations that are also parseable, renderable nodes."""

    def __str__(self) -> str:
        from ..renderer import render
        return render(self)

    @classmethod
    def from_str(cls, text: str, filename: str = "<string>"):
        from .parser import parse_as
        return parse_as(cls, text, filename)


# ============================================================================
# Keyword enumerations
# ============================================================================

class Month(TimeEnum):
    """Calendar month. Values are the month numbers used in dates."""
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    def __int__(self) -> int:
        return self.value


class AmPm(TimeEnum):
    AM = 1
    PM = 2

    @property
    def word(self) -> str:
        return self.name


class TimeUnit(TimeEnum):
    """Units a Duration is measured in, smallest first."""
    MINUTES = 1
    HOURS = 2
    DAYS = 3
    WEEKS = 4
    MONTHS = 5
    YEARS = 6

    @property
    def field(self) -> str:
        """Name of the matching Duration field."""
        return self.name.lower()

    @property
    def word(self) -> str:
        return self.name.lower()

    @property
    def singular(self) -> str:
        return self.name.lower()[:-1]


class RelativeTimeUnit(TimeEnum):
    """Unit that can follow `next` or `last`."""
    WEEK = 1
    MONTH = 2
    YEAR = 3
    MONDAY = 4
    TUESDAY = 5
    WEDNESDAY = 6
    THURSDAY = 7
    FRIDAY = 8
    SATURDAY = 9
    SUNDAY = 10


class NamedRelativeTime(TimeEnum):
    NOW = 1
    TODAY = 2
    TOMORROW = 3
    YESTERDAY = 4
    DAY_AFTER_TOMORROW = 5
    DAY_BEFORE_YESTERDAY = 6


class DirectionKind(_OrderedEnum):
    """How a TimeDirection attaches a Duration to its anchor."""
    AFTER_ABSOLUTE = 1
    BEFORE_ABSOLUTE = 2
    AFTER_NAMED = 3
    BEFORE_NAMED = 4
    BEFORE_NEXT = 5
    BEFORE_LAST = 6
    AFTER_NEXT = 7
    AFTER_LAST = 8
    AGO = 9
    FROM_NOW = 10


# ============================================================================
# Scalar fields
# ============================================================================

@dataclass(frozen=True, eq=False)
class Number(TimeNode):
    """
    Non-negative integer magnitude.

    Supports arithmetic with other Numbers and plain ints, and compares
    equal to the int it holds. Division is integer division, so `/` and
    `//` agree.
    """
    value: int

    def __post_init__(self):
        _check_int("number", self.value)
        if self.value < 0:
            raise ValueError(f"number cannot be negative, got {self.value}")

    @staticmethod
    def _magnitude(other: Any) -> Optional[int]:
        if isinstance(other, Number):
            return other.value
        if isinstance(other, int) and not isinstance(other, bool):
            return other
        return None

    def __add__(self, other):
        magnitude = self._magnitude(other)
        if magnitude is None:
            return NotImplemented
        return Number(self.value + magnitude)

    __radd__ = __add__

    def __sub__(self, other):
        magnitude = self._magnitude(other)
        if magnitude is None:
            return NotImplemented
        return Number(self.value - magnitude)

    def __mul__(self, other):
        magnitude = self._magnitude(other)
        if magnitude is None:
            return NotImplemented
        return Number(self.value * magnitude)

    __rmul__ = __mul__

    def __floordiv__(self, other):
        magnitude = self._magnitude(other)
        if magnitude is None:
            return NotImplemented
        return Number(self.value // magnitude)

    __truediv__ = __floordiv__

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other):
        magnitude = self._magnitude(other)
        if magnitude is None:
            return NotImplemented
        return self.value == magnitude

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other):
        magnitude = self._magnitude(other)
        if magnitude is None:
            return NotImplemented
        return self.value < magnitude

    def __le__(self, other):
        magnitude = self._magnitude(other)
        if magnitude is None:
            return NotImplemented
        return self.value <= magnitude

    def __gt__(self, other):
        magnitude = self._magnitude(other)
        if magnitude is None:
            return NotImplemented
        return self.value > magnitude

    def __ge__(self, other):
        magnitude = self._magnitude(other)
        if magnitude is None:
            return NotImplemented
        return self.value >= magnitude


@dataclass(frozen=True)
class DayOfMonth(TimeNode):
    value: int

    def __post_init__(self):
        _check_range("day", self.value, 1, 31)


@dataclass(frozen=True)
class Year(TimeNode):
    value: int

    def __post_init__(self):
        _check_range("year", self.value, 0, 65535)


@dataclass(frozen=True)
class Minute(TimeNode):
    # 60 is accepted on purpose
    value: int

    def __post_init__(self):
        _check_range("minute", self.value, 0, 60)


@dataclass(frozen=True)
class Hour(TimeNode):
    """
    Hour of the day, either 12-hour (1..12 with a meridiem) or 24-hour
    (0..24). A missing ``am_pm`` means 24-hour.
    """
    value: int
    am_pm: Optional[AmPm] = None

    def __post_init__(self):
        if self.am_pm is None:
            _check_range("hour", self.value, 0, 24)
        else:
            if not isinstance(self.am_pm, AmPm):
                raise TypeError(f"am_pm must be an AmPm, got {type(self.am_pm).__name__}")
            _check_range("hour", self.value, 1, 12)

    @property
    def is_twelve_hour(self) -> bool:
        return self.am_pm is not None

    def _sort_key(self) -> Tuple[Any, ...]:
        # 12-hour variant is declared first
        if self.am_pm is not None:
            return (0, self.value, self.am_pm)
        return (1, self.value)


# ============================================================================
# Union roots
# ============================================================================

class TimeExpression(TimeNode):
    """Root of the grammar: a point in time, a range or a duration."""


class PointInTime(TimeExpression):
    """A specific point in time, absolute or relative."""


class AbsoluteTime(PointInTime):
    """A fixed Date or DateTime."""


class RelativeTime(PointInTime):
    """A point in time expressed relative to another one."""


# ============================================================================
# Absolute times
# ============================================================================

@dataclass(frozen=True)
class Time(TimeNode):
    hour: Hour
    minute: Minute

    def __post_init__(self):
        if isinstance(self.hour, int) and not isinstance(self.hour, bool):
            object.__setattr__(self, "hour", Hour(self.hour))
        _check_type("hour", self.hour, Hour)
        if not isinstance(self.minute, Minute):
            object.__setattr__(self, "minute", Minute(self.minute))


@dataclass(frozen=True)
class Date(AbsoluteTime):
    """Calendar date. No check is made that the day exists in the month."""
    month: Month
    day: DayOfMonth
    year: Year

    _VARIANT = (0, 0, 0)

    def __post_init__(self):
        if not isinstance(self.month, Month):
            object.__setattr__(self, "month", Month(self.month))
        if not isinstance(self.day, DayOfMonth):
            object.__setattr__(self, "day", DayOfMonth(self.day))
        if not isinstance(self.year, Year):
            object.__setattr__(self, "year", Year(self.year))


@dataclass(frozen=True)
class DateTime(AbsoluteTime):
    date: Date
    time: Time

    _VARIANT = (0, 0, 1)

    def __post_init__(self):
        _check_type("date", self.date, Date)
        _check_type("time", self.time, Time)


# ============================================================================
# Durations
# ============================================================================

_ZERO = Number(0)


@dataclass(frozen=True)
class Duration(TimeExpression):
    """
    Magnitude vector with one Number per TimeUnit.

    An unspecified unit and a zero unit are the same thing. Plain ints are
    accepted and wrapped in Number.
    """
    minutes: Number = _ZERO
    hours: Number = _ZERO
    days: Number = _ZERO
    weeks: Number = _ZERO
    months: Number = _ZERO
    years: Number = _ZERO

    _VARIANT = (2,)

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, Number):
                object.__setattr__(self, f.name, Number(value))

    def get(self, unit: TimeUnit) -> Number:
        return getattr(self, unit.field)

    def add(self, unit: TimeUnit, amount: Union[Number, int]) -> "Duration":
        """Return a copy with ``amount`` added to ``unit``."""
        return replace(self, **{unit.field: self.get(unit) + amount})

    def items(self) -> Iterator[Tuple[TimeUnit, Number]]:
        """Yield (unit, amount) pairs, smallest unit first."""
        for unit in TimeUnit:
            yield unit, self.get(unit)

    def is_zero(self) -> bool:
        return all(amount == 0 for _, amount in self.items())


# ============================================================================
# Relative times
# ============================================================================

_ANCHOR_TYPES = {
    DirectionKind.AFTER_ABSOLUTE: AbsoluteTime,
    DirectionKind.BEFORE_ABSOLUTE: AbsoluteTime,
    DirectionKind.AFTER_NAMED: NamedRelativeTime,
    DirectionKind.BEFORE_NAMED: NamedRelativeTime,
    DirectionKind.BEFORE_NEXT: RelativeTimeUnit,
    DirectionKind.BEFORE_LAST: RelativeTimeUnit,
    DirectionKind.AFTER_NEXT: RelativeTimeUnit,
    DirectionKind.AFTER_LAST: RelativeTimeUnit,
    DirectionKind.AGO: type(None),
    DirectionKind.FROM_NOW: type(None),
}


@dataclass(frozen=True)
class TimeDirection(TimeNode):
    """
    Attaches a Duration to an anchor ("after 1/1/2024", "before next week")
    or marks it as relative to now ("ago", "from now").
    """
    kind: DirectionKind
    anchor: Union[AbsoluteTime, NamedRelativeTime, RelativeTimeUnit, None] = None

    def __post_init__(self):
        if not isinstance(self.kind, DirectionKind):
            raise TypeError(f"kind must be a DirectionKind, got {type(self.kind).__name__}")
        expected = _ANCHOR_TYPES[self.kind]
        if not isinstance(self.anchor, expected):
            raise ValueError(
                f"{self.kind.name} needs an anchor of type {expected.__name__}, "
                f"got {type(self.anchor).__name__}"
            )


@dataclass(frozen=True)
class Directional(RelativeTime):
    """A Duration measured from an anchor: "3 days after tomorrow"."""
    duration: Duration
    direction: TimeDirection

    _VARIANT = (0, 1, 0)

    def __post_init__(self):
        _check_type("duration", self.duration, Duration)
        _check_type("direction", self.direction, TimeDirection)


@dataclass(frozen=True)
class Named(RelativeTime):
    name: NamedRelativeTime

    _VARIANT = (0, 1, 1)

    def __post_init__(self):
        _check_type("name", self.name, NamedRelativeTime)


@dataclass(frozen=True)
class Next(RelativeTime):
    unit: RelativeTimeUnit

    _VARIANT = (0, 1, 2)

    def __post_init__(self):
        _check_type("unit", self.unit, RelativeTimeUnit)


@dataclass(frozen=True)
class Last(RelativeTime):
    unit: RelativeTimeUnit

    _VARIANT = (0, 1, 3)

    def __post_init__(self):
        _check_type("unit", self.unit, RelativeTimeUnit)


# ============================================================================
# Ranges
# ============================================================================

@dataclass(frozen=True)
class TimeRange(TimeExpression):
    """Pair of points in time. ``start`` is not required to precede ``end``."""
    start: PointInTime
    end: PointInTime

    _VARIANT = (1,)

    def __post_init__(self):
        _check_type("start", self.start, PointInTime)
        _check_type("end", self.end, PointInTime)
