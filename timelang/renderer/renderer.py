"""
Canonical text renderer for timelang ASTs.

The renderer is the structural inverse of the parser: for any node ``n`` that
the parser can produce, ``parse_as(type(n), render(n)) == n``. Rendering a
parsed expression normalizes it (keyword case, unit spellings, separators,
and the optional `at` / `the` fillers all come out the same way every time).
"""

from typing import Union

from ..parser.ast_nodes import *


NAMED_TIME_TEXT = {
    NamedRelativeTime.NOW: "now",
    NamedRelativeTime.TODAY: "today",
    NamedRelativeTime.TOMORROW: "tomorrow",
    NamedRelativeTime.YESTERDAY: "yesterday",
    NamedRelativeTime.DAY_AFTER_TOMORROW: "the day after tomorrow",
    NamedRelativeTime.DAY_BEFORE_YESTERDAY: "the day before yesterday",
}

DIRECTION_PREFIXES = {
    DirectionKind.AFTER_ABSOLUTE: "after",
    DirectionKind.BEFORE_ABSOLUTE: "before",
    DirectionKind.AFTER_NAMED: "after",
    DirectionKind.BEFORE_NAMED: "before",
    DirectionKind.BEFORE_NEXT: "before next",
    DirectionKind.BEFORE_LAST: "before last",
    DirectionKind.AFTER_NEXT: "after next",
    DirectionKind.AFTER_LAST: "after last",
    DirectionKind.AGO: "ago",
    DirectionKind.FROM_NOW: "from now",
}

# Units that are spelled as lowercase nouns; the rest are weekday names
_LOWERCASE_RELATIVE_UNITS = {RelativeTimeUnit.WEEK, RelativeTimeUnit.MONTH, RelativeTimeUnit.YEAR}


Renderable = Union[TimeNode, TimeEnum]


class Renderer:
    """
    Renders any timelang node to its canonical text.

    Stateless; one instance can be shared freely.
    """

    def render(self, node: Renderable) -> str:
        """Render a node of any type."""
        # Compound nodes
        if isinstance(node, TimeRange):
            return self.render_time_range(node)
        elif isinstance(node, Duration):
            return self.render_duration(node)
        elif isinstance(node, Date):
            return self.render_date(node)
        elif isinstance(node, DateTime):
            return self.render_date_time(node)
        elif isinstance(node, Directional):
            return f"{self.render_duration(node.duration)} {self.render_time_direction(node.direction)}"
        elif isinstance(node, Named):
            return self.render_named(node.name)
        elif isinstance(node, Next):
            return f"next {self.render_relative_time_unit(node.unit)}"
        elif isinstance(node, Last):
            return f"last {self.render_relative_time_unit(node.unit)}"
        elif isinstance(node, TimeDirection):
            return self.render_time_direction(node)
        elif isinstance(node, Time):
            return self.render_time(node)

        # Fields
        elif isinstance(node, Hour):
            return self.render_hour(node)
        elif isinstance(node, Minute):
            return f"{node.value:02d}"
        elif isinstance(node, (Number, DayOfMonth, Year)):
            return str(node.value)

        # Keywords
        elif isinstance(node, Month):
            return str(node.value)
        elif isinstance(node, AmPm):
            return node.word
        elif isinstance(node, TimeUnit):
            return node.word
        elif isinstance(node, RelativeTimeUnit):
            return self.render_relative_time_unit(node)
        elif isinstance(node, NamedRelativeTime):
            return self.render_named(node)
        else:
            raise TypeError(f"cannot render {type(node).__name__}")

    def render_time_range(self, time_range: TimeRange) -> str:
        return f"from {self.render(time_range.start)} to {self.render(time_range.end)}"

    def render_duration(self, duration: Duration) -> str:
        """
        Render the non-zero units, largest first, joined by ", ".

        A unit with an amount of exactly 1 uses the singular word. A duration
        with every unit at zero renders as the empty string.
        """
        parts = []
        for unit, amount in reversed(list(duration.items())):
            if amount == 0:
                continue
            word = unit.singular if amount == 1 else unit.word
            parts.append(f"{amount.value} {word}")
        return ", ".join(parts)

    def render_date(self, date: Date) -> str:
        return f"{date.day.value}/{date.month.value}/{date.year.value}"

    def render_date_time(self, date_time: DateTime) -> str:
        return f"{self.render_date(date_time.date)} at {self.render_time(date_time.time)}"

    def render_time(self, time: Time) -> str:
        text = f"{time.hour.value}:{time.minute.value:02d}"
        if time.hour.am_pm is not None:
            text += f" {time.hour.am_pm.word}"
        return text

    def render_hour(self, hour: Hour) -> str:
        if hour.am_pm is not None:
            return f"{hour.value} {hour.am_pm.word}"
        return str(hour.value)

    def render_time_direction(self, direction: TimeDirection) -> str:
        prefix = DIRECTION_PREFIXES[direction.kind]
        if direction.anchor is None:
            return prefix
        return f"{prefix} {self.render(direction.anchor)}"

    def render_relative_time_unit(self, unit: RelativeTimeUnit) -> str:
        if unit in _LOWERCASE_RELATIVE_UNITS:
            return unit.name.lower()
        return unit.name.capitalize()

    def render_named(self, name: NamedRelativeTime) -> str:
        return NAMED_TIME_TEXT[name]


_renderer = Renderer()


def render(node: Renderable) -> str:
    """Render ``node`` to canonical timelang text."""
    return _renderer.render(node)
