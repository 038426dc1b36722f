"""
Test suite for the timelang renderer.

Tests cover:
- Canonical text for every node type
- Normalization of parsed input
- Round trips between text and trees
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from timelang.parser.parser import parse_string, parse_as
from timelang.parser.ast_nodes import *
from timelang.renderer.renderer import Renderer, render


class TestRenderer(unittest.TestCase):
    """Test cases for canonical rendering."""

    def test_fields(self):
        self.assertEqual(render(Number(42)), "42")
        self.assertEqual(render(DayOfMonth(7)), "7")
        self.assertEqual(render(Year(5)), "5")
        self.assertEqual(render(Month.JUNE), "6")
        self.assertEqual(render(Minute(5)), "05")
        self.assertEqual(render(AmPm.PM), "PM")
        self.assertEqual(render(TimeUnit.HOURS), "hours")
        self.assertEqual(render(TimeUnit.WEEKS), "weeks")

    def test_hours(self):
        self.assertEqual(render(Hour(7, AmPm.AM)), "7 AM")
        self.assertEqual(render(Hour(13)), "13")

    def test_times(self):
        self.assertEqual(render(Time(Hour(2, AmPm.PM), 5)), "2:05 PM")
        self.assertEqual(render(Time(Hour(0), 0)), "0:00")

    def test_dates(self):
        self.assertEqual(render(Date(4, 20, 2021)), "20/4/2021")
        self.assertEqual(render(DateTime(Date(6, 15, 2022), Time(Hour(14), 0))), "15/6/2022 at 14:00")

    def test_durations(self):
        self.assertEqual(render(Duration(years=2, minutes=1)), "2 years, 1 minute")
        self.assertEqual(render(Duration(hours=1)), "1 hour")
        self.assertEqual(render(Duration(weeks=3, days=1)), "3 weeks, 1 day")
        self.assertEqual(render(Duration(minutes=90)), "90 minutes")
        self.assertEqual(render(Duration()), "")

    def test_relative_units(self):
        self.assertEqual(render(Next(RelativeTimeUnit.TUESDAY)), "next Tuesday")
        self.assertEqual(render(Last(RelativeTimeUnit.WEEK)), "last week")

    def test_named(self):
        self.assertEqual(render(NamedRelativeTime.DAY_AFTER_TOMORROW), "the day after tomorrow")
        self.assertEqual(render(Named(NamedRelativeTime.DAY_BEFORE_YESTERDAY)), "the day before yesterday")
        self.assertEqual(render(Named(NamedRelativeTime.NOW)), "now")

    def test_directions(self):
        cases = [
            (TimeDirection(DirectionKind.AGO), "ago"),
            (TimeDirection(DirectionKind.FROM_NOW), "from now"),
            (TimeDirection(DirectionKind.AFTER_ABSOLUTE, Date(1, 1, 2024)), "after 1/1/2024"),
            (TimeDirection(DirectionKind.BEFORE_NAMED, NamedRelativeTime.TODAY), "before today"),
            (TimeDirection(DirectionKind.BEFORE_NEXT, RelativeTimeUnit.MONTH), "before next month"),
            (TimeDirection(DirectionKind.AFTER_LAST, RelativeTimeUnit.FRIDAY), "after last Friday"),
        ]
        for node, text in cases:
            with self.subTest(text=text):
                self.assertEqual(render(node), text)

    def test_directional_and_range(self):
        node = TimeRange(
            Directional(Duration(days=3), TimeDirection(DirectionKind.AGO)),
            Named(NamedRelativeTime.NOW),
        )
        self.assertEqual(render(node), "from 3 days ago to now")

    def test_str_uses_renderer(self):
        node = Duration(hours=2, minutes=30)
        self.assertEqual(str(node), render(node))
        self.assertEqual(str(Month.MARCH), "3")

    def test_renderer_instance(self):
        renderer = Renderer()
        self.assertEqual(renderer.render(Date(1, 2, 2003)), "2/1/2003")
        self.assertEqual(renderer.render_duration(Duration(days=1)), "1 day")

    def test_zero_duration_keeps_direction(self):
        # Zero units are dropped, so only the direction text is left
        self.assertEqual(render(parse_string("0 days ago")), " ago")
        self.assertEqual(render(Directional(Duration(), TimeDirection(DirectionKind.FROM_NOW))), " from now")

    def test_unknown_type(self):
        with self.assertRaises(TypeError):
            render(object())
        with self.assertRaises(TypeError):
            render(DirectionKind.AGO)


class TestNormalization(unittest.TestCase):
    """Rendering a parse normalizes the input."""

    def test_normalized_text(self):
        cases = {
            "NEXT tuesday": "next Tuesday",
            "2 HRS and 1 min ago": "2 hours, 1 minute ago",
            "3 minutes, 2 hours, 4 minutes": "2 hours, 7 minutes",
            "15/6/2022 14:00": "15/6/2022 at 14:00",
            "day after tomorrow": "the day after tomorrow",
            "1/1/2020 at 9:05 pm": "1/1/2020 at 9:05 PM",
            "1 week 2 days": "1 week, 2 days",
            "From Now To Tomorrow": "from now to tomorrow",
        }
        for source, text in cases.items():
            with self.subTest(source=source):
                self.assertEqual(str(parse_string(source)), text)


class TestRoundTrip(unittest.TestCase):
    """Text -> tree -> text and tree -> text -> tree."""

    CANONICAL = [
        "20/4/2021",
        "15/6/2022 at 14:00",
        "18/9/2024 at 4:32 PM",
        "from 1/1/2023 to 15/1/2023",
        "2 hours, 30 minutes",
        "1 year, 2 months, 3 weeks, 4 days, 5 hours, 6 minutes",
        "3 days ago",
        "5 years from now",
        "next Tuesday",
        "last year",
        "now",
        "the day before yesterday",
        "2 days, 14 hours after the day after tomorrow",
        "3 hours before 18/9/2024 at 4:32 PM",
        "1 week before next month",
        "1 minute after last Sunday",
        "from 3 days ago to now",
    ]

    def test_canonical_text_is_stable(self):
        for text in self.CANONICAL:
            with self.subTest(text=text):
                self.assertEqual(str(parse_string(text)), text)

    def test_render_is_idempotent(self):
        for source in ("2 HRS and 1 min ago", "from NOW to the day after tomorrow", "15/6/2022 14:00"):
            with self.subTest(source=source):
                once = render(parse_string(source))
                self.assertEqual(render(parse_string(once)), once)

    def test_trees_survive(self):
        nodes = [
            Date(12, 25, 2030),
            DateTime(Date(1, 1, 2000), Time(Hour(12, AmPm.AM), 0)),
            Duration(days=1, hours=2),
            Duration(minutes=60),
            Directional(Duration(weeks=2), TimeDirection(DirectionKind.AFTER_NEXT, RelativeTimeUnit.YEAR)),
            Directional(Duration(hours=1), TimeDirection(DirectionKind.BEFORE_ABSOLUTE, Date(2, 3, 2024))),
            TimeRange(Next(RelativeTimeUnit.MONDAY), Last(RelativeTimeUnit.FRIDAY)),
            Named(NamedRelativeTime.YESTERDAY),
        ]
        for node in nodes:
            with self.subTest(node=node):
                self.assertEqual(parse_string(render(node)), node)

    def test_fields_survive(self):
        for node in (Hour(11, AmPm.PM), Hour(0), Minute(7), Month.OCTOBER, TimeUnit.YEARS,
                     RelativeTimeUnit.SUNDAY, Time(Hour(23), 59)):
            with self.subTest(node=node):
                self.assertEqual(parse_as(type(node), render(node)), node)


if __name__ == '__main__':
    unittest.main()
