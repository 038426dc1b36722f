"""
timelang Parser Package

Recursive-descent parser for English-like time expressions. Produces
immutable, value-comparable AST nodes.

Key Features:
- Dates, date-times, durations, ranges and relative times
- Speculative parsing on forked cursors for ambiguous prefixes
- Range-checked fields with diagnostics that point at the offending token
"""

from .ast_nodes import *
from .parser import Parser, parse_string, parse_as
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser", "parse_string", "parse_as",

    # AST nodes
    "TimeNode", "TimeExpression", "PointInTime", "AbsoluteTime", "RelativeTime",
    "Date", "DateTime", "Time", "Duration", "TimeRange",
    "Directional", "Named", "Next", "Last", "TimeDirection", "DirectionKind",
    "Number", "DayOfMonth", "Year", "Minute", "Hour",
    "Month", "AmPm", "TimeUnit", "RelativeTimeUnit", "NamedRelativeTime",

    # Error handling
    "ParseError",
]
