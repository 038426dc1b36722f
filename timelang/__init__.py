"""
timelang

A small, English-like language for describing times, dates, durations and
time ranges, with a recursive-descent parser and a canonical renderer.

    >>> import timelang
    >>> expr = timelang.parse("2 days and 14 hours after the day after tomorrow")
    >>> type(expr).__name__
    'Directional'
    >>> str(timelang.parse("from 1/1/2023 to 15/1/2023"))
    'from 1/1/2023 to 15/1/2023'

Architecture:
    timelang/
    ├── lexer/           # Tokens, lexer and the forkable token cursor
    ├── parser/          # AST nodes, parser and parse errors
    └── renderer/        # Canonical text output
"""

__version__ = "0.1.0"
__license__ = "MIT"

import logging

from .lexer import Lexer, TokenCursor, tokenize_string, LexerError
from .parser import *
from .parser import Parser, ParseError, parse_string, parse_as
from .renderer import Renderer, render

# No output unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

parse = parse_string

__all__ = [
    # Entry points
    "parse", "parse_as", "render",

    # Stages
    "Lexer", "tokenize_string", "TokenCursor", "Parser", "Renderer",

    # AST nodes
    "TimeNode", "TimeExpression", "PointInTime", "AbsoluteTime", "RelativeTime",
    "Date", "DateTime", "Time", "Duration", "TimeRange",
    "Directional", "Named", "Next", "Last", "TimeDirection", "DirectionKind",
    "Number", "DayOfMonth", "Year", "Minute", "Hour",
    "Month", "AmPm", "TimeUnit", "RelativeTimeUnit", "NamedRelativeTime",

    # Errors
    "ParseError", "LexerError",

    # Version info
    "__version__",
]
