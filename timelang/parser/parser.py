"""
timelang Recursive-Descent Parser

Builds timelang ASTs from a token cursor. Most productions are decided by the
next one to three tokens; where one production is a textual prefix of another
(a Date versus a DateTime, a Duration versus "<duration> ago") the parser
forks the cursor, tries the longer alternative on the fork and only moves the
real cursor forward once it knows which alternative applies.
"""

import logging
from typing import Any, Callable, Dict, Optional, Sequence, Type

from ..lexer import LexerError, Token, TokenType, TokenCursor, tokenize_string
from .ast_nodes import *
from .errors import (
    ParseError, create_unexpected_token_error, create_range_error,
    create_trailing_input_error
)

logger = logging.getLogger(__name__)


# Keyword lookup tables. Keys are case-folded.

AM_PM_WORDS = {
    "am": AmPm.AM,
    "pm": AmPm.PM,
}

TIME_UNIT_WORDS = {
    "minutes": TimeUnit.MINUTES,
    "minute": TimeUnit.MINUTES,
    "mins": TimeUnit.MINUTES,
    "min": TimeUnit.MINUTES,
    "hours": TimeUnit.HOURS,
    "hour": TimeUnit.HOURS,
    "hrs": TimeUnit.HOURS,
    "hr": TimeUnit.HOURS,
    "days": TimeUnit.DAYS,
    "day": TimeUnit.DAYS,
    "weeks": TimeUnit.WEEKS,
    "week": TimeUnit.WEEKS,
    "months": TimeUnit.MONTHS,
    "month": TimeUnit.MONTHS,
    "years": TimeUnit.YEARS,
    "year": TimeUnit.YEARS,
    "yr": TimeUnit.YEARS,
}

RELATIVE_TIME_UNIT_WORDS = {
    "week": RelativeTimeUnit.WEEK,
    "month": RelativeTimeUnit.MONTH,
    "year": RelativeTimeUnit.YEAR,
    "monday": RelativeTimeUnit.MONDAY,
    "tuesday": RelativeTimeUnit.TUESDAY,
    "wednesday": RelativeTimeUnit.WEDNESDAY,
    "thursday": RelativeTimeUnit.THURSDAY,
    "friday": RelativeTimeUnit.FRIDAY,
    "saturday": RelativeTimeUnit.SATURDAY,
    "sunday": RelativeTimeUnit.SUNDAY,
}

SINGLE_WORD_NAMED_TIMES = {
    "now": NamedRelativeTime.NOW,
    "today": NamedRelativeTime.TODAY,
    "tomorrow": NamedRelativeTime.TOMORROW,
    "yesterday": NamedRelativeTime.YESTERDAY,
}

MULTI_WORD_NAMED_TIMES = {
    ("day", "after", "tomorrow"): NamedRelativeTime.DAY_AFTER_TOMORROW,
    ("day", "before", "yesterday"): NamedRelativeTime.DAY_BEFORE_YESTERDAY,
}

# First words that send a RelativeTime down the NamedRelativeTime path
NAMED_TIME_LEADERS = ("day", "now", "today", "tomorrow", "yesterday", "the")

DIRECTION_WORDS = ("after", "before", "ago", "from")

ABSOLUTE_ANCHOR_KINDS = {
    "after": DirectionKind.AFTER_ABSOLUTE,
    "before": DirectionKind.BEFORE_ABSOLUTE,
}

NAMED_ANCHOR_KINDS = {
    "after": DirectionKind.AFTER_NAMED,
    "before": DirectionKind.BEFORE_NAMED,
}

UNIT_ANCHOR_KINDS = {
    ("after", "next"): DirectionKind.AFTER_NEXT,
    ("after", "last"): DirectionKind.AFTER_LAST,
    ("before", "next"): DirectionKind.BEFORE_NEXT,
    ("before", "last"): DirectionKind.BEFORE_LAST,
}

# Diagnostic wording
EXPECTED_TIME_UNIT = "one of `minutes`, `hours`, `days`, `weeks`, `months`, `years`"
EXPECTED_RELATIVE_TIME_UNIT = (
    "one of `week`, `month`, `year`, `monday`, `tuesday`, `wednesday`, "
    "`thursday`, `friday`, `saturday` or `sunday`"
)
EXPECTED_NAMED_TIME = "one of `day`, `now`, `today`, `tomorrow`, `yesterday`, `the`"
EXPECTED_DIRECTION = "one of `after`, `before`, `ago`, `from`"
EXPECTED_DURATION = f"[number] followed by {EXPECTED_TIME_UNIT}"


class Parser:
    """
    timelang recursive-descent parser.

    Each grammar rule is a ``_parse_*`` method that consumes tokens from
    ``self.cursor`` and either returns a finished node or raises ParseError.
    Errors raised inside a committed rule propagate unchanged; errors raised
    on a forked trial parser only decide which alternative is taken.
    """

    def __init__(self, tokens: Sequence[Token], cursor: Optional[TokenCursor] = None):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: EOF-terminated list of tokens from the lexer
            cursor: Existing cursor over ``tokens`` to continue from
        """
        self.cursor = cursor if cursor is not None else TokenCursor(tokens)

        self._init_parsing_tables()

    def _init_parsing_tables(self):
        """Map every node type that can be parsed on its own to its rule."""
        self.node_parsers: Dict[type, Callable[[], Any]] = {
            # Root and compound nodes
            TimeExpression: self._parse_time_expression,
            TimeRange: self._parse_time_range,
            PointInTime: self._parse_point_in_time,
            AbsoluteTime: self._parse_absolute_time,
            RelativeTime: self._parse_relative_time,
            NamedRelativeTime: self._parse_named_relative_time,
            TimeDirection: self._parse_time_direction,
            Duration: self._parse_duration,
            DateTime: self._parse_date_time,
            Date: self._parse_date,
            Time: self._parse_time,

            # Fields
            Number: self._parse_number,
            DayOfMonth: self._parse_day_of_month,
            Month: self._parse_month,
            Year: self._parse_year,
            Hour: self._parse_hour,
            Minute: self._parse_minute,
            AmPm: self._parse_am_pm,
            TimeUnit: self._parse_time_unit,
            RelativeTimeUnit: self._parse_relative_time_unit,
        }

    def parse(self) -> TimeExpression:
        """
        Parse the token stream as a complete time expression.

        Raises:
            ParseError: If the tokens are not a valid time expression
        """
        return self.parse_node(TimeExpression)

    def parse_node(self, node_type: Type) -> Any:
        """
        Parse the token stream as ``node_type``, requiring every token to be used.

        Raises:
            TypeError: If ``node_type`` has no grammar rule of its own
            ParseError: If the tokens are not a valid ``node_type``
        """
        rule = self.node_parsers.get(node_type)
        if rule is None:
            raise TypeError(f"{getattr(node_type, '__name__', node_type)} cannot be parsed directly")

        node = rule()
        self._expect_end()
        logger.debug("Parsed %s: %r", node_type.__name__, node)
        return node

    # ------------------------------------------------------------------
    # Expression root
    # ------------------------------------------------------------------

    def _parse_time_expression(self) -> TimeExpression:
        """
        Choose between a range, a point in time and a duration.

        Durations and directional relative times share their whole prefix
        ("2 hours" / "2 hours ago"), so those two are told apart by trying
        the point in time on a fork first.
        """
        token = self._peek()
        if not (token.is_identifier or token.is_integer):
            raise create_unexpected_token_error("[number] or [keyword]", token)

        if token.is_identifier and token.word == "from":
            logger.debug("Leading `from`, parsing a time range")
            return self._parse_time_range()

        if self._check(TokenType.INTEGER, TokenType.SLASH):
            logger.debug("Leading date, parsing an absolute point in time")
            return self._parse_point_in_time()

        trial = self._fork()
        try:
            point = trial._parse_point_in_time()
        except ParseError as error:
            logger.debug("Not a point in time (%s), parsing a duration instead", error.message)
            return self._parse_duration()

        logger.debug("Parsed a point in time")
        self._commit(trial)
        return point

    def _parse_time_range(self) -> TimeRange:
        self._consume_keyword("from")
        start = self._parse_point_in_time()
        self._consume_keyword("to")
        end = self._parse_point_in_time()
        return TimeRange(start, end)

    def _parse_point_in_time(self) -> PointInTime:
        if self._check(TokenType.INTEGER, TokenType.SLASH):
            return self._parse_absolute_time()
        return self._parse_relative_time()

    # ------------------------------------------------------------------
    # Absolute times
    # ------------------------------------------------------------------

    def _parse_absolute_time(self) -> AbsoluteTime:
        """
        Parse a Date, or a DateTime when a time follows the date.

        A time follows when the tokens after the date look like
        ``12 : 30`` or ``at 12 :``.
        """
        trial = self._fork()
        date = trial._parse_date()
        has_time = (trial._check(TokenType.INTEGER, TokenType.COLON, TokenType.INTEGER)
                    or trial._check(TokenType.IDENTIFIER, TokenType.INTEGER, TokenType.COLON))
        self._commit(trial)

        if not has_time:
            return date
        self._parse_optional_at()
        return DateTime(date, self._parse_time())

    def _parse_date_time(self) -> DateTime:
        date = self._parse_date()
        self._parse_optional_at()
        return DateTime(date, self._parse_time())

    def _parse_optional_at(self):
        """Consume the filler word between a date and a time, if present."""
        if self._check(TokenType.IDENTIFIER):
            token = self._advance()
            if token.word != "at":
                raise create_unexpected_token_error("`at`", token, ["at"])

    def _parse_date(self) -> Date:
        day = self._parse_day_of_month()
        self._consume(TokenType.SLASH)
        month = self._parse_month()
        self._consume(TokenType.SLASH)
        year = self._parse_year()
        return Date(month, day, year)

    def _parse_time(self) -> Time:
        """
        Parse ``hour : minute [am|pm]``.

        The hour is validated only once we know whether a meridiem follows
        the minute, since that decides the allowed range.
        """
        hour_token = self._consume(TokenType.INTEGER)
        self._consume(TokenType.COLON)
        minute = self._parse_minute()
        am_pm = self._parse_optional_am_pm()
        return Time(self._make_hour(hour_token, am_pm), minute)

    # ------------------------------------------------------------------
    # Relative times
    # ------------------------------------------------------------------

    def _parse_relative_time(self) -> RelativeTime:
        token = self._peek()
        if token.is_identifier:
            if token.word in ("next", "last"):
                self._advance()
                unit = self._parse_relative_time_unit()
                return Next(unit) if token.word == "next" else Last(unit)
            if token.word in NAMED_TIME_LEADERS:
                return Named(self._parse_named_relative_time())

        duration = self._parse_duration()
        direction = self._parse_time_direction()
        return Directional(duration, direction)

    def _parse_named_relative_time(self) -> NamedRelativeTime:
        first = self._consume_identifier(EXPECTED_NAMED_TIME)
        if first.word in SINGLE_WORD_NAMED_TIMES:
            return SINGLE_WORD_NAMED_TIMES[first.word]

        if first.word == "the":
            first = self._consume_identifier("`day`")
        if first.word != "day":
            raise create_unexpected_token_error(EXPECTED_NAMED_TIME, first, NAMED_TIME_LEADERS)

        second = self._consume_identifier("`before` or `after`")
        if second.word not in ("before", "after"):
            raise create_unexpected_token_error("`before` or `after`", second, ["before", "after"])

        third = self._consume_identifier("`tomorrow` or `yesterday`")
        named = MULTI_WORD_NAMED_TIMES.get((first.word, second.word, third.word))
        if named is not None:
            return named

        if third.word == "tomorrow":
            raise create_unexpected_token_error("`yesterday`", third)
        raise create_unexpected_token_error("`tomorrow`", third, ["tomorrow"])

    def _parse_time_direction(self) -> TimeDirection:
        token = self._consume_identifier(EXPECTED_DIRECTION)
        word = token.word

        if word in ("after", "before"):
            return self._parse_anchor(word)
        if word == "ago":
            return TimeDirection(DirectionKind.AGO)
        if word == "from":
            self._consume_keyword("now")
            return TimeDirection(DirectionKind.FROM_NOW)

        raise create_unexpected_token_error(EXPECTED_DIRECTION, token, DIRECTION_WORDS)

    def _parse_anchor(self, word: str) -> TimeDirection:
        """Parse what follows `after` / `before`."""
        if self._check(TokenType.INTEGER):
            return TimeDirection(ABSOLUTE_ANCHOR_KINDS[word], self._parse_absolute_time())

        token = self._peek()
        if not token.is_identifier:
            raise create_unexpected_token_error("[date] or [keyword]", token)

        if token.word in ("next", "last"):
            self._advance()
            kind = UNIT_ANCHOR_KINDS[(word, token.word)]
            return TimeDirection(kind, self._parse_relative_time_unit())

        return TimeDirection(NAMED_ANCHOR_KINDS[word], self._parse_named_relative_time())

    # ------------------------------------------------------------------
    # Durations
    # ------------------------------------------------------------------

    def _parse_duration(self) -> Duration:
        """
        Parse one or more ``<number> <unit>`` pairs.

        Pairs may be separated by a comma, by `and`, by both or by nothing.
        Repeated units add up rather than replace each other.
        """
        totals: Dict[TimeUnit, Number] = {}

        while self._check(TokenType.INTEGER):
            amount = self._parse_number()
            unit = self._parse_time_unit()
            totals[unit] = totals.get(unit, Number(0)) + amount

            self._match(TokenType.COMMA)
            # Any other word is left for whoever parses next
            if self._check_word("and"):
                self._advance()

        if not totals:
            raise create_unexpected_token_error(EXPECTED_DURATION, self._peek())

        return Duration(**{unit.field: amount for unit, amount in totals.items()})

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def _parse_number(self) -> Number:
        return Number(self._consume(TokenType.INTEGER).value)

    def _parse_bounded_integer(self, field: str, low: int, high: int) -> int:
        token = self._consume(TokenType.INTEGER)
        if not low <= token.value <= high:
            raise create_range_error(field, low, high, token)
        return token.value

    def _parse_day_of_month(self) -> DayOfMonth:
        return DayOfMonth(self._parse_bounded_integer("day", 1, 31))

    def _parse_month(self) -> Month:
        return Month(self._parse_bounded_integer("month", 1, 12))

    def _parse_year(self) -> Year:
        return Year(self._parse_bounded_integer("year", 0, 65535))

    def _parse_minute(self) -> Minute:
        return Minute(self._parse_bounded_integer("minute", 0, 60))

    def _parse_hour(self) -> Hour:
        token = self._consume(TokenType.INTEGER)
        return self._make_hour(token, self._parse_optional_am_pm())

    def _make_hour(self, token: Token, am_pm: Optional[AmPm]) -> Hour:
        if am_pm is not None:
            if not 1 <= token.value <= 12:
                raise create_range_error("hour", 1, 12, token)
            return Hour(token.value, am_pm)

        if token.value > 24:
            raise create_range_error("hour", 0, 24, token)
        return Hour(token.value)

    def _parse_optional_am_pm(self) -> Optional[AmPm]:
        """Consume a meridiem if one comes next; never consumes anything else."""
        if self._check_word(*AM_PM_WORDS):
            return AM_PM_WORDS[self._advance().word]
        return None

    def _parse_am_pm(self) -> AmPm:
        return self._parse_keyword(AM_PM_WORDS, "`AM` or `PM`")

    def _parse_time_unit(self) -> TimeUnit:
        return self._parse_keyword(TIME_UNIT_WORDS, EXPECTED_TIME_UNIT)

    def _parse_relative_time_unit(self) -> RelativeTimeUnit:
        return self._parse_keyword(RELATIVE_TIME_UNIT_WORDS, EXPECTED_RELATIVE_TIME_UNIT)

    def _parse_keyword(self, table: Dict[str, Any], expected: str) -> Any:
        """Consume an identifier and look it up in a keyword table."""
        token = self._consume_identifier(expected)
        value = table.get(token.word)
        if value is None:
            raise create_unexpected_token_error(expected, token, table)
        return value

    # ------------------------------------------------------------------
    # Speculation
    # ------------------------------------------------------------------

    def _fork(self) -> "Parser":
        """Return a trial parser on an independent copy of the cursor."""
        return Parser(self.cursor.tokens, self.cursor.fork())

    def _commit(self, trial: "Parser"):
        """Move this parser's cursor to where ``trial`` stopped."""
        self.cursor.commit(trial.cursor)

    # ------------------------------------------------------------------
    # Utility methods
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> Token:
        """Return an upcoming token without consuming it."""
        return self.cursor.peek(offset)

    def _check(self, *token_types: TokenType) -> bool:
        """Check if the upcoming tokens match the given types without consuming."""
        return self.cursor.check(*token_types)

    def _check_word(self, *words: str) -> bool:
        """Check if the current token is one of the given (case-folded) words."""
        return self.cursor.check_word(*words)

    def _match(self, token_type: TokenType) -> bool:
        """Check if current token matches type and consume if so."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _advance(self) -> Token:
        """Consume and return current token."""
        return self.cursor.advance()

    def _consume(self, token_type: TokenType, expected: Optional[str] = None) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()
        raise create_unexpected_token_error(expected or token_type, self._peek())

    def _consume_identifier(self, expected: str) -> Token:
        return self._consume(TokenType.IDENTIFIER, expected)

    def _consume_keyword(self, word: str) -> Token:
        """Consume an identifier spelling ``word`` (any case) or raise error."""
        if self._check_word(word):
            return self._advance()
        raise create_unexpected_token_error(f"`{word}`", self._peek(), [word])

    def _expect_end(self):
        if not self.cursor.is_at_end():
            raise create_trailing_input_error(self._peek())


def parse_as(node_type: Type, source: str, filename: str = "<string>") -> Any:
    """
    Parse ``source`` as a specific node type.

    Args:
        node_type: Any node class with a grammar rule (Duration, Date, Hour...)
        source: Text to parse; all of it must be used
        filename: Name used in diagnostics

    Raises:
        ParseError: If the text is not a valid ``node_type``
        TypeError: If ``node_type`` cannot be parsed on its own
    """
    try:
        tokens = tokenize_string(source, filename)
    except LexerError as error:
        raise ParseError.from_lexer_error(error) from error

    parser = Parser(tokens)
    return parser.parse_node(node_type)


def parse_string(source: str, filename: str = "<string>") -> TimeExpression:
    """
    Convenience function to parse a time expression.

    Args:
        source: Text to parse
        filename: Filename for error reporting

    Returns:
        The TimeExpression node (a PointInTime, TimeRange or Duration)

    Raises:
        ParseError: If parsing fails
    """
    return parse_as(TimeExpression, source, filename)
