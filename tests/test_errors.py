"""
Test suite for timelang diagnostics.

Checks error codes, messages, source locations and keyword suggestions.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from timelang.lexer.errors import LexerError
from timelang.parser.parser import parse_string, parse_as
from timelang.parser.errors import ParseError, KeywordSuggestions, PARSER_ERROR_CODES
from timelang.parser.ast_nodes import NamedRelativeTime, TimeDirection, TimeUnit


class TestParseErrors(unittest.TestCase):
    """Test cases for parse error reporting."""

    def _error(self, source, node_type=None, **kwargs) -> ParseError:
        with self.assertRaises(ParseError) as ctx:
            if node_type is None:
                parse_string(source, **kwargs)
            else:
                parse_as(node_type, source, **kwargs)
        return ctx.exception

    def test_empty_input(self):
        error = self._error("")
        self.assertEqual(error.code, "P002")
        self.assertEqual(error.message, "unexpected end of input, expected [number] or [keyword]")
        self.assertEqual(error.kind, "token_mismatch")

    def test_leading_punctuation(self):
        error = self._error("/")
        self.assertEqual(error.code, "P001")
        self.assertEqual(error.message, "expected [number] or [keyword], found `/`")

    def test_lone_number(self):
        error = self._error("5")
        self.assertEqual(error.code, "P002")
        self.assertIn("expected one of `minutes`", error.message)

    def test_day_bounds(self):
        for source in ("0/1/2020", "32/1/2020"):
            with self.subTest(source=source):
                error = self._error(source)
                self.assertEqual(error.kind, "range_violation")
                self.assertEqual(error.message, "day must be between 1 and 31 (inclusive)")
                self.assertEqual(error.location.column, 1)

    def test_month_bounds(self):
        for source in ("1/0/2020", "1/13/2020"):
            with self.subTest(source=source):
                error = self._error(source)
                self.assertEqual(error.code, "P003")
                self.assertEqual(error.location.column, 3)

    def test_year_bounds(self):
        error = self._error("1/1/70000")
        self.assertEqual(error.message, "year must be between 0 and 65535 (inclusive)")

    def test_range_keyword(self):
        error = self._error("from now until tomorrow")
        self.assertEqual(error.message, "expected `to`, found `until`")
        self.assertEqual(error.location.column, 10)
        self.assertEqual(error.token.lexeme, "until")

    def test_range_missing_end(self):
        error = self._error("from now to")
        self.assertEqual(error.code, "P002")

    def test_trailing_word_after_duration(self):
        error = self._error("3 days later")
        self.assertEqual(error.code, "P004")
        self.assertEqual(error.message, "unexpected token `later`")

    def test_from_requires_now(self):
        error = self._error("from tomorrow", TimeDirection)
        self.assertEqual(error.message, "expected `now`, found `tomorrow`")

    def test_unknown_direction(self):
        error = self._error("since", TimeDirection)
        self.assertEqual(error.message, "expected one of `after`, `before`, `ago`, `from`, found `since`")

    def test_named_time_diagnostics(self):
        cases = {
            "day after yesterday": "expected `tomorrow`, found `yesterday`",
            "day before tomorrow": "expected `yesterday`, found `tomorrow`",
            "day during tomorrow": "expected `before` or `after`, found `during`",
            "week after tomorrow": ("expected one of `day`, `now`, `today`, `tomorrow`, "
                                    "`yesterday`, `the`, found `week`"),
        }
        for source, message in cases.items():
            with self.subTest(source=source):
                self.assertEqual(self._error(source, NamedRelativeTime).message, message)

    def test_invalid_character(self):
        error = self._error("3 days ago!")
        self.assertEqual(error.code, "P005")
        self.assertIsInstance(error.__cause__, LexerError)
        self.assertEqual(error.location.column, 11)

    def test_filename_in_location(self):
        error = self._error("32/1/2020", filename="schedule.txt")
        self.assertEqual(error.location.filename, "schedule.txt")
        self.assertIn("schedule.txt:1:1", str(error))

    def test_str_includes_severity_and_help(self):
        text = str(self._error("32/1/2020"))
        self.assertTrue(text.startswith("ERROR: day must be between 1 and 31"))
        self.assertIn("help: Found 32.", text)

    def test_every_code_is_documented(self):
        self.assertEqual(sorted(PARSER_ERROR_CODES), ["P001", "P002", "P003", "P004", "P005"])


class TestKeywordSuggestions(unittest.TestCase):
    """Test cases for did-you-mean suggestions."""

    def test_misspelled_named_time(self):
        with self.assertRaises(ParseError) as ctx:
            NamedRelativeTime.from_str("tomorow")
        self.assertEqual(ctx.exception.diagnostic.suggestions, ["Did you mean `tomorrow`?"])

    def test_misspelled_unit(self):
        with self.assertRaises(ParseError) as ctx:
            TimeUnit.from_str("minuts")
        self.assertIn("Did you mean `minutes`?", ctx.exception.diagnostic.suggestions)

    def test_no_close_match(self):
        with self.assertRaises(ParseError) as ctx:
            TimeUnit.from_str("zzzzzzzz")
        self.assertIsNone(ctx.exception.diagnostic.suggestions)

    def test_suggest_is_case_insensitive(self):
        self.assertEqual(KeywordSuggestions.suggest("AGOO", ["ago", "after"]), ["ago"])

    def test_suggestions_are_limited(self):
        self.assertEqual(len(KeywordSuggestions.suggest("mi", ["min", "mins", "minute", "mi", "m"])), 3)


if __name__ == '__main__':
    unittest.main()
