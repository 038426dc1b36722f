"""
Test suite for the top-level timelang package.

Covers the public entry points and the debug logging hooks.
"""

import logging
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

import timelang
from timelang.log import setup_logging, LOGGER_NAME


class TestPublicAPI(unittest.TestCase):
    """Test cases for the package entry points."""

    def test_parse_and_render(self):
        node = timelang.parse("2 days and 14 hours after the day after tomorrow")
        self.assertIsInstance(node, timelang.Directional)
        self.assertEqual(timelang.render(node), "2 days, 14 hours after the day after tomorrow")

    def test_parse_as(self):
        self.assertEqual(timelang.parse_as(timelang.Duration, "90 min"), timelang.Duration(minutes=90))

    def test_parse_error_is_exported(self):
        with self.assertRaises(timelang.ParseError):
            timelang.parse("13:00 PM")

    def test_stages_are_exported(self):
        tokens = timelang.Lexer("next week").tokenize()
        cursor = timelang.TokenCursor(tokens)
        self.assertEqual(cursor.peek().word, "next")
        self.assertEqual(timelang.Parser(tokens).parse(), timelang.Next(timelang.RelativeTimeUnit.WEEK))
        self.assertEqual(timelang.Renderer().render(timelang.Month.MAY), "5")

    def test_all_names_exist(self):
        for name in timelang.__all__:
            with self.subTest(name=name):
                self.assertTrue(hasattr(timelang, name))

    def test_version(self):
        self.assertRegex(timelang.__version__, r"^\d+\.\d+\.\d+")


class TestLogging(unittest.TestCase):
    """Test cases for debug logging."""

    def test_discarded_trial_is_logged(self):
        with self.assertLogs("timelang.parser.parser", level="DEBUG") as logs:
            timelang.parse("2 hours")
        self.assertTrue(any("parsing a duration instead" in line for line in logs.output))

    def test_chosen_root_alternative_is_logged(self):
        cases = {
            "from now to tomorrow": "parsing a time range",
            "1/1/2020": "parsing an absolute point in time",
            "next week": "Parsed a point in time",
        }
        for source, message in cases.items():
            with self.subTest(source=source):
                with self.assertLogs("timelang.parser.parser", level="DEBUG") as logs:
                    timelang.parse(source)
                self.assertTrue(any(message in line for line in logs.output))

    def test_lexer_logs_token_count(self):
        with self.assertLogs("timelang.lexer.lexer", level="DEBUG") as logs:
            timelang.tokenize_string("3 days ago")
        self.assertIn("4 tokens", logs.output[0])

    def test_setup_logging(self):
        logger = logging.getLogger(LOGGER_NAME)
        saved_level, saved_handlers = logger.level, list(logger.handlers)
        try:
            self.assertIs(setup_logging("INFO"), logger)
            setup_logging(logging.DEBUG)
            streams = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
            self.assertEqual(len(streams), 1)
            self.assertEqual(logger.level, logging.DEBUG)
        finally:
            logger.handlers = saved_handlers
            logger.setLevel(saved_level)


if __name__ == '__main__':
    unittest.main()
