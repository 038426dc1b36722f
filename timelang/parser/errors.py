"""
Error handling for the timelang parser.

There is a single error type, ParseError. Its code tells apart a token or
keyword that does not fit the grammar from a well-formed integer that is
outside the bounds of its field.
"""

from typing import Iterable, List, Optional

from ..lexer.tokens import Token, TokenType, SourceLocation, TOKEN_DESCRIPTIONS
from ..lexer.errors import Diagnostic, LexerError


class ParseError(Exception):
    """
    Exception raised when text is not a valid time expression.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.location = location
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def kind(self) -> str:
        """Either ``"range_violation"`` or ``"token_mismatch"``."""
        if self.code == "P003":
            return "range_violation"
        return "token_mismatch"

    @classmethod
    def from_lexer_error(cls, error: LexerError) -> "ParseError":
        diagnostic = error.diagnostic
        return cls(
            message=diagnostic.message,
            location=diagnostic.location,
            code="P005",
            help_text=diagnostic.help_text,
            suggestions=diagnostic.suggestions,
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


class KeywordSuggestions:
    """Suggest keywords close to a misspelled word."""

    @staticmethod
    def suggest(invalid_word: str, candidates: Iterable[str]) -> List[str]:
        """Suggest corrections using edit distance."""
        word = invalid_word.lower()
        suggestions = [c for c in candidates if KeywordSuggestions._edit_distance(word, c) <= 2]
        return sorted(suggestions, key=lambda c: KeywordSuggestions._edit_distance(word, c))[:3]

    @staticmethod
    def _edit_distance(s1: str, s2: str) -> int:
        """Calculate Levenshtein distance between two strings."""
        if len(s1) < len(s2):
            return KeywordSuggestions._edit_distance(s2, s1)

        if len(s2) == 0:
            return len(s1)

        previous_row = list(range(len(s2) + 1))
        for i, c1 in enumerate(s1):
            current_row = [i + 1]
            for j, c2 in enumerate(s2):
                insertions = previous_row[j + 1] + 1
                deletions = current_row[j] + 1
                substitutions = previous_row[j] + (c1 != c2)
                current_row.append(min(insertions, deletions, substitutions))
            previous_row = current_row

        return previous_row[-1]


# Parser error codes
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Unexpected end of input",
    "P003": "Value out of range",
    "P004": "Unexpected trailing input",
    "P005": "Invalid character",
}


def _describe(expected) -> str:
    if isinstance(expected, TokenType):
        return TOKEN_DESCRIPTIONS[expected]
    return expected


def create_unexpected_token_error(expected, found: Token,
                                  candidates: Optional[Iterable[str]] = None) -> ParseError:
    """
    Create an error for a token that does not fit the grammar.

    ``expected`` is a TokenType or a free-form description such as
    "one of `after`, `before`, `ago`, `from`". When ``candidates`` are given
    and the offending token is a word, close matches are offered as
    suggestions.
    """
    expected_str = _describe(expected)

    if found.type == TokenType.EOF:
        return create_unexpected_eof_error(expected_str, found.location, found)

    suggestions = []
    if candidates is not None and found.is_identifier:
        suggestions = [f"Did you mean `{c}`?" for c in KeywordSuggestions.suggest(found.lexeme, candidates)]

    return ParseError(
        message=f"expected {expected_str}, found `{found.lexeme}`",
        location=found.location,
        token=found,
        code="P001",
        suggestions=suggestions or None
    )


def create_unexpected_eof_error(expected: str, location: SourceLocation,
                                token: Optional[Token] = None) -> ParseError:
    """Create an error for input that ends too early."""
    return ParseError(
        message=f"unexpected end of input, expected {expected}",
        location=location,
        token=token,
        code="P002",
        help_text=f"The expression is incomplete: {expected} should follow."
    )


def create_range_error(field: str, low: int, high: int, found: Token) -> ParseError:
    """Create an error for an integer outside the bounds of its field."""
    return ParseError(
        message=f"{field} must be between {low} and {high} (inclusive)",
        location=found.location,
        token=found,
        code="P003",
        help_text=f"Found {found.lexeme}."
    )


def create_trailing_input_error(found: Token) -> ParseError:
    """Create an error for tokens left over after a complete expression."""
    return ParseError(
        message=f"unexpected token `{found.lexeme}`",
        location=found.location,
        token=found,
        code="P004",
        help_text="The expression is complete before this token; remove the extra input."
    )
