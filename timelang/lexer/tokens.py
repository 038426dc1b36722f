"""
Token definitions for the timelang lexer.

The timelang surface language only needs a handful of token kinds:
- Identifiers (keywords are plain identifiers, matched case-insensitively
  by the parser)
- Integer literals
- The punctuation used by dates, times and duration lists
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """Enumeration of all token types in timelang."""

    # Special
    EOF = auto()                    # End of input

    # Literals
    INTEGER = auto()                # 42, 2_024

    # Identifiers (keywords are identifiers too: from, ago, tuesday...)
    IDENTIFIER = auto()             # now, minutes, PM

    # Punctuation
    SLASH = auto()                  # / (date separator)
    COLON = auto()                  # : (time separator)
    COMMA = auto()                  # , (duration separator)


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source text.

    Used for error reporting so every diagnostic can point at the offending
    token.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Contains the token type, lexeme (raw text), semantic value
    (an ``int`` for integer literals) and its source location.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # Parsed value (int for INTEGER)
    location: SourceLocation

    def __str__(self) -> str:
        if self.type == TokenType.EOF:
            return "end of input"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def is_identifier(self) -> bool:
        """Check if this token is an identifier."""
        return self.type == TokenType.IDENTIFIER

    @property
    def is_integer(self) -> bool:
        """Check if this token is an integer literal."""
        return self.type == TokenType.INTEGER

    @property
    def word(self) -> str:
        """Case-folded lexeme, used for keyword matching."""
        return self.lexeme.lower()


# Punctuation lookup table used by the lexer
PUNCTUATION = {
    "/": TokenType.SLASH,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
}

# Human readable names for diagnostics
TOKEN_DESCRIPTIONS = {
    TokenType.EOF: "end of input",
    TokenType.INTEGER: "[number]",
    TokenType.IDENTIFIER: "[keyword]",
    TokenType.SLASH: "`/`",
    TokenType.COLON: "`:`",
    TokenType.COMMA: "`,`",
}
