"""
timelang Lexer - turns raw text into tokens

Time expressions are short, so the lexer is a single pass over the
characters. Keywords are not special-cased here: "from", "ago" and
"tuesday" are all plain identifiers and the parser decides what they mean.
Words and numbers are ASCII only; any other letter or digit is an invalid
character.
"""

import logging
import re
from typing import List, Optional

from .tokens import Token, TokenType, SourceLocation, PUNCTUATION
from .errors import LexerError, create_invalid_character_error

logger = logging.getLogger(__name__)


class Lexer:
    """
    timelang lexical analyzer.

    Converts source text into a list of tokens terminated by an EOF token,
    collecting errors for characters it cannot handle.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source text.

        Args:
            source: Source text
            filename: Name used in source locations for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.errors: List[LexerError] = []

        self._compile_patterns()

    def _compile_patterns(self):
        """Compile regex patterns used by the lexer."""
        self.decimal_pattern = re.compile(r'[0-9][0-9_]*')
        self.identifier_pattern = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens including EOF token
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []
        self.errors = []

        while self.pos < len(self.source):
            try:
                self._skip_whitespace()

                if self.pos >= len(self.source):
                    break

                token = self._next_token()
                if token:
                    self.tokens.append(token)

            except LexerError as e:
                self.errors.append(e)
                # Skip the problematic character and keep going
                self._advance()

        eof_location = SourceLocation(self.filename, self.line, self.column, self.pos)
        self.tokens.append(Token(TokenType.EOF, "", None, eof_location))

        logger.debug("Tokenized %r into %d tokens (%d errors)",
                     self.source, len(self.tokens), len(self.errors))
        return self.tokens

    def _next_token(self) -> Optional[Token]:
        """Get the next token from the source."""
        if self.pos >= len(self.source):
            return None

        location = SourceLocation(self.filename, self.line, self.column, self.pos)
        current_char = self.source[self.pos]

        # Integer literals
        match = self.decimal_pattern.match(self.source, self.pos)
        if match:
            lexeme = match.group(0)
            self._advance_by(len(lexeme))
            return Token(TokenType.INTEGER, lexeme, int(lexeme.replace('_', '')), location)

        # Identifiers and keywords
        match = self.identifier_pattern.match(self.source, self.pos)
        if match:
            lexeme = match.group(0)
            self._advance_by(len(lexeme))
            return Token(TokenType.IDENTIFIER, lexeme, lexeme, location)

        # Punctuation
        if current_char in PUNCTUATION:
            self._advance()
            return Token(PUNCTUATION[current_char], current_char, None, location)

        raise create_invalid_character_error(current_char, location)

    def _skip_whitespace(self):
        """Skip whitespace, including newlines."""
        while self.pos < len(self.source) and self.source[self.pos].isspace():
            self._advance()

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            self._advance()

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return len(self.errors) > 0

    def get_diagnostics(self) -> List[LexerError]:
        """Get all diagnostics."""
        return list(self.errors)


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source text
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if lexer.has_errors():
        # Raise the first error encountered
        raise lexer.errors[0]

    return tokens
