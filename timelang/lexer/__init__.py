"""
timelang Lexer Package

Turns time-expression text into typed tokens and provides the forkable
cursor the parser walks.

Key Features:
- Identifiers, integer literals and `/ : ,` punctuation
- Source location tracking for diagnostics
- O(1) cursor forks for speculative parsing
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, tokenize_string
from .cursor import TokenCursor
from .errors import LexerError, Diagnostic

__all__ = [
    "Lexer",
    "tokenize_string",
    "Token",
    "TokenType",
    "SourceLocation",
    "TokenCursor",
    "LexerError",
    "Diagnostic",
]
