"""
Positioned, peekable, forkable view over a token list.

A cursor is a token list plus an index. Forking copies only the index, so a
speculative parse on a fork can never disturb its parent; committing a fork
moves the parent forward to wherever the fork stopped.
"""

from typing import List, Sequence

from .tokens import Token, TokenType, SourceLocation


class TokenCursor:
    """Cursor over an EOF-terminated token list."""

    def __init__(self, tokens: Sequence[Token], position: int = 0):
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token list must end with an EOF token")
        self._tokens = tokens
        self.position = position

    @property
    def tokens(self) -> Sequence[Token]:
        return self._tokens

    def peek(self, offset: int = 0) -> Token:
        """Return the token ``offset`` places ahead without consuming it."""
        index = self.position + offset
        if index < len(self._tokens):
            return self._tokens[index]
        return self._tokens[-1]

    def check(self, *types: TokenType) -> bool:
        """
        Check that the upcoming tokens have the given types, in order.

        ``check(INTEGER, SLASH)`` is true when the next token is an integer
        and the one after it a slash. Nothing is consumed.
        """
        return all(self.peek(i).type == t for i, t in enumerate(types))

    def check_word(self, *words: str) -> bool:
        """Check that the next token is an identifier spelling one of ``words``."""
        token = self.peek()
        return token.is_identifier and token.word in words

    def advance(self) -> Token:
        """Consume and return the current token. EOF is never consumed."""
        token = self.peek()
        if token.type != TokenType.EOF:
            self.position += 1
        return token

    def fork(self) -> "TokenCursor":
        """Return an independent cursor at the same position."""
        return TokenCursor(self._tokens, self.position)

    def commit(self, fork: "TokenCursor") -> None:
        """Advance this cursor to the position reached by ``fork``."""
        if fork.tokens is not self._tokens:
            raise ValueError("cannot commit a fork of a different token stream")
        if fork.position < self.position:
            raise ValueError("cannot commit a fork that is behind the cursor")
        self.position = fork.position

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    @property
    def location(self) -> SourceLocation:
        """Location of the current token."""
        return self.peek().location

    def remaining(self) -> List[Token]:
        """Tokens not yet consumed, excluding EOF."""
        return list(self._tokens[self.position:-1])

    def __repr__(self) -> str:
        return f"TokenCursor(position={self.position}, next={self.peek()})"
