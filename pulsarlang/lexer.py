"""Turns source text into tokens."""

from __future__ import annotations

from typing import Iterator

from pulsarlang.token import Loc, Source, Token, TokenType


class LexError(Exception):
    """Raised when the input holds a character no token can start with."""

    def __init__(self, message: str, loc: Loc):
        super().__init__(f"{loc}: {message}")
        self.message = message
        self.loc = loc


# (text, type, keyword): keywords must be followed by whitespace.
_PATTERNS: tuple[tuple[str, TokenType, bool], ...] = (
    ("+", TokenType.PLUS, False),
    ("->", TokenType.ARROW, False),
    ("---", TokenType.DIVIDER, False),
    ("-", TokenType.MINUS, False),
    ("*", TokenType.TIMES, False),
    ("(", TokenType.LEFT_PAR, False),
    (")", TokenType.RIGHT_PAR, False),
    ("{", TokenType.LEFT_BRACE, False),
    ("}", TokenType.RIGHT_BRACE, False),
    ("[", TokenType.LEFT_BRACKET, False),
    ("]", TokenType.RIGHT_BRACKET, False),
    ("<", TokenType.LEFT_ANGLE, False),
    (">", TokenType.RIGHT_ANGLE, False),
    ("=", TokenType.ASSIGN, False),
    (":", TokenType.COLON, False),
    ("...", TokenType.DOTS, False),
    ("..<", TokenType.DOTS_UNTIL, False),
    (".", TokenType.DOT, False),
    (",", TokenType.COMMA, False),
    (";", TokenType.SEMICOLON, False),
    ("\n", TokenType.NEWLINE, False),
    ("func", TokenType.FUNC, True),
    ("let", TokenType.LET, True),
    ("for", TokenType.FOR, True),
    ("in", TokenType.IN, True),
)


class Lexer:
    """Produces tokens from an input source."""

    def __init__(self, source: Source | str):
        if isinstance(source, str):
            source = Source("<input>", source)
        self.source = source
        self._text = source.contents
        self._pos = 0
        self._line = 1
        self._col = 1

    def lex(self) -> list[Token]:
        """All tokens of the source; raises LexError on a bad character."""
        return list(self._tokens())

    def _at_eof(self) -> bool:
        return self._pos >= len(self._text)

    def _loc(self) -> Loc:
        return Loc(self._line, self._col, self._pos, self.source)

    def _advance(self, n: int = 1) -> None:
        for _ in range(n):
            if self._text[self._pos] == "\n":
                self._col = 0
                self._line += 1
            self._pos += 1
            self._col += 1

    def _make_token(self, ty: TokenType, length: int) -> Token:
        loc = self._loc()
        value = self._text[self._pos:self._pos + length]
        self._advance(length)
        return Token(ty, value, loc)

    def _run_length(self, pred) -> int:
        end = self._pos
        while end < len(self._text) and pred(self._text[end]):
            end += 1
        return end - self._pos

    def _skip(self) -> None:
        self._advance(self._run_length(lambda c: c.isspace() and c != "\n"))

    def _matches(self, text: str, keyword: bool) -> bool:
        if not self._text.startswith(text, self._pos):
            return False
        if keyword:
            follow = self._pos + len(text)
            return follow < len(self._text) and self._text[follow].isspace()
        return True

    def _tokens(self) -> Iterator[Token]:
        while not self._at_eof():
            self._skip()
            if self._at_eof():
                return
            for text, ty, keyword in _PATTERNS:
                if self._matches(text, keyword):
                    yield self._make_token(ty, len(text))
                    break
            else:
                current = self._text[self._pos]
                if current.isnumeric():
                    yield self._make_token(
                        TokenType.INTEGER, self._run_length(str.isnumeric)
                    )
                elif current.isalpha() or current == "_":
                    yield self._make_token(
                        TokenType.IDENTIFIER,
                        self._run_length(lambda c: c.isalnum() or c == "_"),
                    )
                else:
                    raise LexError(
                        "Encountered unrecognized character", self._loc()
                    )


def lex(source: Source | str) -> list[Token]:
    """Tokenize ``source``."""
    return Lexer(source).lex()