"""Token types, tokens and source locations."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


@dataclass(frozen=True)
class Source:
    """A named piece of program text."""

    name: str
    contents: str


@dataclass(frozen=True)
class Loc:
    """A position in a source: 1-based line and column, 0-based offset."""

    line: int = 1
    col: int = 1
    pos: int = 0
    source: Source | None = field(default=None, repr=False, compare=False)

    def __str__(self) -> str:
        if self.source is None:
            return f"{self.line}:{self.col}"
        return f"{self.source.name}:{self.line}:{self.col}"


class TokenType(Enum):
    """The kind of a lexical unit; each value is the type's CamelCase name."""

    IDENTIFIER = "Identifier"
    # Guaranteed to be a valid integer, though possibly outside 64 bits.
    INTEGER = "Integer"
    FLOAT = "Float"
    BOOL = "Bool"
    CHAR = "Char"
    STRING = "String"
    FUNC = "Func"
    LET = "Let"
    FOR = "For"
    IN = "In"
    PLUS = "Plus"
    MINUS = "Minus"
    TIMES = "Times"
    ASSIGN = "Assign"
    LEFT_PAR = "LeftPar"
    RIGHT_PAR = "RightPar"
    LEFT_BRACE = "LeftBrace"
    RIGHT_BRACE = "RightBrace"
    LEFT_BRACKET = "LeftBracket"
    RIGHT_BRACKET = "RightBracket"
    LEFT_ANGLE = "LeftAngle"
    RIGHT_ANGLE = "RightAngle"
    DOT = "Dot"
    DOTS = "Dots"
    DOTS_UNTIL = "DotsUntil"
    DIVIDER = "Divider"
    COLON = "Colon"
    COMMA = "Comma"
    ARROW = "Arrow"
    SEMICOLON = "Semicolon"
    NEWLINE = "Newline"

    def kebab_name(self) -> str:
        """A kebab-case name for this token type."""
        parts: list[str] = []
        for i, c in enumerate(self.value):
            if c.isupper():
                if i > 0:
                    parts.append("-")
                parts.append(c.lower())
            else:
                parts.append(c)
        return "".join(parts)

    @staticmethod
    def from_pattern(pat: str) -> TokenType | None:
        """Look up a type written as ``"TokenType::Name"``."""
        prefix = "TokenType::"
        if not pat.startswith(prefix):
            return None
        name = pat[len(prefix):]
        for member in TokenType:
            if member.value == name:
                return member
        return None

    def __str__(self) -> str:
        return _SYMBOLS.get(self, self.kebab_name())


_SYMBOLS = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.TIMES: "*",
    TokenType.LEFT_PAR: "(",
    TokenType.RIGHT_PAR: ")",
    TokenType.LEFT_BRACE: "{",
    TokenType.RIGHT_BRACE: "}",
    TokenType.LEFT_BRACKET: "[",
    TokenType.RIGHT_BRACKET: "]",
    TokenType.LEFT_ANGLE: "<",
    TokenType.RIGHT_ANGLE: ">",
    TokenType.COLON: ":",
    TokenType.ASSIGN: "=",
    TokenType.DOT: ".",
    TokenType.DOTS: "...",
    TokenType.DOTS_UNTIL: "..<",
    TokenType.DIVIDER: "---",
    TokenType.COMMA: ",",
    TokenType.SEMICOLON: ";",
    TokenType.ARROW: "->",
}


@dataclass(frozen=True)
class Token:
    """A lexical unit of source code."""

    ty: TokenType
    value: str
    loc: Loc = field(default_factory=Loc)

    def length(self) -> int:
        return len(self.value)

    def start(self) -> Loc:
        return self.loc

    def end(self) -> Loc:
        n = self.length()
        return replace(self.loc, pos=self.loc.pos + n, col=self.loc.col + n)

    def __repr__(self) -> str:
        shown = "\\n" if self.value == "\n" else self.value
        return f"({shown}, ty = {self.ty.kebab_name()}, loc = {self.loc})"