"""Indented text output for syntax tree nodes."""

from __future__ import annotations

from typing import Protocol

INDENT_WIDTH = 4


class PrettyPrintable(Protocol):
    def pretty_print(self, writer: IndentWriter) -> None:
        ...


class IndentWriter:
    """Collects text, indenting each non-empty line by the current level."""

    def __init__(self, indent_width: int = INDENT_WIDTH):
        self._indent_width = indent_width
        self._level = 0
        self._parts: list[str] = []
        self._at_line_start = True

    def write(self, text: str) -> None:
        for i, piece in enumerate(text.split("\n")):
            if i:
                self._parts.append("\n")
                self._at_line_start = True
            if piece:
                if self._at_line_start:
                    self._parts.append(" " * (self._indent_width * self._level))
                    self._at_line_start = False
                self._parts.append(piece)

    def increase_indent(self) -> None:
        self._level += 1

    def decrease_indent(self) -> None:
        if self._level == 0:
            raise ValueError("indent level is already zero")
        self._level -= 1

    def getvalue(self) -> str:
        return "".join(self._parts)


def pretty(node: PrettyPrintable) -> str:
    """The text representation of ``node``."""
    writer = IndentWriter()
    node.pretty_print(writer)
    return writer.getvalue()