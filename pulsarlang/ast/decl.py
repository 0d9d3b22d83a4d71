"""Top-level declaration nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

from pulsarlang.ast.pretty_print import IndentWriter, pretty
from pulsarlang.ast.stmt import Stmt
from pulsarlang.ast.ty import Type
from pulsarlang.token import Token

Param = tuple[Token, Type]


def format_params(params: Iterable[Param]) -> str:
    """Parameters as ``name: type`` joined by commas."""
    return ", ".join(f"{name.value}: {ty}" for name, ty in params)


@dataclass(frozen=True)
class Function:
    func: Token
    name: Token
    inputs: tuple[Param, ...] = ()
    outputs: tuple[Param, ...] = ()
    body: tuple[Stmt, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "inputs", tuple(self.inputs))
        object.__setattr__(self, "outputs", tuple(self.outputs))
        object.__setattr__(self, "body", tuple(self.body))


DeclValue = Union[Function]


@dataclass(eq=False)
class Decl:
    """A declaration node."""

    value: DeclValue
    start: Token | None = field(default=None, repr=False)
    end: Token | None = field(default=None, repr=False)

    def pretty_print(self, writer: IndentWriter) -> None:
        match self.value:
            case Function(_, name, inputs, outputs, body):
                newline = "\n" if body else ""
                writer.write(
                    f"func {name.value}({format_params(inputs)}) -> "
                    f"({format_params(outputs)}) {{{newline}"
                )
                writer.increase_indent()
                for i, stmt in enumerate(body):
                    if i:
                        writer.write("\n")
                    stmt.pretty_print(writer)
                writer.decrease_indent()
                writer.write(f"{newline}}}")

    def __str__(self) -> str:
        return pretty(self)


AST = list[Decl]