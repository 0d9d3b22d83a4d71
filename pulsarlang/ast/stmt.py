"""Statement nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from pulsarlang.ast.expr import Expr
from pulsarlang.ast.pretty_print import IndentWriter, pretty
from pulsarlang.ast.ty import Type
from pulsarlang.token import Token


@dataclass(frozen=True)
class Let:
    name: Token
    hint: Type | None
    value: Expr


@dataclass(frozen=True)
class Assign:
    lhs: Expr
    equals: Token
    rhs: Expr


@dataclass(frozen=True)
class Divider:
    token: Token


@dataclass(frozen=True)
class For:
    var: Token
    lower: Expr
    exclusive_upper: Expr
    body: tuple[Stmt, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", tuple(self.body))


StmtValue = Union[Let, Assign, Divider, For]


@dataclass(eq=False)
class Stmt:
    """A statement node."""

    value: StmtValue
    start: Token | None = field(default=None, repr=False)
    end: Token | None = field(default=None, repr=False)

    def pretty_print(self, writer: IndentWriter) -> None:
        match self.value:
            case Let(name, hint, value):
                hint_text = "" if hint is None else f": {hint}"
                writer.write(f"let {name.value}{hint_text} = {value}")
            case Assign(lhs, equals, rhs):
                writer.write(f"{lhs} {equals.value} {rhs}")
            case Divider():
                writer.write("---")
            case For(var, lower, upper, body):
                writer.write(f"for {var.value} in {lower} ..< {upper} {{\n")
                writer.increase_indent()
                for stmt in body:
                    stmt.pretty_print(writer)
                    writer.write("\n")
                writer.decrease_indent()
                writer.write("}")

    def __str__(self) -> str:
        return pretty(self)