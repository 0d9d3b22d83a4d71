"""Expression nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from pulsarlang.ast.pretty_print import IndentWriter, pretty
from pulsarlang.ast.ty import Type
from pulsarlang.token import Token


def _token_value(token: Token | None) -> str | None:
    return None if token is None else token.value


class _ExprValue:
    """Equality and hashing that compare tokens by their text only."""

    def _key(self) -> tuple:
        raise TypeError("expression value has no key")

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key()))


@dataclass(frozen=True, eq=False)
class ConstantInt(_ExprValue):
    value: int

    def _key(self) -> tuple:
        return (self.value,)


@dataclass(frozen=True, eq=False)
class BoundName(_ExprValue):
    name: Token

    def _key(self) -> tuple:
        return (self.name.value,)


@dataclass(frozen=True, eq=False)
class MemberAccess(_ExprValue):
    value: Expr
    member: Token

    def _key(self) -> tuple:
        return (self.value, self.member.value)


@dataclass(frozen=True, eq=False)
class Call(_ExprValue):
    name: Token
    args: tuple[Expr, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def _key(self) -> tuple:
        return (self.name.value, self.args)


@dataclass(frozen=True, eq=False)
class ArrayLiteral(_ExprValue):
    """Elements, then zeros for the rest if ``should_continue`` is set."""

    elements: tuple[Expr, ...] = ()
    should_continue: Token | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))

    def _key(self) -> tuple:
        return (self.elements, _token_value(self.should_continue))


@dataclass(frozen=True, eq=False)
class PrefixOp(_ExprValue):
    op: Token
    rhs: Expr

    def _key(self) -> tuple:
        return (self.op.value, self.rhs)


@dataclass(frozen=True, eq=False)
class InfixBop(_ExprValue):
    lhs: Expr
    op: Token
    rhs: Expr

    def _key(self) -> tuple:
        return (self.lhs, self.op.value, self.rhs)


@dataclass(frozen=True, eq=False)
class PostfixBop(_ExprValue):
    lhs: Expr
    op: Token
    rhs: Expr
    close: Token

    def _key(self) -> tuple:
        return (self.lhs, self.op.value, self.rhs, self.close.value)


ExprValue = Union[
    ConstantInt, BoundName, MemberAccess, Call, ArrayLiteral, PrefixOp, InfixBop, PostfixBop
]


@dataclass(eq=False)
class Expr:
    """An expression node; ``ty`` is filled in by type inference."""

    value: ExprValue
    start: Token | None = field(default=None, repr=False)
    end: Token | None = field(default=None, repr=False)
    ty: Type | None = field(default=None, repr=False)

    def pretty_print(self, writer: IndentWriter) -> None:
        match self.value:
            case ConstantInt(value):
                writer.write(str(value))
            case BoundName(name):
                writer.write(name.value)
            case MemberAccess(value, member):
                writer.write(f"{value}.{member.value}")
            case Call(name, args):
                writer.write(f"{name.value}({', '.join(str(a) for a in args)})")
            case ArrayLiteral(elements, should_continue):
                rest = ""
                if should_continue is not None:
                    rest = (", " if elements else "") + "..."
                writer.write(f"[{', '.join(str(e) for e in elements)}{rest}]")
            case PrefixOp(op, rhs):
                writer.write(f"({op.value} {rhs})")
            case InfixBop(lhs, op, rhs):
                writer.write(f"({lhs} {op.value} {rhs})")
            case PostfixBop(lhs, op, rhs, close):
                writer.write(f"({lhs}{op.value}{rhs}{close.value})")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expr):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return pretty(self)