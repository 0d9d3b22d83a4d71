"""Types and length refinements of the syntax tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from pulsarlang.ast.pretty_print import IndentWriter, pretty
from pulsarlang.token import Token


@dataclass(frozen=True)
class LiquidEqual:
    """A length equal to ``value``."""

    value: int


@dataclass(frozen=True)
class LiquidAll:
    """Any non-negative length, identified by ``id``."""

    id: int
    name: str | None = None


LiquidTypeValue = Union[LiquidEqual, LiquidAll]


@dataclass(eq=False)
class LiquidType:
    """A length constraint; only equality to a number can be expressed."""

    value: LiquidTypeValue
    start: Token | None = field(default=None, repr=False)
    end: Token | None = field(default=None, repr=False)

    def mangle(self) -> str:
        if isinstance(self.value, LiquidEqual):
            return str(self.value.value)
        raise ValueError("cannot mangle an unresolved length")

    def pretty_print(self, writer: IndentWriter) -> None:
        match self.value:
            case LiquidEqual(value):
                writer.write(f"{{ x | x = {value} }}")
            case LiquidAll(ident, name):
                var = name if name is not None else f"x{ident}"
                writer.write(f"{{ {var} | {var} >= 0 }}")

    def _order_key(self) -> tuple[int, int]:
        if isinstance(self.value, LiquidEqual):
            return (0, self.value.value)
        return (1, 0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LiquidType):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other: LiquidType) -> bool:
        return self._order_key() < other._order_key()

    def __le__(self, other: LiquidType) -> bool:
        return self._order_key() <= other._order_key()

    def __gt__(self, other: LiquidType) -> bool:
        return self._order_key() > other._order_key()

    def __ge__(self, other: LiquidType) -> bool:
        return self._order_key() >= other._order_key()

    def __str__(self) -> str:
        return pretty(self)


@dataclass(frozen=True)
class TypeUnit:
    pass


@dataclass(frozen=True)
class TypeVar:
    id: int
    name: str | None = None


@dataclass(frozen=True)
class TypeName:
    name: str


@dataclass(frozen=True)
class TypeInt64:
    pass


@dataclass(frozen=True)
class TypeArray:
    element: Type
    size: LiquidType


@dataclass(frozen=True)
class TypeFunction:
    inputs: tuple[Type, ...] = ()
    outputs: tuple[Type, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "inputs", tuple(self.inputs))
        object.__setattr__(self, "outputs", tuple(self.outputs))


TypeValue = Union[TypeUnit, TypeVar, TypeName, TypeInt64, TypeArray, TypeFunction]


@dataclass(eq=False)
class Type:
    """A type node; equality and hashing follow its value."""

    value: TypeValue
    start: Token | None = field(default=None, repr=False)
    end: Token | None = field(default=None, repr=False)

    def size(self) -> int:
        """Bytes needed to store one value of this type."""
        match self.value:
            case TypeUnit():
                return 0
            case TypeVar():
                raise ValueError(
                    "type variable should have been resolved by type inference"
                )
            case TypeName(name):
                raise ValueError(f"size of user-defined type `{name}` is unknown")
            case TypeInt64():
                return 8
            case TypeArray(element, size):
                if not isinstance(size.value, LiquidEqual):
                    raise ValueError("array length not resolved to a single value")
                return element.size() * size.value.value
            case TypeFunction():
                return 8
        raise TypeError(f"unknown type value {self.value!r}")

    def mangle(self) -> str:
        match self.value:
            case TypeVar():
                raise ValueError("cannot mangle type variable")
            case TypeUnit():
                return "u"
            case TypeName(name):
                return f"{len(name)}{name}"
            case TypeInt64():
                return "q"
            case TypeArray(element, size):
                return f"A{size.mangle()}E{element.mangle()}"
            case TypeFunction(inputs, outputs):
                ins = "".join(t.mangle() for t in inputs)
                outs = "".join(t.mangle() for t in outputs)
                return f"F{len(inputs)}{ins}{len(outputs)}{outs}"
        raise TypeError(f"unknown type value {self.value!r}")

    def can_unify_with(self, other: Type) -> bool:
        """Whether both types are of the same kind."""
        return type(self.value) is type(other.value)

    def subterms(self) -> list[Type]:
        match self.value:
            case TypeArray(element, _):
                return [element]
            case TypeFunction(inputs, outputs):
                return [*inputs, *outputs]
        return []

    def liquid_subterms(self) -> list[LiquidType]:
        if isinstance(self.value, TypeArray):
            return [self.value.size]
        return []

    def pretty_print(self, writer: IndentWriter) -> None:
        match self.value:
            case TypeUnit():
                writer.write("Unit")
            case TypeVar(ident, _):
                writer.write(f"'t{ident}")
            case TypeName(name):
                writer.write(name)
            case TypeInt64():
                writer.write("Int64")
            case TypeArray(element, size):
                count = (
                    str(size.value.value)
                    if isinstance(size.value, LiquidEqual)
                    else "?"
                )
                writer.write(f"[{element}; {count}]")
            case TypeFunction(inputs, outputs):
                ins = ", ".join(str(t) for t in inputs)
                outs = ", ".join(str(t) for t in outputs)
                writer.write(f"({ins}) -> ({outs})")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Type):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return pretty(self)