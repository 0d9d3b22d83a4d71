"""Hindley-Milner style type inference over the syntax tree."""

from __future__ import annotations

import itertools
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from pulsarlang.ast.decl import AST, Decl, Function
from pulsarlang.ast.expr import (
    ArrayLiteral,
    BoundName,
    Call,
    ConstantInt,
    Expr,
    InfixBop,
    MemberAccess,
    PostfixBop,
    PrefixOp,
)
from pulsarlang.ast.stmt import Assign, Divider, For, Let, Stmt
from pulsarlang.ast.ty import (
    LiquidAll,
    LiquidEqual,
    LiquidType,
    Type,
    TypeFunction,
    TypeInt64,
    TypeArray,
    TypeVar,
)
from pulsarlang.constraints import (
    AffineEnvironment,
    AffineResourceError,
    UnificationConstraint,
)
from pulsarlang.op import Op
from pulsarlang.token import Token, TokenType

_ASSIGNMENT_FIX = (
    "Use a `---` divider to separate the assignments by a logical timestep."
)
_SEQUENTIAL_FIX = (
    "Extract the outer sequential operation into another `let` separated by "
    "a `---` divider."
)


@dataclass(frozen=True)
class Diagnostic:
    """One message produced while inferring types.

    ``level`` is ``"Error"`` or ``"Info"``, ``style`` is ``"Primary"`` or
    ``"Secondary"``; a diagnostic that ``continues`` elaborates the one before.
    """

    level: str
    style: str
    code: str | None = None
    message: str | None = None
    explain: str | None = None
    fix: str | None = None
    start: Token | None = field(default=None, repr=False)
    end: Token | None = field(default=None, repr=False)
    continues: bool = False

    def __str__(self) -> str:
        head = self.level.lower()
        if self.code is not None:
            head += f"[{self.code}]"
        parts = [f"{head}: {self.message}" if self.message else head]
        if self.start is not None:
            parts.append(f"  at {self.start.loc}")
        if self.explain:
            parts.append(f"  {self.explain}")
        if self.fix:
            parts.append(f"  fix: {self.fix}")
        return "\n".join(parts)


class TypeInferenceError(Exception):
    """Raised when the program cannot be typed; holds every diagnostic."""

    def __init__(self, diagnostics):
        self.diagnostics: tuple[Diagnostic, ...] = tuple(diagnostics)
        first = next((d.message for d in self.diagnostics if d.message), None)
        super().__init__(first or "type inference failed")


class _TimeResource:
    """The single logical timestep consumed by a sequential operation."""

    def __str__(self) -> str:
        return "<time>"


_TIME = _TimeResource()


class _Environment:
    """Nested name scopes; the outermost is the top level."""

    def __init__(self) -> None:
        self._scopes: list[dict[str, Type]] = [{}]

    def push(self) -> None:
        self._scopes.append({})

    def pop(self) -> None:
        if len(self._scopes) == 1:
            raise ValueError("cannot pop the top-level scope")
        self._scopes.pop()

    def bind(self, name: str, value: Type) -> None:
        self._scopes[-1][name] = value

    def bind_base(self, name: str, value: Type) -> None:
        self._scopes[0][name] = value

    def find(self, name: str) -> Type | None:
        for scope in reversed(self._scopes):
            if name in scope:
                return scope[name]
        return None


class _DisjointSets:
    """Union-find over nodes keyed by identity."""

    def __init__(self) -> None:
        self._parent: dict[int, int] = {}
        self._nodes: dict[int, Any] = {}

    def add(self, node: Any) -> None:
        key = id(node)
        if key not in self._parent:
            self._parent[key] = key
            self._nodes[key] = node

    def _root(self, key: int) -> int:
        root = key
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[key] != root:
            self._parent[key], key = root, self._parent[key]
        return root

    def find(self, node: Any) -> Any:
        return self._nodes[self._root(id(node))]

    def union(self, child: Any, parent: Any) -> None:
        """Merge the sets so that ``parent``'s representative leads."""
        a = self._root(id(child))
        b = self._root(id(parent))
        if a != b:
            self._parent[a] = b

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        for key, node in list(self._nodes.items()):
            yield node, self._nodes[self._root(key)]


def _span(node: Any) -> tuple[Token | None, Token | None]:
    if isinstance(node, Token):
        return node, node
    return getattr(node, "start", None), getattr(node, "end", None)


def _type_vars(node: Any) -> list[tuple[Type, str | None]]:
    if not isinstance(node, Type):
        return []
    if isinstance(node.value, TypeVar):
        return [(node, node.value.name)]
    return [pair for sub in node.subterms() for pair in _type_vars(sub)]


class TypeInferer:
    """Collects type constraints from an AST and solves them by unification."""

    def __init__(self, ast: AST):
        self._ast = ast
        self._env = _Environment()
        self._assignment_env: AffineEnvironment = AffineEnvironment(_ASSIGNMENT_FIX)
        self._expr_env: AffineEnvironment = AffineEnvironment(_SEQUENTIAL_FIX)
        self._type_constraints: deque[UnificationConstraint[Type]] = deque()
        self._liquid_constraints: deque[UnificationConstraint[LiquidType]] = deque()
        self._gen = itertools.count()
        self._diagnostics: list[Diagnostic] = []

    def bind_top_level(self, name: str, ty: Type) -> None:
        """Make ``name`` visible everywhere with type ``ty``."""
        self._env.bind_base(str(name), ty)

    def infer(self) -> AST:
        """Annotate every expression with its type and return the AST.

        Raises TypeInferenceError carrying the diagnostics on failure.
        """
        for decl in self._ast:
            self._register_top_level_bindings(decl)
        for decl in self._ast:
            self._visit_decl(decl)

        types = self._solve(self._type_constraints, self._unify_type)
        self._substitute(types, lambda node: isinstance(node.value, TypeVar))
        lengths = self._solve(self._liquid_constraints, self._unify_liquid)
        self._substitute(lengths, lambda node: isinstance(node.value, LiquidAll))
        return self._ast

    # Diagnostics

    def _report(self, **kwargs: Any) -> None:
        self._diagnostics.append(Diagnostic(**kwargs))

    def _failure(self) -> TypeInferenceError:
        return TypeInferenceError(self._diagnostics)

    def _report_unbound_name(self, name: Token) -> None:
        self._report(
            level="Error",
            style="Primary",
            code="UnboundName",
            message=f"Unbound function or variable `{name.value}`",
            start=name,
            end=name,
        )

    def _report_ambiguous_type(self, node: Any, explain: str) -> None:
        start, end = _span(node)
        self._report(
            level="Error",
            style="Primary",
            code="AmbiguousType",
            message=f"Ambiguous type `{node}`",
            explain=explain,
            start=start,
            end=end,
        )

    def _report_unsupported(self, expr: Expr, what: str) -> None:
        self._report(
            level="Error",
            style="Primary",
            message=f"Cannot infer the type of {what}",
            start=expr.start,
            end=expr.end,
        )

    def _report_unification_failure(
        self, constraint: UnificationConstraint, dsu: _DisjointSets
    ) -> None:
        expected = dsu.find(constraint.origin_expected())
        actual = dsu.find(constraint.origin_actual())
        start, end = _span(expected)
        self._report(
            level="Error",
            style="Primary",
            code="UnificationFailure",
            message=f"Failed to unify types `{expected}` and `{actual}`",
            explain=f"Expected `{expected}` here,",
            start=start,
            end=end,
        )
        start, end = _span(actual)
        self._report(
            level="Error",
            style="Secondary",
            explain=f"but received `{actual}` here.",
            start=start,
            end=end,
            continues=True,
        )

        seen: set[Type] = set()
        for ty, name in _type_vars(expected) + _type_vars(actual):
            if name is None or ty in seen:
                continue
            seen.add(ty)
            start, end = _span(ty)
            self._report(
                level="Info",
                style="Secondary",
                explain=f"Call the type of {name} `{ty}`.",
                start=start,
                end=end,
                continues=True,
            )

        immediate = constraint.immediate()
        if immediate is not None:
            start, end = _span(immediate.expected)
            self._report(
                level="Info",
                style="Secondary",
                code="UnificationFailure",
                message=(
                    f"Error encountered while unifiying `{immediate.expected}` "
                    f"with `{immediate.actual}`"
                ),
                explain=f"Expected `{immediate.expected}` here,",
                start=start,
                end=end,
            )
            start, end = _span(immediate.actual)
            self._report(
                level="Info",
                style="Secondary",
                code="UnificationFailure",
                explain=f"but received `{immediate.actual}` here.",
                start=start,
                end=end,
                continues=True,
            )

    def _report_affine_error(self, error: AffineResourceError) -> None:
        start, end = _span(error.taker)
        self._report(
            level="Error",
            style="Primary",
            code="AffineResource",
            message=f"Cannot use affine resource `{error.owned}` twice",
            explain="Second usage attempted here,",
            start=start,
            end=end,
        )
        start, end = _span(error.owner)
        self._report(
            level="Error",
            style="Secondary",
            code="AffineResource",
            explain="but resource was already consumed here.",
            fix=error.fix,
            start=start,
            end=end,
            continues=True,
        )

    def _take(self, env: AffineEnvironment, taker: Any, resource: Any) -> None:
        try:
            env.take(taker, resource)
        except AffineResourceError as error:
            self._report_affine_error(error)
            raise self._failure() from error

    # Constraint collection

    def _new_constraint(self, expected: Type, actual: Type) -> None:
        self._type_constraints.append(UnificationConstraint(expected, actual))

    def _new_liquid_constraint(self, expected: LiquidType, actual: LiquidType) -> None:
        self._liquid_constraints.append(UnificationConstraint(expected, actual))

    def _new_type_var(self, source: Any, description: str | None) -> Type:
        return Type(TypeVar(next(self._gen), description), source.start, source.end)

    def _register_top_level_bindings(self, decl: Decl) -> None:
        match decl.value:
            case Function(_, name, inputs, outputs, _):
                func_type = Type(
                    TypeFunction(
                        tuple(Type(ty.value, ty.start, ty.end) for _, ty in inputs),
                        tuple(Type(ty.value, ty.start, ty.end) for _, ty in outputs),
                    ),
                    name,
                    name,
                )
                self.bind_top_level(name.value, func_type)

    def _visit_expr(self, expr: Expr) -> Type:
        expr_type = self._expr_type(expr)
        expr.ty = expr_type
        return expr_type

    def _expr_type(self, expr: Expr) -> Type:
        match expr.value:
            case ConstantInt():
                return Type(TypeInt64(), expr.start, expr.end)
            case BoundName(name):
                ty = self._env.find(name.value)
                if ty is None:
                    self._report_unbound_name(name)
                    raise self._failure()
                return ty
            case MemberAccess():
                self._report_unsupported(expr, "a member access expression")
                raise self._failure()
            case Call():
                self._report_unsupported(expr, "a call expression")
                raise self._failure()
            case ArrayLiteral(elements, should_continue):
                return self._array_literal_type(expr, elements, should_continue)
            case PrefixOp(op, rhs):
                op_rhs_type = Type(TypeInt64(), op, op)
                result_type = Type(TypeInt64(), op, op)
                rhs_type = self._visit_expr(rhs)
                self._new_constraint(op_rhs_type, rhs_type)
                return result_type
            case InfixBop(lhs, op, rhs):
                return self._infix_type(expr, lhs, op, rhs)
            case PostfixBop(lhs, op, index, close) if (
                op.ty is TokenType.LEFT_BRACKET
                and close.ty is TokenType.RIGHT_BRACKET
            ):
                return self._subscript_type(expr, lhs, op, index, close)
        self._report_unsupported(expr, "this expression")
        raise self._failure()

    def _array_literal_type(self, expr: Expr, elements, should_continue) -> Type:
        if not elements and should_continue is not None:
            return self._new_type_var(
                expr, "this empty and size-indeterminate array literal"
            )
        if elements:
            first, *others = elements
            element_type = self._visit_expr(first)
            for other in others:
                self._new_constraint(element_type, self._visit_expr(other))
        else:
            element_type = self._new_type_var(expr, "the array literal's element")
        if should_continue is not None:
            length = LiquidAll(next(self._gen), "length")
        else:
            length = LiquidEqual(len(elements))
        liquid_type = LiquidType(length, expr.start, expr.end)
        return Type(TypeArray(element_type, liquid_type), expr.start, expr.end)

    def _infix_type(self, expr: Expr, lhs: Expr, op: Token, rhs: Expr) -> Type:
        op_lhs_type = Type(TypeInt64(), op, op)
        op_rhs_type = Type(TypeInt64(), op, op)
        result_type = Type(TypeInt64(), op, op)
        info = Op.from_token_type(op.ty)
        if info is None or info.infix_binary is None:
            raise ValueError(f"`{op.value}` is not an infix binary operator")
        is_sequential = info.infix_binary.is_sequential

        if is_sequential:
            self._take(self._expr_env, expr, _TIME)
            self._expr_env.enter_local()
        lhs_type = self._visit_expr(lhs)
        rhs_type = self._visit_expr(rhs)
        if is_sequential:
            self._expr_env.exit_local()
        self._new_constraint(op_lhs_type, lhs_type)
        self._new_constraint(op_rhs_type, rhs_type)
        return result_type

    def _subscript_type(
        self, expr: Expr, lhs: Expr, op: Token, index: Expr, close: Token
    ) -> Type:
        lhs_type = self._visit_expr(lhs)
        index_type = self._visit_expr(index)

        self._new_constraint(Type(TypeInt64(), op, close), index_type)

        result_type = self._new_type_var(expr, "the array's element")
        lhs_length = LiquidType(
            LiquidAll(next(self._gen), "length"), lhs.start, lhs.end
        )
        required_lhs_type = Type(
            TypeArray(result_type, lhs_length), lhs.start, lhs.end
        )
        self._new_constraint(lhs_type, required_lhs_type)
        return result_type

    def _visit_stmt(self, stmt: Stmt) -> None:
        match stmt.value:
            case Let(name, hint, value):
                value_type = self._visit_expr(value)
                if hint is not None:
                    self._new_constraint(hint, value_type)
                self._env.bind(name.value, value_type)
            case Assign(lhs, _, rhs):
                self._take(self._assignment_env, stmt, lhs)
                lhs_type = self._visit_expr(lhs)
                rhs_type = self._visit_expr(rhs)
                self._new_constraint(lhs_type, rhs_type)
            case Divider():
                self._assignment_env.exit_local()
                self._assignment_env.enter_local()
            case For(var, lower, upper, body):
                self._env.push()
                loop_var_type = Type(TypeInt64(), var, var)
                lower_type = self._visit_expr(lower)
                upper_type = self._visit_expr(upper)
                self._new_constraint(loop_var_type, lower_type)
                self._new_constraint(loop_var_type, upper_type)
                self._env.bind(var.value, loop_var_type)

                self._env.push()
                for child in body:
                    self._visit_stmt(child)
                self._env.pop()

                self._env.pop()

    def _visit_decl(self, decl: Decl) -> None:
        match decl.value:
            case Function(_, _, inputs, outputs, body):
                self._env.push()
                self._assignment_env.enter_local()
                for param_name, param_type in (*inputs, *outputs):
                    self._env.bind(param_name.value, param_type)

                self._env.push()
                for stmt in body:
                    self._visit_stmt(stmt)
                self._env.pop()

                self._assignment_env.exit_local()
                self._env.pop()

    # Unification

    def _solve(
        self,
        queue: deque,
        unify_one: Callable[[_DisjointSets, UnificationConstraint], None],
    ) -> _DisjointSets:
        dsu = _DisjointSets()
        while queue:
            constraint = queue.popleft()
            dsu.add(constraint.expected)
            dsu.add(constraint.actual)
            unify_one(dsu, constraint)
        return dsu

    def _unify_type(
        self, dsu: _DisjointSets, constraint: UnificationConstraint[Type]
    ) -> None:
        expected = dsu.find(constraint.expected)
        actual = dsu.find(constraint.actual)
        if expected is actual:
            return
        expected_var = isinstance(expected.value, TypeVar)
        actual_var = isinstance(actual.value, TypeVar)
        if expected_var and actual_var:
            dsu.union(actual, expected)
        elif expected_var:
            dsu.union(expected, actual)
        elif actual_var:
            dsu.union(actual, expected)
        elif expected.can_unify_with(actual):
            dsu.union(actual, expected)
            for exp_sub, act_sub in zip(expected.subterms(), actual.subterms()):
                self._type_constraints.append(
                    UnificationConstraint.derived(exp_sub, act_sub, constraint)
                )
            for exp_len, act_len in zip(
                expected.liquid_subterms(), actual.liquid_subterms()
            ):
                self._new_liquid_constraint(exp_len, act_len)
        else:
            self._report_unification_failure(constraint, dsu)
            raise self._failure()

    def _unify_liquid(
        self, dsu: _DisjointSets, constraint: UnificationConstraint[LiquidType]
    ) -> None:
        expected = dsu.find(constraint.expected)
        actual = dsu.find(constraint.actual)
        if expected is actual:
            return
        expected_all = isinstance(expected.value, LiquidAll)
        actual_all = isinstance(actual.value, LiquidAll)
        if expected_all and actual_all:
            dsu.union(actual, expected)
        elif expected_all:
            dsu.union(expected, actual)
        elif actual_all:
            dsu.union(actual, expected)
        elif expected.value == actual.value:
            dsu.union(actual, expected)
        else:
            self._report_unification_failure(constraint, dsu)
            raise self._failure()

    def _substitute(
        self, dsu: _DisjointSets, is_unresolved: Callable[[Any], bool]
    ) -> None:
        for node, representative in dsu:
            if is_unresolved(representative):
                self._report_ambiguous_type(
                    representative, "Type variable not resolved"
                )
                raise self._failure()
            node.value = representative.value


def infer_types(ast: AST) -> AST:
    """Infer the types of ``ast`` in place and return it."""
    return TypeInferer(ast).infer()