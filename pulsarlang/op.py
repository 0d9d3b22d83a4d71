"""Operator parsing information."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pulsarlang.token import TokenType


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass
class InfixBinaryOp:
    precedence: int
    associativity: Associativity
    name: str | None
    required_token_ty: TokenType | None
    is_sequential: bool


@dataclass
class PrefixUnaryOp:
    pass


@dataclass
class PostfixBinaryOp:
    close_token_ty: TokenType
    name: str | None


@dataclass
class Op:
    """Parsing information for an operator; at least one role is set."""

    infix_binary: InfixBinaryOp | None = None
    prefix_unary: PrefixUnaryOp | None = None
    postfix_binary: PostfixBinaryOp | None = None

    def with_infix_binary(
        self, precedence, associativity, name, required_token_ty, is_sequential
    ) -> Op:
        self.infix_binary = InfixBinaryOp(
            precedence, associativity, name, required_token_ty, is_sequential
        )
        return self

    def with_prefix_unary(self) -> Op:
        self.prefix_unary = PrefixUnaryOp()
        return self

    def with_postfix_binary(self, close_token_ty, name) -> Op:
        self.postfix_binary = PostfixBinaryOp(close_token_ty, name)
        return self

    @staticmethod
    def from_token_type(ty: TokenType) -> Op | None:
        """The operator for token type ``ty``, if there is one."""
        if ty in (TokenType.PLUS, TokenType.MINUS):
            return (
                Op()
                .with_infix_binary(50, Associativity.LEFT, None, None, False)
                .with_prefix_unary()
            )
        if ty is TokenType.TIMES:
            return Op().with_infix_binary(
                100, Associativity.LEFT, "multiplication", None, True
            )
        if ty is TokenType.LEFT_BRACKET:
            return Op().with_postfix_binary(TokenType.RIGHT_BRACKET, "subscript")
        if ty is TokenType.DOT:
            return Op().with_infix_binary(
                150,
                Associativity.LEFT,
                "member access",
                TokenType.IDENTIFIER,
                False,
            )
        return None

    def is_unary_prefix(self) -> bool:
        return self.prefix_unary is not None

    def is_infix_binary(self) -> bool:
        return self.infix_binary is not None

    def is_postfix_binary(self) -> bool:
        return self.postfix_binary is not None