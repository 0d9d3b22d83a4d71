from pulsarlang.ast.expr import BoundName, ConstantInt, Expr
from pulsarlang.ast.pretty_print import INDENT_WIDTH
from pulsarlang.ast.stmt import Assign, Divider, For, Let, Stmt
from pulsarlang.ast.ty import Type, TypeInt64
from pulsarlang.token import Loc, Token, TokenType


def tok(ty, value):
    return Token(ty, value, Loc())


def ident(text):
    return tok(TokenType.IDENTIFIER, text)


def num(n):
    return Expr(ConstantInt(n))


def divider():
    return Stmt(Divider(tok(TokenType.DIVIDER, "---")))


def test_let_without_hint():
    assert str(Stmt(Let(ident("x"), None, num(1)))) == "let x = 1"


def test_let_with_hint():
    stmt = Stmt(Let(ident("x"), Type(TypeInt64()), num(1)))
    assert str(stmt) == "let x: Int64 = 1"


def test_assign():
    stmt = Stmt(
        Assign(
            Expr(BoundName(ident("a"))),
            tok(TokenType.ASSIGN, "="),
            Expr(BoundName(ident("b"))),
        )
    )
    assert str(stmt) == "a = b"


def test_divider():
    assert str(divider()) == "---"


def test_for_indents_body():
    inner = Stmt(Let(ident("y"), None, num(2)))
    stmt = Stmt(For(ident("i"), num(0), num(4), [inner, divider()]))
    lines = str(stmt).split("\n")
    indent = " " * INDENT_WIDTH
    assert lines[0].endswith("{")
    assert str(num(4)) in lines[0]
    assert lines[1] == indent + str(inner)
    assert lines[2] == indent + str(divider())
    assert lines[-1] == "}"
    assert len(lines) == 4


def test_nested_for_indents_twice():
    inner = Stmt(For(ident("j"), num(0), num(2), [divider()]))
    outer = Stmt(For(ident("i"), num(0), num(3), [inner]))
    lines = str(outer).split("\n")
    assert " " * (2 * INDENT_WIDTH) + str(divider()) in lines
    assert lines[-1] == "}"


def test_empty_for_body():
    lines = str(Stmt(For(ident("i"), num(0), num(1)))).split("\n")
    assert len(lines) == 2
    assert lines[-1] == "}"