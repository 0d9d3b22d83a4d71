from pulsarlang.ast.decl import Decl, Function, format_params
from pulsarlang.ast.expr import ConstantInt, Expr
from pulsarlang.ast.pretty_print import INDENT_WIDTH
from pulsarlang.ast.stmt import Divider, For, Let, Stmt
from pulsarlang.ast.ty import Type, TypeInt64, TypeUnit
from pulsarlang.token import Loc, Token, TokenType


def tok(ty, value):
    return Token(ty, value, Loc())


def ident(text):
    return tok(TokenType.IDENTIFIER, text)


def param(text, ty=None):
    return (ident(text), ty if ty is not None else Type(TypeInt64()))


def func(name, inputs=(), outputs=(), body=()):
    return Decl(Function(tok(TokenType.FUNC, "func"), ident(name), inputs, outputs, body))


def divider():
    return Stmt(Divider(tok(TokenType.DIVIDER, "---")))


def test_format_single_param():
    assert format_params([param("a")]) == "a: Int64"


def test_format_params_joins_each():
    a = param("a")
    b = param("b", Type(TypeUnit()))
    joined = format_params([a, b])
    assert joined.split(", ") == [format_params([a]), format_params([b])]
    assert format_params([]) == ""


def test_empty_function():
    assert str(func("f")) == "func f() -> () {}"


def test_signature_contains_params():
    decl = func("main", [param("a")], [param("out")])
    first = str(decl).split("\n")[0]
    assert first.startswith("func main(" + format_params([param("a")]) + ")")
    assert "(" + format_params([param("out")]) + ")" in first


def test_body_is_indented_one_stmt_per_line():
    let = Stmt(Let(ident("x"), None, Expr(ConstantInt(1))))
    decl = func("main", body=[let, divider()])
    lines = str(decl).split("\n")
    indent = " " * INDENT_WIDTH
    assert lines[0].endswith("{")
    assert lines[1:-1] == [indent + str(let), indent + str(divider())]
    assert lines[-1] == "}"


def test_nested_for_in_function():
    loop = Stmt(
        For(ident("i"), Expr(ConstantInt(0)), Expr(ConstantInt(2)), [divider()])
    )
    lines = str(func("main", body=[loop])).split("\n")
    assert " " * (2 * INDENT_WIDTH) + str(divider()) in lines
    assert lines[-2] == " " * INDENT_WIDTH + "}"
    assert lines[-1] == "}"