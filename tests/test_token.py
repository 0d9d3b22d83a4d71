import pytest

from pulsarlang.token import Loc, Source, Token, TokenType


@pytest.mark.parametrize("member", list(TokenType))
def test_from_pattern_round_trip(member):
    assert TokenType.from_pattern("TokenType::" + member.value) is member


@pytest.mark.parametrize("pat", ["Newline", "TokenType::Nope", "", "TokenType::"])
def test_from_pattern_unknown(pat):
    assert TokenType.from_pattern(pat) is None


def test_from_pattern_documented_example():
    assert TokenType.from_pattern("TokenType::Newline") is TokenType.NEWLINE


def test_kebab_names_are_lowercase_and_distinct():
    first = TokenType.LEFT_BRACE.kebab_name()
    assert first == "left-brace"
    names = [member.kebab_name() for member in TokenType]
    assert first in names
    assert all(name == name.lower() for name in names)
    assert len(set(names)) == len(names)


def test_kebab_name_multiword():
    assert TokenType.LEFT_PAR.kebab_name() == "left-par"
    assert TokenType.DOTS_UNTIL.kebab_name() == "dots-until"


@pytest.mark.parametrize(
    ("pattern", "symbol"),
    [
        ("TokenType::Arrow", "->"),
        ("TokenType::Divider", "---"),
        ("TokenType::DotsUntil", "..<"),
    ],
)
def test_display_symbols(pattern, symbol):
    member = TokenType.from_pattern(pattern)
    assert str(member) == symbol


def test_display_falls_back_to_kebab_name():
    assert str(TokenType.IDENTIFIER) == TokenType.IDENTIFIER.kebab_name()
    assert str(TokenType.NEWLINE) == TokenType.NEWLINE.kebab_name()


def test_token_length_and_span():
    src = Source("t", "main")
    tok = Token(TokenType.IDENTIFIER, "main", Loc(1, 1, 0, src))
    assert tok.length() == len("main")
    assert tok.start() == tok.loc
    end = tok.end()
    assert end.pos == tok.loc.pos + tok.length()
    assert end.col == tok.loc.col + tok.length()
    assert end.line == tok.loc.line


def test_newline_repr_is_escaped():
    tok = Token(TokenType.NEWLINE, "\n")
    text = repr(tok)
    assert "\n" not in text
    assert "\\n" in text
    assert TokenType.NEWLINE.kebab_name() in text