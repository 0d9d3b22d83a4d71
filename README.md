# pulsarlang

The front end of the Pulsar language, a small language for describing
accelerator kernels. It also holds the pipeline that passes a compiled
component through transforms to an output target.

## Modules

- `pulsarlang.token`: `Source`, `Loc`, `TokenType` and `Token`.
  `TokenType.kebab_name()` gives a name such as `left-par`.
  `TokenType.from_pattern("TokenType::Newline")` looks a type up by its
  written form. `str()` of a punctuation type gives its symbol, such as `->`.
- `pulsarlang.lexer`: `Lexer(source).lex()` and the shortcut `lex(source)`.
  The source is a `Source` or a plain string. Both return a list of `Token`s.
  A keyword (`func`, `let`, `for`, `in`) is recognised only when whitespace
  follows it. Lexing raises `LexError`, which has `message` and `loc`, when it
  meets a character it does not recognise.
- `pulsarlang.op`: `Op.from_token_type(ty)` gives the precedence,
  associativity and fixity of the operators `+`, `-`, `*`, `[` and `.`. It
  returns `None` for any other token type.
- `pulsarlang.attribute`: `Attribute` flags kept in an `Attributes` bitmap,
  through `add`, `with_attribute`, `has` and `from_iterable`.
- `pulsarlang.ast`: the syntax tree.
  - `ast.ty`: `Type` and `LiquidType`, with `size()`, `mangle()`,
    `can_unify_with()`, `subterms()` and `liquid_subterms()`.
  - `ast.expr`: `Expr`.
  - `ast.stmt`: `Stmt`.
  - `ast.decl`: `Decl`.
  - `ast.pretty_print`: `pretty(node)` returns the text of any node.
    `IndentWriter` does the indentation.
- `pulsarlang.constraints`: `UnificationConstraint` and
  `AffineEnvironment`. Inside a local scope, `AffineEnvironment.take` raises
  `AffineResourceError` when a resource is taken a second time.
- `pulsarlang.type_inferer`: Hindley–Milner inference over a list of
  declarations, through `TypeInferer(ast).infer()` or `infer_types(ast)`. It
  sets `ty` on every expression. On failure it raises `TypeInferenceError`;
  its `diagnostics` attribute holds `Diagnostic` records. Inference rejects:
  - unbound names;
  - mismatched types or array lengths;
  - two assignments to the same location without a `---` divider between them;
  - two nested sequential operations (`*`) in one expression.
- `pulsarlang.pipeline`: `BackendBuilder`, `Backend`, the abstract bases
  `Transform` and `Target`, and `OutputFile`. `OutputFile` is created with
  `stdout()`, `stderr()` or `file(path)`. Its `open()` is a context manager
  that yields a text stream.

## Installation

```
pip install .
```

## Examples

Lexing:

```python
from pulsarlang.lexer import lex
from pulsarlang.token import Source

tokens = lex(Source("main.pls", "func main(a: Int64) -> (b: Int64) {\n}\n"))
for token in tokens:
    print(token.ty.kebab_name(), repr(token.value))
```

Type inference on a tree built by hand:

```python
from pulsarlang.ast.decl import Decl, Function
from pulsarlang.ast.expr import ConstantInt, Expr
from pulsarlang.ast.pretty_print import pretty
from pulsarlang.ast.stmt import Let, Stmt
from pulsarlang.token import Token, TokenType
from pulsarlang.type_inferer import infer_types

value = Expr(ConstantInt(1))
body = (Stmt(Let(Token(TokenType.IDENTIFIER, "x"), None, value)),)
decl = Decl(Function(Token(TokenType.FUNC, "func"),
                     Token(TokenType.IDENTIFIER, "f"), body=body))

infer_types([decl])
print(value.ty)      # Int64
print(pretty(decl))  # func f() -> () {
                     #     let x = 1
                     # }
```

Backend pipeline:

```python
from pulsarlang.pipeline import BackendBuilder, OutputFile, Target, Transform

class Double(Transform):
    def apply(self, comp, pool, gen):
        return comp * 2

class Print(Target):
    def emit(self, comp, pool, output):
        with output.open() as stream:
            print(comp, file=stream)

backend = BackendBuilder().through(Double()).target(Print()).build()
backend.emit(21, None, None, OutputFile.stdout())  # prints 42
```

`Backend.emit` raises `RuntimeError` when no target was set.

## What it does not do

- There is no parser. Lexing produces tokens, but syntax trees must be built
  directly from the node classes.
- The package ships no concrete transforms or output targets. `Transform` and
  `Target` are only the interfaces a backend is assembled from.
- Type inference does not handle member access or call expressions. It
  raises `TypeInferenceError` for them.
- There is no command-line program.

## Running the tests

```
pip install ".[test]"
pytest
```