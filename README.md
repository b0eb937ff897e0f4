# goblin

The runtime core of a small, dynamically typed scripting language that can be
embedded in Python programs. It provides:

- **Scopes** (`goblin.scope`): nested symbol tables, packages, modules and
  named types. It also runs lists of statements, with optional timeouts and
  interruption, and defines the errors raised while a script runs.
- **Tokenizing** (`goblin.scanner`): turns script source into tokens. Each
  token carries its line and column.
- **Statements** (`goblin.control`, `goblin.statements`): `break`,
  `continue`, loops, `for ... in`, C-style `for`, `if`/`else if`/`else`,
  `switch`/`case`/`default`, expression statements, `module`, `return`,
  `throw`, `try`/`catch`/`finally`, variable definition and assignment.
- **Value helpers** (`goblin.convert`, `goblin.compare`, `goblin.text`): the
  loose conversions and the equality rules that the language uses.

The package needs only the Python standard library. It supports Python 3.10
and later.

## Installation

```
pip install .
```

## Scopes

```python
from goblin.scope import Scope

glob = Scope()
glob.define("foo", "bar")

child = glob.new_scope()
child.get("foo")            # "bar", looked up through the parent scope
child.define("foo", True)   # shadows the parent's value in this scope only
glob.get("foo")             # still "bar"

glob.define_type("int", int)
pkg = glob.new_package("pkg")
pkg.define_type("Bool", bool)
glob.type("pkg.Bool")       # bool
```

- Looking up an undefined symbol or type raises `ScriptError`.
- `set(key, value)` replaces an existing symbol in the nearest scope that
  holds it. If no scope holds it, `set` raises `ScriptError`.
- `define_global` defines a symbol in the outermost scope.
- `new_module(name)` creates a named child scope and defines it under that
  name.
- `destroy()` detaches a child scope from its parent.

`run(stmts)` executes statements in order and returns the value of the last
one. `run_with_timeout(seconds, stmts)` calls `interrupt()` once the time is
up, and the run then stops with `InterruptError` before the next statement
starts. A timeout of zero or less raises `InterruptError` at once.

Control flow is carried by exceptions that are all subclasses of
`ScriptError`:

- `BreakLoop` and `ContinueLoop` end a loop or move it on to the next pass.
- `ReturnValue` carries the returned value in its `value` attribute.

## Statements

Statements are dataclasses with an `execute(scope)` method. They work on
expression objects supplied by the caller. Such an object needs an
`invoke(scope)` method that returns its value. An assignment target in
`Variables` also needs an `assign(value, scope)` method.

```python
from goblin.control import For
from goblin.scope import Scope
from goblin.statements import Expression


class Const:
    def __init__(self, value):
        self.value = value

    def invoke(self, scope):
        return self.value


class Collect:
    def __init__(self, name, out):
        self.name, self.out = name, out

    def invoke(self, scope):
        self.out.append(scope.get(self.name))


seen = []
Scope().run([For("x", Const([1, 2, 3]), [Expression(Collect("x", seen))])])
seen  # [1, 2, 3]
```

## Tokenizing

```python
from goblin.scanner import tokenize

for token in tokenize("x = 0x10 + 2"):
    print(token.tok, token.lit, token.pos)
```

`Scanner(src).scan()` returns one `Token` at a time and keeps returning an
`EOF` token at the end of the input. A malformed token raises `ScanError`,
which carries the position of that token.

## Conversions and comparison

```python
from goblin.compare import equal
from goblin.convert import to_bool, to_float64, to_int64, to_string

to_bool("yes")      # True
to_int64("0x10")    # 16
to_float64("24.5")  # 24.5
to_string(None)     # "nil"
equal(2, 2.0)       # True
equal("1", 1)       # True: a numeric string compares as a number
```

`goblin.text.quoted_string` quotes a string so that it can be used as a
literal in a script. `goblin.text.Prefixer` writes its `prefix` after every
newline that it passes on to its `writer`.

## What the package does not do

- There is no parser that builds statements from tokens.
- There are no expression classes, such as operators, calls, literals or
  functions. Statements have to be given expression objects built by the
  caller.
- A new `Scope` starts empty, with no built-in functions.
- There is no command for running script files.

## Running the tests

```
pip install ".[test]"
pytest
```