"""Control-flow statements: loops, conditionals and switches."""

from __future__ import annotations

import io
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator

from goblin.compare import equal
from goblin.convert import to_bool
from goblin.scope import BreakLoop, ContinueLoop, ReturnValue, Scope, ScriptError
from goblin.text import Prefixer

_INDENT = "    "


def _fmt(value: Any) -> str:
    return "<nil>" if value is None else str(value)


def _block(header: str, stmts: list, *, closing: bool = True) -> str:
    buffer = io.StringIO()
    buffer.write(header)
    prefixer = Prefixer(buffer, _INDENT)
    for stmt in stmts:
        prefixer.write("\n" + _fmt(stmt))
    if closing:
        buffer.write("\n}")
    return buffer.getvalue()


@contextmanager
def _located(stmt: Statement) -> Iterator[None]:
    """Attach the statement's position to errors raised inside the block."""
    try:
        yield
    except (BreakLoop, ContinueLoop, ReturnValue):
        raise
    except ScriptError as exc:
        if exc.position is None:
            exc.position = stmt.position
        raise
    except Exception as exc:
        raise ScriptError(str(exc), stmt.position) from exc


@dataclass
class Statement:
    """Base of all statements; a bare statement cannot be executed."""

    position: Any = field(default=None, kw_only=True, compare=False)

    def execute(self, scope: Scope) -> Any:
        """Run the statement in the scope and return its value."""
        raise ScriptError(f"cannot execute {self}", self.position)


@dataclass
class Break(Statement):
    """Leaves the innermost loop."""

    def __str__(self) -> str:
        return "break"

    def execute(self, scope: Scope) -> Any:
        raise BreakLoop(position=self.position)


@dataclass
class Continue(Statement):
    """Starts the next iteration of the innermost loop."""

    def __str__(self) -> str:
        return "continue"

    def execute(self, scope: Scope) -> Any:
        raise ContinueLoop(position=self.position)


@dataclass
class Loop(Statement):
    """A loop that runs while its condition holds, or forever without one."""

    expr: Any = None
    stmts: list = field(default_factory=list)

    def __str__(self) -> str:
        header = f"for {self.expr} {{" if self.expr is not None else "for {"
        return _block(header, self.stmts)

    def execute(self, scope: Scope) -> Any:
        inner = scope.new_scope()
        try:
            with _located(self):
                while True:
                    if self.expr is not None and not to_bool(self.expr.invoke(inner)):
                        break
                    try:
                        inner.run(self.stmts)
                    except BreakLoop:
                        break
                    except ContinueLoop:
                        continue
        finally:
            inner.destroy()
        return None


@dataclass
class For(Statement):
    """Iterates over the items of an array value."""

    var: str
    value: Any
    stmts: list = field(default_factory=list)

    def __str__(self) -> str:
        return _block(f"for {self.var} in {self.value} {{", self.stmts)

    def execute(self, scope: Scope) -> Any:
        with _located(self):
            items = self.value.invoke(scope)
            if not isinstance(items, (list, tuple)):
                raise ScriptError("Invalid operation for non-array value", self.position)
            inner = scope.new_scope()
            try:
                for item in items:
                    inner.define(self.var, item)
                    try:
                        inner.run(self.stmts)
                    except BreakLoop:
                        break
                    except ContinueLoop:
                        continue
            finally:
                inner.destroy()
        return None


@dataclass
class CFor(Statement):
    """A loop with an initializer, a condition and a post expression."""

    expr1: Any
    expr2: Any
    expr3: Any
    stmts: list = field(default_factory=list)

    def __str__(self) -> str:
        header = f"for {_fmt(self.expr1)}; {_fmt(self.expr2)}; {_fmt(self.expr3)} {{"
        return _block(header, self.stmts)

    def execute(self, scope: Scope) -> Any:
        inner = scope.new_scope()
        try:
            with _located(self):
                if self.expr1 is not None:
                    self.expr1.invoke(inner)
                while True:
                    if self.expr2 is not None and not to_bool(self.expr2.invoke(inner)):
                        break
                    try:
                        inner.run(self.stmts)
                    except BreakLoop:
                        break
                    except ContinueLoop:
                        # As with a plain loop, continue goes straight back to
                        # the condition without evaluating the post expression.
                        continue
                    if self.expr3 is not None:
                        self.expr3.invoke(inner)
        finally:
            inner.destroy()
        return None


@dataclass
class If(Statement):
    """An if statement with optional else-if branches and an else branch."""

    condition: Any
    then: list = field(default_factory=list)
    else_ifs: list = field(default_factory=list)
    otherwise: list = field(default_factory=list)

    def __str__(self) -> str:
        text = _block(f"if {self.condition} {{", self.then)
        for branch in self.else_ifs:
            text += f" else {branch}"
        if self.otherwise:
            text += _block(" else {", self.otherwise)
        return text

    def execute(self, scope: Scope) -> Any:
        with _located(self):
            result = self.condition.invoke(scope)
            if to_bool(result):
                inner = scope.new_scope()
                try:
                    return inner.run(self.then)
                finally:
                    inner.destroy()
            for branch in self.else_ifs:
                if not isinstance(branch, If):
                    raise ScriptError("bad syntax", getattr(branch, "position", None))
                with _located(branch):
                    result = branch.condition.invoke(scope)
                    if to_bool(result):
                        return scope.run(branch.then)
            if self.otherwise:
                inner = scope.new_scope()
                try:
                    result = inner.run(self.otherwise)
                finally:
                    inner.destroy()
            return result


@dataclass
class Case(Statement):
    """One case of a switch; only runs as part of its switch."""

    expr: Any
    stmts: list = field(default_factory=list)

    def __str__(self) -> str:
        return _block(f"case {self.expr}:", self.stmts, closing=False)

    def execute(self, scope: Scope) -> Any:
        raise ScriptError(f"cannot execute {self}", self.position)


@dataclass
class Default(Statement):
    """The default case of a switch; only runs as part of its switch."""

    stmts: list = field(default_factory=list)

    def __str__(self) -> str:
        return _block("default:", self.stmts, closing=False)

    def execute(self, scope: Scope) -> Any:
        raise ScriptError(f"cannot execute {self}", self.position)


@dataclass
class Switch(Statement):
    """Runs the first case equal to the value, or else the default case."""

    expr: Any
    cases: list = field(default_factory=list)

    def __str__(self) -> str:
        return _block(f"switch {self.expr} {{", self.cases)

    def execute(self, scope: Scope) -> Any:
        with _located(self):
            result = self.expr.invoke(scope)
            default: Default | None = None
            for case in self.cases:
                if isinstance(case, Default):
                    default = case
                    continue
                if not isinstance(case, Case):
                    raise ScriptError("bad syntax", self.position)
                if equal(result, case.expr.invoke(scope)):
                    return scope.run(case.stmts)
            if default is not None:
                result = scope.run(default.stmts)
            return result