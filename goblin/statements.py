"""Simple statements: expressions, modules, returns, throws, try and assignments."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator

from goblin.control import Statement, _block, _fmt
from goblin.convert import to_string
from goblin.scope import BreakLoop, ContinueLoop, ReturnValue, Scope, ScriptError

_FLOW = (BreakLoop, ContinueLoop, ReturnValue)


@contextmanager
def _located_at(position: Any) -> Iterator[None]:
    """Give errors raised inside the block a position if they lack one."""
    try:
        yield
    except _FLOW:
        raise
    except ScriptError as exc:
        if exc.position is None:
            exc.position = position
        raise
    except Exception as exc:
        raise ScriptError(str(exc), position) from exc


def _position_of(node: Any) -> Any:
    return getattr(node, "position", None)


def _joined(items: list) -> str:
    return ", ".join(_fmt(item) for item in items)


@dataclass
class Expression(Statement):
    """A statement consisting of a single expression."""

    expr: Any

    def __str__(self) -> str:
        return _fmt(self.expr)

    def execute(self, scope: Scope) -> Any:
        with _located_at(self.position):
            return self.expr.invoke(scope)


@dataclass
class Module(Statement):
    """Runs its statements in a named scope that becomes a global symbol."""

    name: str
    stmts: list = field(default_factory=list)

    def __str__(self) -> str:
        return _block(f"module {self.name} {{", self.stmts)

    def execute(self, scope: Scope) -> Any:
        module = scope.new_module(self.name)
        with _located_at(self.position):
            result = module.run(self.stmts)
        scope.define_global(self.name, module)
        return result


@dataclass
class Return(Statement):
    """Returns no value, one value, or a list of several values."""

    exprs: list = field(default_factory=list)

    def __str__(self) -> str:
        return "return" + ",".join(f" {_fmt(expr)}" for expr in self.exprs)

    def execute(self, scope: Scope) -> Any:
        with _located_at(self.position):
            values = [expr.invoke(scope) for expr in self.exprs]
        if not values:
            raise ReturnValue(None, self.position)
        if len(values) == 1:
            raise ReturnValue(values[0], self.position)
        raise ReturnValue(values, self.position)


@dataclass
class Throw(Statement):
    """Raises an error whose message is the text of the value; nil throws nothing."""

    expr: Any

    def __str__(self) -> str:
        return f"throw {_fmt(self.expr)}"

    def execute(self, scope: Scope) -> Any:
        with _located_at(self.position):
            value = self.expr.invoke(scope)
        if value is None:
            return None
        raise ScriptError(to_string(value), self.position)


def _attempt(scope: Scope, stmts: list, position: Any) -> ScriptError | None:
    """Run statements in a fresh child scope and return the error they raised."""
    inner = scope.new_scope()
    try:
        inner.run(stmts)
    except ScriptError as exc:
        return exc
    except Exception as exc:
        return ScriptError(str(exc), position)
    finally:
        inner.destroy()
    return None


@dataclass
class Try(Statement):
    """Runs a body, handles its error in a catch block, then runs a final block."""

    body: list = field(default_factory=list)
    var: str = ""
    catch: list = field(default_factory=list)
    final: list = field(default_factory=list)

    def __str__(self) -> str:
        text = _block("try {", self.body, closing=False)
        catch_header = "\n} catch " + (f"{self.var} " if self.var else "") + "{"
        text += _block(catch_header, self.catch)
        if self.final:
            text += _block(" finally {", self.final)
        return text

    def _run_catch(self, scope: Scope, error: ScriptError) -> ScriptError | None:
        catch_scope = scope.new_scope()
        try:
            if self.var:
                catch_scope.define(self.var, error)
            catch_scope.run(self.catch)
        except ScriptError as exc:
            return exc
        except Exception as exc:
            return ScriptError(str(exc), self.position)
        finally:
            catch_scope.destroy()
        return None

    def execute(self, scope: Scope) -> Any:
        error = _attempt(scope, self.body, self.position)
        if error is not None:
            error = self._run_catch(scope, error)
            if error is not None and error.position is None and self.catch:
                error.position = _position_of(self.catch[0])
        if self.final:
            final_error = _attempt(scope, self.final, self.position)
            if final_error is not None:
                if final_error.position is None:
                    final_error.position = _position_of(self.final[0])
                error = final_error
        if error is not None:
            if error.position is None:
                error.position = self.position
            raise error
        return None


@dataclass
class Variable(Statement):
    """Defines names in the current scope from the values of expressions."""

    names: list = field(default_factory=list)
    exprs: list = field(default_factory=list)

    def __str__(self) -> str:
        return f"{', '.join(self.names)} = {_joined(self.exprs)}"

    def execute(self, scope: Scope) -> Any:
        values = []
        for expr in self.exprs:
            with _located_at(_position_of(expr)):
                values.append(expr.invoke(scope))
        result = []
        for name, value in zip(self.names, values):
            scope.define(name, value)
            result.append(value)
        return result


@dataclass
class Variables(Statement):
    """Assigns values to one or more targets, unpacking a single list if needed."""

    left: list = field(default_factory=list)
    right: list = field(default_factory=list)
    operator: str = "="

    def __str__(self) -> str:
        return f"{_joined(self.left)} {self.operator} {_joined(self.right)}"

    def execute(self, scope: Scope) -> Any:
        values = []
        for expr in self.right:
            with _located_at(_position_of(expr)):
                values.append(expr.invoke(scope))
        if len(self.left) > 1 and len(values) == 1 and isinstance(values[0], (list, tuple)):
            values = list(values[0])
        for target, value in zip(self.left, values):
            with _located_at(_position_of(target)):
                target.assign(value, scope)
        if len(values) == 1:
            return values[0]
        return values