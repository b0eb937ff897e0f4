"""Variable scopes and the errors raised while running script statements."""

from __future__ import annotations

import threading
from typing import Any, Iterable


class ScriptError(Exception):
    """An error raised while parsing or running a script."""

    def __init__(self, message: str, position: Any = None, *, fatal: bool = False):
        super().__init__(message)
        self.message = message
        self.position = position
        self.fatal = fatal

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        line = getattr(self.position, "line", 0)
        column = getattr(self.position, "column", 0)
        return f"{line}:{column}: {self.message}"


class InterruptError(ScriptError):
    """Raised when execution is interrupted or times out."""

    def __init__(self, message: str = "execution interrupted", position: Any = None):
        super().__init__(message, position)


class BreakLoop(ScriptError):
    """Raised by a break statement to leave the enclosing loop."""

    def __init__(self, message: str = "unexpected break statement", position: Any = None):
        super().__init__(message, position)


class ContinueLoop(ScriptError):
    """Raised by a continue statement to start the next loop iteration."""

    def __init__(
        self, message: str = "unexpected continue statement", position: Any = None
    ):
        super().__init__(message, position)


class ReturnValue(ScriptError):
    """Raised by a return statement; carries the returned value."""

    def __init__(self, value: Any = None, position: Any = None):
        super().__init__("unexpected return statement", position)
        self.value = value


class Scope:
    """A table of symbols and types, chained to an enclosing scope."""

    def __init__(
        self,
        name: str = "",
        parent: Scope | None = None,
        interrupt_event: threading.Event | None = None,
    ):
        self.name = name
        self.parent = parent
        if interrupt_event is None:
            interrupt_event = parent._interrupt if parent is not None else threading.Event()
        self._interrupt = interrupt_event
        self._env: dict[str, Any] = {}
        self._types: dict[str, Any] = {}

    def _chain(self):
        scope: Scope | None = self
        while scope is not None:
            yield scope
            scope = scope.parent

    @property
    def _root(self) -> Scope:
        *_, root = self._chain()
        return root

    def new_scope(self) -> Scope:
        """Create a child scope with the same name."""
        return Scope(self.name, self)

    def new_package(self, name: str) -> Scope:
        """Create a named child scope."""
        return Scope(name, self)

    def new_module(self, name: str) -> Scope:
        """Create a named child scope and define it under that name here."""
        module = Scope(name, self)
        self.define(name, module)
        return module

    def _drain_interrupts(self) -> None:
        if self.parent is None:
            self._interrupt.clear()

    def _run(self, stmts: Iterable[Any]) -> Any:
        result = None
        for stmt in stmts:
            if self._interrupt.is_set():
                self._interrupt.clear()
                raise InterruptError()
            result = stmt.execute(self)
        return result

    def run(self, stmts: Iterable[Any]) -> Any:
        """Execute statements in order and return the value of the last one."""
        self._drain_interrupts()
        return self._run(stmts)

    def run_with_timeout(self, timeout: float, stmts: Iterable[Any]) -> Any:
        """Like run, but interrupt execution after ``timeout`` seconds."""
        if timeout <= 0:
            raise InterruptError()
        self._drain_interrupts()
        timer = threading.Timer(timeout, self.interrupt)
        timer.daemon = True
        timer.start()
        try:
            return self._run(stmts)
        finally:
            timer.cancel()

    def interrupt(self) -> None:
        """Request that running statements stop before the next one starts."""
        self._interrupt.set()

    def destroy(self) -> None:
        """Detach this scope from its parent and drop its symbols."""
        if self.parent is None:
            return
        env = self.parent._env
        for key in [k for k, v in env.items() if v is self]:
            del env[key]
        self.parent = None
        self._env = {}

    def type(self, sym: str) -> Any:
        """Look up a type by name through the scope chain."""
        for scope in self._chain():
            if sym in scope._types:
                return scope._types[sym]
        raise ScriptError(f"undefined type '{sym}'")

    def get(self, sym: str) -> Any:
        """Look up a symbol's value through the scope chain."""
        for scope in self._chain():
            if sym in scope._env:
                return scope._env[sym]
        raise ScriptError(f"undefined symbol '{sym}'")

    def set(self, key: str, value: Any) -> None:
        """Replace the value of an existing symbol in the nearest scope holding it."""
        for scope in self._chain():
            if key in scope._env:
                scope._env[key] = value
                return
        raise ScriptError(f"unknown symbol '{key}'")

    def define_global(self, key: str, value: Any) -> None:
        """Define a symbol in the outermost scope."""
        self._root.define(key, value)

    def define_type(self, key: str, typ: Any) -> None:
        """Register a type globally, qualified by the names of enclosing packages.

        ``typ`` may be a type or a sample value whose type is used.
        """
        keys = [key]
        scope = self
        while scope.parent is not None:
            if scope.name:
                keys.append(scope.name)
            scope = scope.parent
        keys.reverse()
        resolved = typ if isinstance(typ, type) else type(typ)
        scope._types[".".join(keys)] = resolved

    def define(self, key: str, value: Any) -> None:
        """Define a symbol in this scope."""
        self._env[key] = value

    def __str__(self) -> str:
        return f"[scope: {self.name}]"

    __repr__ = __str__