from dataclasses import dataclass
from typing import Any

import pytest

from goblin.scanner import Position
from goblin.scope import ReturnValue, Scope, ScriptError
from goblin.statements import (
    Expression,
    Module,
    Return,
    Throw,
    Try,
    Variable,
    Variables,
)


@dataclass
class Lit:
    value: Any
    position: Any = None

    def invoke(self, scope):
        return self.value

    def __str__(self):
        return repr(self.value)


@dataclass
class Ident:
    name: str
    position: Any = None

    def invoke(self, scope):
        return scope.get(self.name)

    def assign(self, value, scope):
        try:
            scope.set(self.name, value)
        except ScriptError:
            scope.define(self.name, value)
        return value

    def __str__(self):
        return self.name


@dataclass
class Boom:
    message: str = "boom"
    position: Any = None

    def invoke(self, scope):
        raise ScriptError(self.message)

    def assign(self, value, scope):
        raise ScriptError(self.message)


def test_expression_returns_value():
    scope = Scope()
    assert Expression(Lit(7)).execute(scope) == 7


def test_expression_error_gets_statement_position():
    pos = Position(3, 5)
    with pytest.raises(ScriptError) as info:
        Expression(Boom(), position=pos).execute(Scope())
    assert info.value.position == pos
    assert str(info.value) == "3:5: boom"


def test_expression_str_is_expression_text():
    assert str(Expression(Ident("abc"))) == "abc"


def test_module_defines_global_scope_with_symbols():
    scope = Scope()
    inner = scope.new_scope()
    Module("m", [Variable(["x"], [Lit(1)])]).execute(inner)
    module = scope.get("m")
    assert isinstance(module, Scope)
    assert module.name == "m"
    assert module.get("x") == 1


def test_module_error_propagates():
    with pytest.raises(ScriptError, match="boom"):
        Module("m", [Expression(Boom())]).execute(Scope())


def test_module_str():
    stmt = Module("m", [Expression(Ident("a"))])
    assert str(stmt) == "module m {\n    a\n}"


def test_return_without_values():
    with pytest.raises(ReturnValue) as info:
        Return().execute(Scope())
    assert info.value.value is None


def test_return_single_value():
    with pytest.raises(ReturnValue) as info:
        Return([Lit("x")]).execute(Scope())
    assert info.value.value == "x"


def test_return_several_values_as_list():
    with pytest.raises(ReturnValue) as info:
        Return([Lit(1), Lit(None), Lit("z")]).execute(Scope())
    assert info.value.value == [1, None, "z"]


def test_return_str():
    assert str(Return([Ident("a"), Ident("b")])) == "return a, b"
    assert str(Return()) == "return"


def test_throw_raises_with_value_text():
    with pytest.raises(ScriptError) as info:
        Throw(Lit("oops")).execute(Scope())
    assert info.value.message == "oops"


def test_throw_number_formats_value():
    with pytest.raises(ScriptError) as info:
        Throw(Lit(42)).execute(Scope())
    assert info.value.message == "42"


def test_throw_nil_does_nothing():
    assert Throw(Lit(None)).execute(Scope()) is None


def test_try_catch_binds_error_and_finally_runs():
    scope = Scope()
    scope.define("seen", None)
    scope.define("done", False)
    stmt = Try(
        body=[Throw(Lit("bad"))],
        var="e",
        catch=[Variables([Ident("seen")], [Ident("e")])],
        final=[Variables([Ident("done")], [Lit(True)])],
    )
    assert stmt.execute(scope) is None
    assert scope.get("seen").message == "bad"
    assert scope.get("done") is True


def test_try_without_error_skips_catch():
    scope = Scope()
    scope.define("hit", False)
    stmt = Try(body=[Expression(Lit(1))], catch=[Variables([Ident("hit")], [Lit(True)])])
    assert stmt.execute(scope) is None
    assert scope.get("hit") is False


def test_try_error_in_catch_propagates_after_finally():
    scope = Scope()
    scope.define("done", False)
    stmt = Try(
        body=[Throw(Lit("first"))],
        catch=[Throw(Lit("second"))],
        final=[Variables([Ident("done")], [Lit(True)])],
    )
    with pytest.raises(ScriptError) as info:
        stmt.execute(scope)
    assert info.value.message == "second"
    assert scope.get("done") is True


def test_try_error_in_finally_wins():
    stmt = Try(body=[Expression(Lit(1))], final=[Throw(Lit("late"))])
    with pytest.raises(ScriptError, match="late"):
        stmt.execute(Scope())


def test_try_catch_scope_does_not_leak():
    scope = Scope()
    Try(body=[Throw(Lit("x"))], var="e", catch=[]).execute(scope)
    with pytest.raises(ScriptError):
        scope.get("e")


def test_try_str():
    stmt = Try(body=[Expression(Ident("a"))], var="e", catch=[Expression(Ident("b"))])
    assert str(stmt) == "try {\n    a\n} catch e {\n    b\n}"


def test_variable_defines_names():
    scope = Scope()
    result = Variable(["a", "b"], [Lit(1), Lit("two")]).execute(scope)
    assert result == [1, "two"]
    assert scope.get("a") == 1
    assert scope.get("b") == "two"


def test_variable_extra_names_left_undefined():
    scope = Scope()
    Variable(["a", "b"], [Lit(1)]).execute(scope)
    assert scope.get("a") == 1
    with pytest.raises(ScriptError):
        scope.get("b")


def test_variable_defines_in_current_scope_only():
    scope = Scope()
    scope.define("a", 0)
    child = scope.new_scope()
    Variable(["a"], [Lit(5)]).execute(child)
    assert child.get("a") == 5
    assert scope.get("a") == 0


def test_variable_str():
    assert str(Variable(["a", "b"], [Ident("x"), Ident("y")])) == "a, b = x, y"


def test_variables_assigns_existing_symbol():
    scope = Scope()
    scope.define("a", 0)
    child = scope.new_scope()
    result = Variables([Ident("a")], [Lit(9)]).execute(child)
    assert result == 9
    assert scope.get("a") == 9


def test_variables_unpacks_single_list():
    scope = Scope()
    result = Variables([Ident("a"), Ident("b")], [Lit([1, 2])]).execute(scope)
    assert result == [1, 2]
    assert (scope.get("a"), scope.get("b")) == (1, 2)


def test_variables_multiple_values():
    scope = Scope()
    result = Variables([Ident("a"), Ident("b")], [Lit("x"), Lit("y")]).execute(scope)
    assert result == ["x", "y"]
    assert scope.get("b") == "y"


def test_variables_assign_error_positioned_at_target():
    pos = Position(2, 1)
    with pytest.raises(ScriptError) as info:
        Variables([Boom(position=pos)], [Lit(1)]).execute(Scope())
    assert info.value.position == pos


def test_variables_str():
    assert str(Variables([Ident("a"), Ident("b")], [Ident("c")])) == "a, b = c"