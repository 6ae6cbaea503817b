from __future__ import annotations

import time

import pytest

from tests.support.harness import (
    EmbBool,
    EmbNull,
    EmbNumber,
    EmbString,
    EmberConstError,
    EmberNameError,
    EmberRedeclareError,
    Environment,
    NativeFunction,
    eval_in,
    fresh_env,
    make_global_env,
    run_runtime_case,
)
from ember.runtime import init_stdlib, register_native
from ember.types import Builtins


def test_declare_then_lookup() -> None:
    env = Environment()
    assert env.declare("x", EmbNumber(1.0)) == EmbNumber(1.0)
    assert env.lookup("x") == EmbNumber(1.0)
    assert env.has_own("x")


def test_redeclare_in_same_scope_fails() -> None:
    env = Environment()
    env.declare("x", EmbNumber(1.0))

    with pytest.raises(EmberRedeclareError) as exc_info:
        env.declare("x", EmbNumber(2.0))

    assert exc_info.value.name == "x"
    assert env.lookup("x") == EmbNumber(1.0)


def test_child_may_shadow_parent() -> None:
    parent = Environment()
    parent.declare("x", EmbNumber(1.0))
    child = Environment(parent)
    child.declare("x", EmbNumber(2.0))

    assert child.lookup("x") == EmbNumber(2.0)
    assert parent.lookup("x") == EmbNumber(1.0)


def test_resolve_walks_parent_chain() -> None:
    root = Environment()
    root.declare("depth", EmbString("root"))
    middle = Environment(root)
    leaf = Environment(middle)

    assert leaf.resolve("depth") is root
    assert leaf.lookup("depth") == EmbString("root")
    assert not leaf.has_own("depth")


def test_assign_updates_defining_scope() -> None:
    parent = Environment()
    parent.declare("x", EmbNumber(1.0))
    child = Environment(parent)

    assert child.assign("x", EmbNumber(5.0)) == EmbNumber(5.0)
    assert parent.lookup("x") == EmbNumber(5.0)
    assert not child.has_own("x")


def test_assign_to_constant_fails() -> None:
    env = Environment()
    env.declare("k", EmbNumber(1.0), constant=True)

    with pytest.raises(EmberConstError) as exc_info:
        env.assign("k", EmbNumber(2.0))

    assert exc_info.value.name == "k"
    assert env.lookup("k") == EmbNumber(1.0)


def test_constant_in_parent_blocks_child_assignment() -> None:
    parent = Environment()
    parent.declare("k", EmbNumber(1.0), constant=True)

    with pytest.raises(EmberConstError):
        Environment(parent).assign("k", EmbNumber(2.0))


@pytest.mark.parametrize("op", ["lookup", "assign"])
def test_unbound_name(op: str) -> None:
    env = Environment(Environment())

    with pytest.raises(EmberNameError) as exc_info:
        if op == "lookup":
            env.lookup("ghost")
        else:
            env.assign("ghost", EmbNull())

    assert exc_info.value.name == "ghost"
    assert "ghost" in str(exc_info.value)


def test_global_constants() -> None:
    env = fresh_env()
    assert env.lookup("true") == EmbBool(True)
    assert env.lookup("false") == EmbBool(False)
    assert env.lookup("null") == EmbNull()


@pytest.mark.parametrize("name", ["true", "false", "null", "print", "time"])
def test_global_bindings_are_constant(name: str) -> None:
    with pytest.raises(EmberConstError):
        fresh_env().assign(name, EmbNumber(0.0))


def test_global_natives_are_registered() -> None:
    env = fresh_env()
    assert isinstance(env.lookup("print"), NativeFunction)
    assert isinstance(env.lookup("time"), NativeFunction)
    assert repr(env.lookup("print")) == "<native fn print>"


def test_global_envs_are_independent() -> None:
    first = fresh_env()
    second = fresh_env()
    eval_in(first, "let x = 1;")

    assert first.has_own("x")
    assert not second.has_own("x")


def test_custom_natives_mapping() -> None:
    answer = NativeFunction(fn=lambda args, env: EmbNumber(42.0), name="answer")
    env = make_global_env({"answer": answer})

    assert eval_in(env, "answer()") == EmbNumber(42.0)
    assert env.lookup("true") == EmbBool(True)
    with pytest.raises(EmberNameError):
        env.lookup("print")


def test_empty_natives_mapping_keeps_constants() -> None:
    env = make_global_env({})
    assert set(env.vars) == {"true", "false", "null"}


def test_register_native_adds_to_registry() -> None:
    init_stdlib()

    @register_native("double")
    def _double(args, _env):
        return EmbNumber(args[0].value * 2)

    try:
        env = fresh_env()
        assert eval_in(env, "double(21)") == EmbNumber(42.0)
    finally:
        Builtins.natives.pop("double", None)


def test_native_returning_none_becomes_null() -> None:
    env = make_global_env({"noop": NativeFunction(fn=lambda args, env: None, name="noop")})
    assert eval_in(env, "noop()") == EmbNull()


def test_print_writes_rendered_arguments(capsys) -> None:
    result = eval_in(fresh_env(), 'print("hi", 1 + 1, { a: 3 }, null)')

    assert result == EmbNull()
    assert capsys.readouterr().out == "hi 2 { a: 3 } null\n"


def test_print_without_arguments(capsys) -> None:
    eval_in(fresh_env(), "print()")
    assert capsys.readouterr().out == "\n"


def test_time_returns_epoch_millis() -> None:
    before = time.time() * 1000 - 1
    result = eval_in(fresh_env(), "time()")
    after = time.time() * 1000 + 1

    assert isinstance(result, EmbNumber)
    assert result.value.is_integer()
    assert before <= result.value <= after


SCOPE_SCENARIOS = [
    pytest.param("let x = 10; x = 20;", ("number", 20), None, id="let-reassign"),
    pytest.param("let x; x", ("null", None), None, id="let-without-value"),
    pytest.param("let x = 1; let x = 2;", None, EmberRedeclareError, id="let-redeclare"),
    pytest.param("const x = 1; x = 2;", None, EmberConstError, id="const-reassign"),
    pytest.param("y = 1;", None, EmberNameError, id="assign-undeclared"),
    pytest.param("missing", None, EmberNameError, id="lookup-undeclared"),
    pytest.param("let a = 1; let b = a = 7;; b", ("number", 7), None, id="assignment-is-value"),
    pytest.param("let null = 1;", None, EmberRedeclareError, id="shadow-global-in-same-scope"),
    pytest.param("true", ("bool", True), None, id="true-constant"),
    pytest.param("false", ("bool", False), None, id="false-constant"),
    pytest.param("const t = time; t", None, None, id="natives-are-values"),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCOPE_SCENARIOS)
def test_scope_scenarios(source, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


def test_global_env_is_a_fresh_root(global_env) -> None:
    assert global_env.parent is None
    assert not global_env.has_own("x")
    eval_in(global_env, "let x = 1;")
    assert global_env.lookup("x") == EmbNumber(1.0)
