from __future__ import annotations

import sys

import pytest

from tests.support.harness import (
    EmbNull,
    EmbNumber,
    EmberConstError,
    EmberNameError,
    EmberRecursionError,
    EmberRuntimeError,
    EmberTypeError,
    EmberUnsupportedError,
    ParseError,
    eval_in,
    fresh_env,
    parse_source,
    run_program,
)
from ember.evaluator import evaluate
from ember.runtime import call_native, ensure_emb_value
from ember.tree import BinaryExpr, NullLiteral, NumericLiteral, Program, PropertyLiteral

ERROR_CASES = [
    pytest.param("const x = 1; x = 2;", EmberConstError, "declared constant", id="const-reassign"),
    pytest.param("ghost", EmberNameError, "'ghost'", id="unbound-lookup"),
    pytest.param("ghost = 1;", EmberNameError, "'ghost'", id="unbound-assign"),
    pytest.param("5()", EmberTypeError, "non-function", id="call-number"),
    pytest.param('"f"(1)', EmberTypeError, "non-function", id="call-string"),
    pytest.param("let o = {}; o()", EmberTypeError, "non-function", id="call-object"),
    pytest.param("let a = 1; a.b = 2;", EmberTypeError, "Invalid assignment target", id="member-target"),
    pytest.param("fn f() {}", EmberUnsupportedError, "fn f", id="fn-declaration"),
    pytest.param("true = false;", EmberConstError, "'true'", id="assign-global-constant"),
]


@pytest.mark.parametrize("source, exc_type, msg", ERROR_CASES)
def test_runtime_errors(source: str, exc_type: type, msg: str) -> None:
    with pytest.raises(exc_type) as exc_info:
        run_program(source)

    assert isinstance(exc_info.value, EmberRuntimeError)
    assert msg in str(exc_info.value)


def test_error_records_innermost_node() -> None:
    with pytest.raises(EmberNameError) as exc_info:
        run_program("let x = 1 + ghost;")

    err = exc_info.value
    assert err.ember_meta == "Identifier"
    assert str(err).endswith("(in Identifier)")


def test_error_meta_for_binding_failure() -> None:
    with pytest.raises(EmberConstError) as exc_info:
        run_program("const k = 1; k = 2;")

    assert exc_info.value.ember_meta == "AssignmentExpr"


def test_error_without_meta_has_plain_message() -> None:
    err = EmberTypeError("plain")
    assert err.ember_meta is None
    assert str(err) == "plain"


def test_failed_statement_leaves_earlier_bindings() -> None:
    env = fresh_env()

    with pytest.raises(EmberNameError):
        eval_in(env, "let kept = 1; let lost = missing;")

    assert env.lookup("kept") == EmbNumber(1.0)
    assert not env.has_own("lost")


def test_arguments_evaluated_before_callee() -> None:
    # An unbound argument is reported even though the callee is not callable.
    with pytest.raises(EmberNameError):
        run_program("5(ghost)")


def test_bare_property_literal_is_unsupported() -> None:
    with pytest.raises(EmberUnsupportedError):
        evaluate(PropertyLiteral("a"), fresh_env())


def test_null_literal_node() -> None:
    assert evaluate(Program((NullLiteral(),))) == EmbNull()


def test_unknown_node_is_unsupported() -> None:
    with pytest.raises(EmberUnsupportedError) as exc_info:
        evaluate(object(), fresh_env())  # type: ignore[arg-type]

    assert "Unknown node" in str(exc_info.value)


def test_call_native_rejects_non_function() -> None:
    with pytest.raises(EmberTypeError):
        call_native(EmbNumber(1.0), [], fresh_env())


def test_ensure_emb_value() -> None:
    assert ensure_emb_value(None) == EmbNull()
    assert ensure_emb_value(EmbNumber(2.0)) == EmbNumber(2.0)

    with pytest.raises(EmberTypeError):
        ensure_emb_value(2.0)


def test_deep_parentheses_raise_parse_error() -> None:
    depth = sys.getrecursionlimit()
    source = "(" * depth + "1" + ")" * depth

    with pytest.raises(ParseError) as exc_info:
        parse_source(source)

    assert "nested too deeply" in str(exc_info.value)


def test_deep_evaluation_raises_runtime_error(global_env) -> None:
    node = NumericLiteral(1.0)
    for _ in range(sys.getrecursionlimit() * 2):
        node = BinaryExpr(node, NumericLiteral(1.0), "+")

    with pytest.raises(EmberRecursionError) as exc_info:
        evaluate(node, global_env)

    assert isinstance(exc_info.value, EmberRuntimeError)
    assert "nesting depth" in str(exc_info.value)


def test_long_addition_chain_stays_in_error_family(global_env) -> None:
    source = "1" + " + 1" * (sys.getrecursionlimit() * 2)

    with pytest.raises(EmberRecursionError):
        eval_in(global_env, source)

    # The session environment is still usable afterwards
    assert eval_in(global_env, "1 + 1") == EmbNumber(2.0)
