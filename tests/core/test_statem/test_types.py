"""Tests for statem/core/types.py: symbolic values, calls and verdicts."""

import pytest

from statem import (
    Call,
    Entry,
    ExceptionRaised,
    HistoryElement,
    Ok,
    PostconditionViolation,
    PreconditionViolation,
    RunResult,
    Step,
    Var,
    is_symbolic,
)


class TestVar:
    def test_identity_by_index(self):
        assert Var(3) == Var(3)
        assert Var(3) != Var(4)
        assert Var(1) < Var(2)
        assert repr(Var(7)) == "var7"

    def test_is_symbolic(self):
        assert is_symbolic(Var(1))
        assert not is_symbolic(1)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            Var(1).index = 2  # type: ignore


class TestCall:
    def test_arity_and_repr(self):
        call = Call(name="put", module="cache", args=(1, Var(2)))
        assert call.arity == 2
        assert repr(call) == "cache.put(1, var2)"

    def test_entry_shortcuts(self):
        call = Call(name="get", module="cache", args=())
        entry = Entry(state=[], step=Step(var=Var(1), call=call))
        assert entry.var == Var(1)
        assert entry.call is call


class TestVerdicts:
    @pytest.mark.parametrize(
        "verdict, kind, ok",
        [
            (Ok(1), "ok", True),
            (PreconditionViolation({}), "pre_condition", False),
            (PostconditionViolation(5), "post_condition", False),
            (ExceptionRaised(ValueError("x")), "exception", False),
        ],
    )
    def test_kind_and_ok(self, verdict, kind, ok):
        assert verdict.kind == kind
        assert verdict.ok is ok

    def test_run_result_defaults(self):
        r = RunResult()
        assert r.ok
        assert r.history == ()
        assert r.command_names() == []

    def test_run_result_failure(self):
        call = Call(name="get", module="cache", args=(1,))
        r = RunResult(
            history=(HistoryElement(state=[], call=call, verdict=PostconditionViolation(None)),),
            state=[],
            result=PostconditionViolation(None),
        )
        assert not r.ok
        assert r.command_names() == [("cache", "get", 1)]
