"""Tests for statem/core/registry.py: registration, builders and weights."""

import pytest
import hypothesis.strategies as st

from statem import (
    Call,
    Command,
    DuplicateCommandError,
    InvalidWeightError,
    Registry,
    RegistryError,
    UnknownCommandError,
)


def _noop(*_args):
    return None


def _registry(**kwargs) -> Registry:
    return Registry(lambda: 0, module="counter", **kwargs)


class TestRegister:
    def test_register_and_lookup(self):
        reg = _registry()
        cmd = Command(name="inc", args=lambda s: [], impl=_noop)
        assert reg.register(cmd) is cmd
        assert reg["inc"] is cmd
        assert "inc" in reg
        assert len(reg) == 1

    def test_defaults(self):
        reg = _registry().define("inc", args=lambda s: [], impl=_noop)
        cmd = reg["inc"]
        assert cmd.pre(0, ()) is True
        assert cmd.next(7, (), "result") == 7
        assert cmd.post(0, (), "result") is True

    def test_duplicate_rejected(self):
        reg = _registry().define("inc", args=lambda s: [], impl=_noop)
        with pytest.raises(DuplicateCommandError, match="inc"):
            reg.define("inc", args=lambda s: [], impl=_noop)

    def test_missing_args_rejected(self):
        with pytest.raises(RegistryError, match="argument generator"):
            _registry().register(Command(name="inc", args=None, impl=_noop))  # type: ignore[arg-type]

    def test_missing_impl_rejected(self):
        with pytest.raises(RegistryError, match="implementation"):
            _registry().register(Command(name="inc", args=lambda s: [], impl=None))  # type: ignore[arg-type]

    def test_empty_name_rejected(self):
        with pytest.raises(RegistryError):
            _registry().define("  ", args=lambda s: [], impl=_noop)

    def test_non_command_rejected(self):
        with pytest.raises(RegistryError):
            _registry().register("inc")  # type: ignore[arg-type]

    def test_initial_state_must_be_callable(self):
        with pytest.raises(RegistryError):
            Registry(0)  # type: ignore[arg-type]

    def test_order_is_stable(self):
        reg = _registry()
        for name in ("c", "a", "b"):
            reg.define(name, args=lambda s: [], impl=_noop)
        assert reg.names() == ["c", "a", "b"]
        assert [cmd.name for cmd in reg] == ["c", "a", "b"]

    def test_unknown_lookup(self):
        with pytest.raises(UnknownCommandError):
            _registry()["nope"]


class TestDefcommand:
    def test_decorator_registers_impl(self):
        reg = _registry()

        @reg.defcommand(args=lambda s: [st.integers()])
        def add(x):
            return x + 1

        assert reg["add"].impl is add
        assert add(1) == 2

    def test_explicit_name(self):
        reg = _registry()

        @reg.defcommand("increment", args=lambda s: [], next=lambda s, a, r: s + 1)
        def _impl():
            return None

        assert reg.names() == ["increment"]
        assert reg.next_state(3, reg.call("increment", ()), None) == 4


class TestWeights:
    def test_uniform_when_absent(self):
        reg = _registry().define("inc", args=lambda s: [], impl=_noop)
        assert not reg.weighted
        assert reg.weights(0) is None

    def test_state_dependent_table(self):
        reg = _registry(weight=lambda s: {"inc": 1} if s == 0 else {"inc": 1, "dec": 3})
        reg.define("inc", args=lambda s: [], impl=_noop)
        reg.define("dec", args=lambda s: [], impl=_noop)
        assert reg.weights(0) == {"inc": 1}
        assert reg.weights(5) == {"inc": 1, "dec": 3}

    @pytest.mark.parametrize("bad", [0, -1, 1.5, True, "3"])
    def test_invalid_weight(self, bad):
        reg = _registry(weight=lambda s: {"inc": bad})
        reg.define("inc", args=lambda s: [], impl=_noop)
        with pytest.raises(InvalidWeightError):
            reg.weights(0)

    def test_unknown_command_in_table(self):
        reg = _registry(weight=lambda s: {"missing": 1})
        reg.define("inc", args=lambda s: [], impl=_noop)
        with pytest.raises(UnknownCommandError):
            reg.weights(0)


class TestDispatch:
    def test_call_carries_module(self):
        reg = _registry().define("inc", args=lambda s: [], impl=_noop)
        assert reg.call("inc", [1, 2]) == Call(name="inc", module="counter", args=(1, 2))

    def test_conditions(self):
        reg = _registry().define(
            "dec",
            args=lambda s: [],
            impl=_noop,
            pre=lambda s, a: s > 0,
            next=lambda s, a, r: s - 1,
            post=lambda s, a, r: r == s - 1,
        )
        call = reg.call("dec", ())
        assert not reg.check_precondition(0, call)
        assert reg.check_precondition(2, call)
        assert reg.next_state(2, call, None) == 1
        assert reg.check_postcondition(2, call, 1)
        assert not reg.check_postcondition(2, call, 5)
