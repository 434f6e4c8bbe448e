"""Data types for the statem engine.

All types are frozen dataclasses (immutable). The engine works in two phases:

- generation: results of calls are not known yet, so each step's result is a
  symbolic ``Var(index)``;
- execution: calls run against the system under test (SUT) and each ``Var`` is
  replaced by the concrete result of the step that produced it.

Model callbacks (``args``, ``pre``, ``next``) are shared by both phases and must
treat results and arguments opaquely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

State = Any

ArgsFn = Callable[[State], Any]
PreFn = Callable[[State, tuple], bool]
NextFn = Callable[[State, tuple, Any], State]
PostFn = Callable[[State, tuple, Any], bool]


def _always_true(_state: State, _args: tuple, _result: Any = None) -> bool:
    return True


def _same_state(state: State, _args: tuple, _result: Any) -> State:
    return state


# ---------------------------------------------------------------------------
# Symbolic values and calls
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class Var:
    """Placeholder for the result of the ``index``-th call of a sequence (1-based)."""

    index: int

    def __repr__(self) -> str:
        return f"var{self.index}"


def is_symbolic(value: Any) -> bool:
    return isinstance(value, Var)


@dataclass(frozen=True)
class Call:
    """A fully instantiated invocation of a registered command."""

    name: str
    module: str
    args: tuple = ()

    @property
    def arity(self) -> int:
        return len(self.args)

    def __repr__(self) -> str:
        rendered = ", ".join(repr(a) for a in self.args)
        return f"{self.module}.{self.name}({rendered})"


@dataclass(frozen=True)
class Command:
    """Declarative contract of one SUT command.

    ``args(state)`` returns a strategy of argument lists, or a list/tuple of
    strategies and constants (a fixed-arity argument list). ``impl(*args)`` is
    the real call made during execution.
    """

    name: str
    args: ArgsFn
    impl: Callable[..., Any]
    pre: PreFn = _always_true
    next: NextFn = _same_state
    post: PostFn = _always_true


@dataclass(frozen=True)
class Step:
    var: Var
    call: Call


@dataclass(frozen=True)
class Entry:
    """One generated step together with the symbolic state before it."""

    state: State
    step: Step

    @property
    def var(self) -> Var:
        return self.step.var

    @property
    def call(self) -> Call:
        return self.step.call


# ---------------------------------------------------------------------------
# Verdicts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Verdict:
    kind = "verdict"

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class Ok(Verdict):
    value: Any = None
    kind = "ok"

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class PreconditionViolation(Verdict):
    state: State = None
    kind = "pre_condition"


@dataclass(frozen=True)
class PostconditionViolation(Verdict):
    value: Any = None
    kind = "post_condition"


@dataclass(frozen=True)
class ExceptionRaised(Verdict):
    payload: BaseException | None = None
    kind = "exception"


# ---------------------------------------------------------------------------
# Execution results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HistoryElement:
    state: State
    call: Call
    verdict: Verdict


@dataclass(frozen=True)
class RunResult:
    """Outcome of ``run_commands()``.

    ``history`` is chronological and holds only attempted steps. ``state`` is the
    last successfully computed model state. ``result`` is ``Ok()`` when every
    step succeeded, else the first failure verdict.
    """

    history: Sequence[HistoryElement] = field(default_factory=tuple)
    state: State = None
    result: Verdict = field(default_factory=Ok)

    @property
    def ok(self) -> bool:
        return self.result.ok

    def command_names(self) -> list[tuple[str, str, int]]:
        return [(h.call.module, h.call.name, h.call.arity) for h in self.history]
