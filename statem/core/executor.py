"""Command-sequence execution (phase 2).

``run_commands(registry, commands)`` replays a generated sequence against the
SUT, in order, threading a dynamic model state that starts at
``registry.initial_state()``. Per entry:

1. symbolic values in the arguments are replaced by earlier concrete results;
2. the precondition is re-checked on the dynamic state (SUT-dependent
   preconditions can disagree with the symbolic phase);
3. the implementation and the postcondition run inside a fault boundary;
4. on success the state is advanced via ``next``.

The first failure halts the run: later entries are neither executed nor
recorded, and ``RunResult.state`` stays at the last successfully computed state.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from .errors import CommandSequenceFailure, UnboundVariableError
from .registry import Registry
from .types import (
    Call,
    Entry,
    ExceptionRaised,
    HistoryElement,
    Ok,
    PostconditionViolation,
    PreconditionViolation,
    RunResult,
    State,
    Var,
    Verdict,
)

_log = logging.getLogger(__name__)


def bind(value: Any, env: Mapping[int, Any]) -> Any:
    """Replace every ``Var`` inside ``value`` by its result in ``env``."""
    if isinstance(value, Var):
        if value.index not in env:
            raise UnboundVariableError(value.index)
        return env[value.index]
    if isinstance(value, tuple):
        return tuple(bind(v, env) for v in value)
    if isinstance(value, list):
        return [bind(v, env) for v in value]
    if isinstance(value, dict):
        return {bind(k, env): bind(v, env) for k, v in value.items()}
    if isinstance(value, frozenset):
        return frozenset(bind(v, env) for v in value)
    if isinstance(value, set):
        return {bind(v, env) for v in value}
    return value


def execute_call(registry: Registry, state: State, call: Call) -> Verdict:
    """Run one bound call and classify its outcome."""
    if not registry.check_precondition(state, call):
        return PreconditionViolation(state)
    impl = registry[call.name].impl
    try:
        result = impl(*call.args)
        passed = registry.check_postcondition(state, call, result)
    except (Exception, SystemExit) as exc:
        return ExceptionRaised(exc)
    if not passed:
        return PostconditionViolation(result)
    return Ok(result)


def run_commands(registry: Registry, commands: Sequence[Entry]) -> RunResult:
    state = registry.initial_state()
    env: dict[int, Any] = {}
    history: list[HistoryElement] = []
    overall: Verdict = Ok()

    for entry in commands:
        if not overall.ok:
            break
        call = Call(name=entry.call.name, module=entry.call.module, args=bind(entry.call.args, env))
        verdict = execute_call(registry, state, call)
        history.append(HistoryElement(state=state, call=call, verdict=verdict))
        if not verdict.ok:
            overall = verdict
            _log.info(
                "step %d %r failed: %s %r", len(history), call, verdict.kind, verdict
            )
            continue
        env[entry.var.index] = verdict.value
        state = registry.next_state(state, call, verdict.value)
        _log.debug("step %d %r -> %r", len(history), call, verdict.value)

    return RunResult(history=tuple(history), state=state, result=overall)


def run_commands_or_raise(registry: Registry, commands: Sequence[Entry]) -> RunResult:
    """Like ``run_commands()`` but raises ``CommandSequenceFailure`` on failure."""
    result = run_commands(registry, commands)
    if not result.ok:
        raise CommandSequenceFailure(result)
    return result
