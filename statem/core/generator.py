"""Command-sequence generation (phase 1).

``gen_commands(registry, size)`` builds a Hypothesis strategy for sequences of
exactly ``size`` entries:

1. ``size == 0`` yields ``[]`` without drawing anything.
2. In symbolic state ``s`` every registered command contributes a candidate
   call built from ``args(s)``.
3. One candidate is selected: weighted by ``registry.weights(s)`` when the model
   has a weight function, uniformly otherwise.
4. The selection is filtered by the command's precondition in ``s``. Retrying
   and giving up are Hypothesis' business (``GenerationExhausted``).
5. The accepted call gets ``Var(step)``; ``next(s, args, Var(step))`` is the
   state for the following step.

``commands(registry, settings)`` wraps this in a size-parameterised driver and the
sequence-level ``is_valid`` filter.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import hypothesis.strategies as st
from hypothesis.strategies import SearchStrategy

from .registry import Registry
from .strategies import args_strategy, frequency, oneof, sized, such_that
from .types import Call, Command, Entry, State, Step, Var

_log = logging.getLogger(__name__)

DEFAULT_MIN_COMMANDS = 0
DEFAULT_MAX_COMMANDS = 20


def _candidate(registry: Registry, command: Command, state: State) -> SearchStrategy[Call]:
    name = command.name
    return args_strategy(command.args(state)).map(lambda args: registry.call(name, args))


def candidate_calls(registry: Registry, state: State) -> SearchStrategy[Call]:
    """Weighted or uniform choice among all commands, before preconditions."""
    if len(registry) == 0:
        raise ValueError("registry has no commands")
    table = registry.weights(state)
    if table is None:
        return oneof([_candidate(registry, cmd, state) for cmd in registry])
    return frequency(
        [(w, _candidate(registry, registry[name], state)) for name, w in table.items()]
    )


def next_call(registry: Registry, state: State) -> SearchStrategy[Call]:
    """A call whose precondition holds in ``state`` (rejection sampling)."""
    return such_that(
        candidate_calls(registry, state),
        lambda call: registry.check_precondition(state, call),
    )


@st.composite
def _sequence(draw, registry: Registry, size: int) -> list[Entry]:
    state = registry.initial_state()
    entries: list[Entry] = []
    for step in range(1, size + 1):
        call = draw(next_call(registry, state))
        var = Var(step)
        entries.append(Entry(state=state, step=Step(var=var, call=call)))
        _log.debug("generated %r = %r", var, call)
        state = registry.next_state(state, call, var)
    return entries


def gen_commands(registry: Registry, size: int) -> SearchStrategy[list[Entry]]:
    if isinstance(size, bool) or not isinstance(size, int) or size < 0:
        raise ValueError(f"size must be a non-negative int, got {size!r}")
    if size == 0:
        return st.just([])
    return _sequence(registry, size)


def is_valid(registry: Registry, commands: Sequence[Entry]) -> bool:
    """Sequence-level validity hook.

    Per-step preconditions already hold by construction, so every sequence is
    accepted. Models needing a global constraint filter ``commands()`` further.
    """
    return True


def commands(registry: Registry, settings: Any = None) -> SearchStrategy[list[Entry]]:
    """Strategy of command sequences for ``registry``.

    Sequence length is drawn from ``[settings.min_commands, settings.max_commands]``;
    any object carrying those two attributes works. Without ``settings`` the
    bounds are ``DEFAULT_MIN_COMMANDS`` and ``DEFAULT_MAX_COMMANDS``.
    """
    if settings is None:
        lo, hi = DEFAULT_MIN_COMMANDS, DEFAULT_MAX_COMMANDS
    else:
        lo, hi = settings.min_commands, settings.max_commands
    gen = sized(lambda size: gen_commands(registry, size), min_size=lo, max_size=hi)
    return gen.filter(lambda cmds: is_valid(registry, cmds))


def command_names(commands: Sequence[Entry]) -> list[tuple[str, str, int]]:
    """``(module, name, arity)`` per entry, in order. Used for statistics."""
    return [(e.call.module, e.call.name, e.call.arity) for e in commands]
