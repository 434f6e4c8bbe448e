"""`statem`: model-based testing of stateful systems on top of Hypothesis.

A model is a `Registry`: an initial state plus, per command, an argument
generator, a precondition, a state transition and a postcondition. Testing
happens in two phases:

- `commands(registry, settings)` is a Hypothesis strategy of command sequences
  that are valid against the evolving *symbolic* model state (results are `Var`s);
- `run_commands(registry, cmds)` executes a sequence against the system under
  test, tracking the *dynamic* model state, and returns a `RunResult`.

Typical property::

    @given(cmds=commands(registry, settings_from_env()))
    def test_cache(cmds):
        cache.start()
        result = run_commands(registry, cmds)
        cache.stop()
        note_failure(result)
        assert result.ok
"""

from .core import (
    Call,
    Command,
    CommandSequenceFailure,
    DuplicateCommandError,
    Entry,
    ExceptionRaised,
    GenerationExhausted,
    HistoryElement,
    InvalidWeightError,
    Ok,
    PostconditionViolation,
    PreconditionViolation,
    Registry,
    RegistryError,
    RunResult,
    StatemError,
    Step,
    UnboundVariableError,
    UnknownCommandError,
    Var,
    Verdict,
    command_names,
    commands,
    exactly,
    fixed_list,
    frequency,
    gen_commands,
    is_symbolic,
    is_valid,
    oneof,
    run_commands,
    run_commands_or_raise,
    sized,
    such_that,
)
from .integration import (
    SettingsError,
    StatemSettings,
    configure_logging,
    load_settings,
    settings_from_env,
)
from .integration.report import aggregate, format_history, note_failure, record_events

__all__ = [
    "Registry",
    "Command",
    "Call",
    "Var",
    "Step",
    "Entry",
    "is_symbolic",
    "commands",
    "gen_commands",
    "is_valid",
    "command_names",
    "run_commands",
    "run_commands_or_raise",
    "RunResult",
    "HistoryElement",
    "Verdict",
    "Ok",
    "PreconditionViolation",
    "PostconditionViolation",
    "ExceptionRaised",
    "exactly",
    "fixed_list",
    "frequency",
    "oneof",
    "sized",
    "such_that",
    "StatemError",
    "RegistryError",
    "DuplicateCommandError",
    "UnknownCommandError",
    "InvalidWeightError",
    "UnboundVariableError",
    "CommandSequenceFailure",
    "GenerationExhausted",
    "SettingsError",
    "StatemSettings",
    "configure_logging",
    "load_settings",
    "settings_from_env",
    "aggregate",
    "format_history",
    "note_failure",
    "record_events",
]
