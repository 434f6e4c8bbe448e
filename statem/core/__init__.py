"""
Model-based test engine: registry, sequence generation and execution
"""

from .errors import (
    CommandSequenceFailure,
    DuplicateCommandError,
    GenerationExhausted,
    InvalidWeightError,
    RegistryError,
    StatemError,
    UnboundVariableError,
    UnknownCommandError,
)
from .types import (
    Call,
    Command,
    Entry,
    ExceptionRaised,
    HistoryElement,
    Ok,
    PostconditionViolation,
    PreconditionViolation,
    RunResult,
    Step,
    Var,
    Verdict,
    is_symbolic,
)
from .registry import Registry
from .strategies import exactly, fixed_list, frequency, oneof, sized, such_that
from .generator import command_names, commands, gen_commands, is_valid
from .executor import run_commands, run_commands_or_raise

__all__ = [
    "CommandSequenceFailure",
    "DuplicateCommandError",
    "GenerationExhausted",
    "InvalidWeightError",
    "RegistryError",
    "StatemError",
    "UnboundVariableError",
    "UnknownCommandError",
    "Call",
    "Command",
    "Entry",
    "ExceptionRaised",
    "HistoryElement",
    "Ok",
    "PostconditionViolation",
    "PreconditionViolation",
    "RunResult",
    "Step",
    "Var",
    "Verdict",
    "is_symbolic",
    "Registry",
    "exactly",
    "fixed_list",
    "frequency",
    "oneof",
    "sized",
    "such_that",
    "command_names",
    "commands",
    "gen_commands",
    "is_valid",
    "run_commands",
    "run_commands_or_raise",
]
