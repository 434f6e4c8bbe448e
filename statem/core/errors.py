"""Exception types for the statem engine.

Configuration problems are raised eagerly by the registry. Run failures
(precondition, postcondition, SUT exceptions) are *recorded* in a ``RunResult``
and only raised by ``run_commands_or_raise()`` for callers that prefer
exceptions over result inspection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hypothesis.errors import Unsatisfiable

if TYPE_CHECKING:  # pragma: no cover
    from .types import RunResult


# Hypothesis raises this once filtered generation cannot satisfy preconditions.
GenerationExhausted = Unsatisfiable


class StatemError(Exception):
    """Base class for engine errors."""


class RegistryError(StatemError):
    """Raised when a command descriptor or the registry itself is malformed."""


class DuplicateCommandError(RegistryError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"duplicate command: {name}")


class UnknownCommandError(RegistryError, KeyError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown command: {name}")

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidWeightError(RegistryError):
    """Raised when a weight table has a non-positive or non-integer weight."""


class UnboundVariableError(StatemError):
    """Raised when a call refers to a symbolic value that has no result."""

    def __init__(self, index: int) -> None:
        self.index = int(index)
        super().__init__(f"unbound symbolic value: var{index}")


class CommandSequenceFailure(AssertionError):
    """Raised by ``run_commands_or_raise()`` when a run does not succeed."""

    def __init__(self, result: RunResult) -> None:
        self.result = result
        verdict = result.result
        step = len(result.history)
        super().__init__(f"command sequence failed at step {step}: {verdict.kind}: {verdict!r}")
