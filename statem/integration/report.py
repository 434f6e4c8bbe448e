"""
Reporting helpers for property tests.

`format_history` renders a run for humans; `note_failure` and `record_events`
forward that information to Hypothesis (`note` shows up with the falsifying
example, `event` in the `--hypothesis-show-statistics` output). Both must be
called from inside a Hypothesis test.
"""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from hypothesis import event, note

from ..core.generator import command_names
from ..core.types import Entry, RunResult


def command_label(module: str, name: str, arity: int) -> str:
    return f"{module}.{name}/{arity}"


def aggregate(commands: Sequence[Entry]) -> Counter[str]:
    """Count commands of a generated sequence by `module.name/arity`."""
    return Counter(command_label(*t) for t in command_names(commands))


def format_history(result: RunResult) -> str:
    lines = [f"result: {result.result.kind} {result.result!r}"]
    for i, h in enumerate(result.history, start=1):
        lines.append(f"  {i:>3}. {h.call!r}")
        lines.append(f"       state:   {h.state!r}")
        lines.append(f"       verdict: {h.verdict.kind} {h.verdict!r}")
    lines.append(f"final state: {result.state!r}")
    return "\n".join(lines)


def note_failure(result: RunResult) -> None:
    if not result.ok:
        note(format_history(result))


def record_events(commands: Sequence[Entry]) -> None:
    for label in aggregate(commands):
        event(label)
    event(f"length: {len(commands)}")
