"""Command registry: the declarative contract of a model.

A ``Registry`` holds the model's initial state, an optional weight function and
one ``Command`` descriptor per SUT command. Registration happens once, before
any generation or execution; afterwards the registry is shared read-only.

Two builder forms replace hand-written descriptors::

    reg = Registry(lambda: {}, module="cache")
    reg.define("find", args=lambda s: [keys()], impl=cache.find, post=find_post)

    @reg.defcommand("flush", args=lambda s: [])
    def flush():
        return cache.flush()
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, Mapping

from .errors import DuplicateCommandError, RegistryError, UnknownCommandError
from .strategies import check_weight
from .types import ArgsFn, Call, Command, NextFn, PostFn, PreFn, State, _always_true, _same_state

_log = logging.getLogger(__name__)

WeightFn = Callable[[State], Mapping[str, int]]


class Registry:
    def __init__(
        self,
        initial_state: Callable[[], State],
        *,
        weight: WeightFn | None = None,
        module: str = "model",
    ) -> None:
        if not callable(initial_state):
            raise RegistryError("initial_state must be a zero-argument callable")
        if weight is not None and not callable(weight):
            raise RegistryError("weight must be callable or None")
        if not isinstance(module, str) or not module.strip():
            raise RegistryError("module must be a non-empty string")
        self._initial_state = initial_state
        self._weight = weight
        self.module = module.strip()
        self._commands: dict[str, Command] = {}

    # -- registration --------------------------------------------------------

    def register(self, command: Command) -> Command:
        if not isinstance(command, Command):
            raise RegistryError(f"expected Command, got {type(command).__name__}")
        name = command.name
        if not isinstance(name, str) or not name.strip():
            raise RegistryError("command name must be a non-empty string")
        if name in self._commands:
            raise DuplicateCommandError(name)
        if not callable(command.args):
            raise RegistryError(f"{name}: argument generator is required")
        if not callable(command.impl):
            raise RegistryError(f"{name}: implementation is required")
        for attr in ("pre", "next", "post"):
            if not callable(getattr(command, attr)):
                raise RegistryError(f"{name}: {attr} must be callable")
        self._commands[name] = command
        _log.debug("registered command %s.%s", self.module, name)
        return command

    def define(
        self,
        name: str,
        *,
        args: ArgsFn,
        impl: Callable[..., Any],
        pre: PreFn | None = None,
        next: NextFn | None = None,
        post: PostFn | None = None,
    ) -> Registry:
        self.register(
            Command(
                name=name,
                args=args,
                impl=impl,
                pre=pre or _always_true,
                next=next or _same_state,
                post=post or _always_true,
            )
        )
        return self

    def defcommand(
        self,
        name: str | None = None,
        *,
        args: ArgsFn,
        pre: PreFn | None = None,
        next: NextFn | None = None,
        post: PostFn | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator: register the decorated function as the command's ``impl``."""

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            self.define(name or fn.__name__, args=args, impl=fn, pre=pre, next=next, post=post)
            return fn

        return decorator

    # -- lookup --------------------------------------------------------------

    def __getitem__(self, name: str) -> Command:
        try:
            return self._commands[name]
        except KeyError:
            raise UnknownCommandError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)

    def names(self) -> list[str]:
        return list(self._commands)

    # -- model contract ------------------------------------------------------

    def initial_state(self) -> State:
        return self._initial_state()

    @property
    def weighted(self) -> bool:
        return self._weight is not None

    def weights(self, state: State) -> dict[str, int] | None:
        """Weight table for ``state``; ``None`` means uniform selection."""
        if self._weight is None:
            return None
        table = self._weight(state)
        if not isinstance(table, Mapping):
            raise RegistryError(f"weight must return a mapping, got {type(table).__name__}")
        out: dict[str, int] = {}
        for name, w in table.items():
            if name not in self._commands:
                raise UnknownCommandError(name)
            out[name] = check_weight(name, w)
        if not out:
            raise RegistryError("weight returned no commands")
        return out

    def call(self, name: str, args: tuple) -> Call:
        if name not in self._commands:
            raise UnknownCommandError(name)
        return Call(name=name, module=self.module, args=tuple(args))

    def check_precondition(self, state: State, call: Call) -> bool:
        return bool(self[call.name].pre(state, call.args))

    def next_state(self, state: State, call: Call, result: Any) -> State:
        return self[call.name].next(state, call.args, result)

    def check_postcondition(self, state: State, call: Call, result: Any) -> bool:
        return bool(self[call.name].post(state, call.args, result))

    def __repr__(self) -> str:
        return f"Registry(module={self.module!r}, commands={self.names()!r})"
