"""Accumulating flow: run named steps against a growing context.

Each step receives the context built so far and returns ``Success(result)``
to bind ``result`` under its name, or anything else to stop the flow:

    outcome = flow.then_ok(
        flow.start("user", lambda: load_user(user_id)),
        "orders",
        lambda ctx: load_orders(ctx["user"]),
    )
    match outcome:
        case Success(ctx):
            ...
        case StepFailure(ctx, name, error):
            ...

Once a step fails every later ``then_ok``/``tap_ok`` returns the same
``StepFailure`` without running its step. ``map_ok`` is the exit that turns the
final context into an arbitrary value.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping
import dataclasses
import logging
from types import MappingProxyType
from typing import Any, overload

from pipehelpers._callbacks import callback_arity, invoke
from pipehelpers.config import get_settings
from pipehelpers.errors import DuplicateStepError
from pipehelpers.outcomes import Failure, Success

log = logging.getLogger(__name__)

Context = Mapping[Hashable, Any]
Step = Callable[..., Any]


@dataclasses.dataclass(frozen=True, slots=True)
class StepFailure[E]:
    """A flow stopped at step ``name``, which returned ``error``.

    ``context`` holds what the earlier steps produced; the failing step is not
    bound in it.
    """

    context: Context
    name: Hashable | None
    error: E


type FlowOutcome = Success[Context] | StepFailure[Any]

_EMPTY: Context = MappingProxyType({})


def _freeze(mapping: Mapping[Hashable, Any]) -> Context:
    return MappingProxyType(dict(mapping))


def new() -> Success[Context]:
    """Return an empty flow context, ready for ``then_ok``."""
    return Success(_EMPTY)


@overload
def start(name: Hashable | None, step: Step, /) -> FlowOutcome: ...
@overload
def start(
    name: Hashable | None, seed: Mapping[Hashable, Any], step: Step, /
) -> FlowOutcome: ...


def start(name: Hashable | None, *args: Any) -> FlowOutcome:
    """Run a first step named ``name``, optionally against a seed context.

    ``start(name, step)`` starts from an empty context and
    ``start(name, seed, step)`` from a copy of ``seed``.
    """
    if len(args) == 1:
        seed, step = _EMPTY, args[0]
    elif len(args) == 2:
        seed, step = args
    else:
        raise TypeError(
            f"start() takes a step and an optional seed context, got {len(args)} "
            "positional arguments after the name"
        )
    return then_ok(Success(_freeze(seed)), name, step)


def then_ok(outcome: Any, name: Hashable | None, step: Step) -> Any:
    """Run ``step`` and bind its result under ``name``.

    Anything other than ``Success(context)`` is returned unchanged and
    ``step`` is not called. With ``name=None`` the step runs for its side
    effect and the context is passed on unchanged.

    Raises:
        DuplicateStepError: ``name`` is already bound in the context.
        InvalidCallbackError: ``step`` takes more than one argument.
    """
    arity = callback_arity(step, helper="then_ok")

    match outcome:
        case Success(context):
            pass
        case _:
            if _tracing():
                log.debug("flow: skipping step %r after earlier failure", name)
            return outcome

    if not isinstance(context, MappingProxyType):
        context = _freeze(context)

    if name is not None and name in context:
        raise DuplicateStepError(name)

    match invoke(step, arity, context):
        case Success(value):
            if _tracing():
                _trace_ok(name, value)
            if name is None:
                return Success(context)
            return Success(_freeze({**context, name: value}))
        case Failure(err):
            return _fail(context, name, err)
        case other:
            return _fail(context, name, other)


def tap_ok[O](outcome: O, step: Step) -> O:
    """Run ``step`` for its side effect and return ``outcome`` as is."""
    then_ok(outcome, None, step)
    return outcome


def map_ok(outcome: Any, fn: Step) -> Any:
    """Return ``fn(context)`` for a successful flow, else ``outcome``.

    The result is returned raw, not wrapped in ``Success``.
    """
    arity = callback_arity(fn, helper="map_ok")
    match outcome:
        case Success(context):
            return invoke(fn, arity, context)
        case _:
            return outcome


def _fail(context: Context, name: Hashable | None, err: Any) -> StepFailure[Any]:
    if _tracing():
        if get_settings().trace_payloads:
            log.debug("flow: step %r failed with %r", name, err)
        else:
            log.debug("flow: step %r failed", name)
    return StepFailure(context, name, err)


def _trace_ok(name: Hashable | None, value: Any) -> None:
    if get_settings().trace_payloads:
        log.debug("flow: step %r ok -> %r", name, value)
    else:
        log.debug("flow: step %r ok", name)


def _tracing() -> bool:
    return log.isEnabledFor(logging.DEBUG) and get_settings().trace_steps


@dataclasses.dataclass(frozen=True, slots=True)
class Flow:
    """Fluent wrapper over the flow functions.

    Example:
        >>> chain = Flow.start("a", lambda: Success(1))
        >>> chain.then("b", lambda ctx: Success(ctx["a"] + 1)).map(dict)
        {'a': 1, 'b': 2}
    """

    outcome: Any = dataclasses.field(default_factory=new)

    @classmethod
    def start(
        cls,
        name: Hashable | None,
        step: Step,
        seed: Mapping[Hashable, Any] | None = None,
    ) -> Flow:
        return cls(start(name, seed if seed is not None else _EMPTY, step))

    def then(self, name: Hashable | None, step: Step) -> Flow:
        return Flow(then_ok(self.outcome, name, step))

    def tap(self, step: Step) -> Flow:
        return Flow(tap_ok(self.outcome, step))

    def map(self, fn: Step) -> Any:
        return map_ok(self.outcome, fn)

    @property
    def ok(self) -> bool:
        return isinstance(self.outcome, Success)


__all__ = [
    "Context",
    "Flow",
    "FlowOutcome",
    "StepFailure",
    "map_ok",
    "new",
    "start",
    "tap_ok",
    "then_ok",
]
