"""Small helpers for wrapping, unwrapping and branching on outcome values.

Every helper is a plain function taking the piped value first, so calls read
left to right when nested or fed through :func:`pipe`:

    pipe(
        fetch_user(user_id),
        lambda r: tap_ok(r, audit),
        lambda r: then_ok(r, lambda user: user.email),
    )
"""

from __future__ import annotations

from collections.abc import Callable
import dataclasses
from functools import reduce
from typing import Any

from pipehelpers._callbacks import callback_arity, invoke
from pipehelpers.errors import InvalidCallbackError, UnpairError, UnwrapError
from pipehelpers.outcomes import (
    NO_REPLY,
    OK,
    Continue,
    Failure,
    Halt,
    NoReply,
    Pair,
    Reply,
    Success,
)

# --- Wrapping ---


def ok[T](value: T) -> Success[T]:
    """Wrap ``value`` as a success.

    Example:
        >>> ok("socket")
        Success(value='socket')
    """
    return Success(value)


def error[E](value: E) -> Failure[E]:
    """Wrap ``value`` as a failure."""
    return Failure(value)


def noreply[S](state: S) -> NoReply[S]:
    """Wrap ``state`` into a no-reply envelope."""
    return NoReply(state)


def reply[R, S](state: S, reply: R) -> Reply[R, S]:
    """Wrap ``state`` into a reply envelope sending ``reply``.

    The state comes first so it can be the piped value.

    Example:
        >>> reply("gen server state", "reply")
        Reply(reply='reply', state='gen server state')
    """
    return Reply(reply, state)


def reply_to[R, S](reply: R, state: S) -> Reply[R, S]:
    """Same as :func:`reply` with the reply as the piped value."""
    return Reply(reply, state)


def halt[S](state: S, reply: Any = NO_REPLY) -> Halt[S]:
    """Wrap ``state`` into a halt, with an optional reply.

    The state comes first so it can be the piped value.

    Example:
        >>> halt("state", "bye")
        Halt(reply='bye', state='state')
    """
    return Halt(reply, state)


def continue_[S](state: S) -> Continue[S]:
    """Wrap ``state`` into a continue signal."""
    return Continue(state)


def pair(value: Any, tag: Any) -> Pair:
    """Pair ``value`` behind ``tag``.

    Example:
        >>> pair(1, 2)
        Pair(first=2, second=1)
    """
    return Pair(tag, value)


def rpair(value: Any, tag: Any) -> Pair:
    """Pair ``value`` ahead of ``tag``.

    Example:
        >>> rpair(1, 2)
        Pair(first=1, second=2)
    """
    return Pair(value, tag)


# --- Unwrapping ---


def unpair(value: Any) -> Any:
    """Return the second element of a two-element pair.

    Any two-element sequence is accepted, including plain tuples.

    Example:
        >>> unpair(("ok", 1))
        1
    """
    match value:
        case (_, second):
            return second
        case _:
            raise UnpairError(value)


def unwrap[T](outcome: Success[T] | Any) -> T:
    """Return the value of a ``Success`` or raise ``UnwrapError``."""
    match outcome:
        case Success(value):
            return value
        case _:
            raise UnwrapError(outcome)


# --- Branching ---


def tap_ok[O](outcome: O, fn: Callable[..., Any]) -> O:
    """Run ``fn`` for its side effect when ``outcome`` is a success.

    ``fn`` may take the success value or nothing. The outcome is returned as
    is, whatever ``fn`` returns.

    Example:
        >>> tap_ok(ok("somedata"), lambda: "only executed on success")
        Success(value='somedata')
    """
    _branch_ok(outcome, fn, "tap_ok")
    return outcome


def tap_on[O](outcome: O, value: Any, fn: Callable[..., Any]) -> O:
    """Run ``fn`` for its side effect when ``outcome`` matches ``value`` exactly.

    Example:
        >>> tap_on(True, True, lambda: "only executed when True")
        True
    """
    _branch_on(outcome, value, fn, "tap_on")
    return outcome


def then_ok(outcome: Any, fn: Callable[..., Any]) -> Any:
    """Return ``fn``'s result when ``outcome`` is a success, else ``outcome``.

    A ``Success`` passes its value to a one-argument ``fn``. The bare ``OK``
    marker has no payload and therefore requires a zero-argument ``fn``.
    Anything else short-circuits and is returned unchanged.

    Example:
        >>> then_ok(ok("somedata"), lambda val: val.upper())
        'SOMEDATA'
        >>> then_ok(error("boom"), lambda val: val.upper())
        Failure(error='boom')
    """
    return _branch_ok(outcome, fn, "then_ok")


def then_on(outcome: Any, value: Any, fn: Callable[..., Any]) -> Any:
    """Return ``fn``'s result when ``outcome`` matches ``value``, else ``outcome``.

    The match is exact: ``1``, ``1.0`` and ``True`` are different values.

    A one-argument ``fn`` receives the matched value.
    """
    return _branch_on(outcome, value, fn, "then_on")


def _branch_ok(outcome: Any, fn: Callable[..., Any], helper: str) -> Any:
    arity = callback_arity(fn, helper=helper)
    match outcome:
        case Success(value):
            return invoke(fn, arity, value)
        case _ if outcome is OK:
            if arity != 0:
                raise InvalidCallbackError(
                    f"{helper} on a bare OK takes a zero-argument function",
                    helper=helper,
                    hint="There is no payload to pass; drop the parameter.",
                )
            return fn()
        case _:
            return outcome


def _branch_on(outcome: Any, value: Any, fn: Callable[..., Any], helper: str) -> Any:
    arity = callback_arity(fn, helper=helper)
    if _matches(outcome, value):
        return invoke(fn, arity, outcome)
    return outcome


def _matches(left: Any, right: Any) -> bool:
    """Exact match: equal values of the same type, all the way down.

    ``1``, ``1.0`` and ``True`` compare equal in Python but never match here.
    """
    if type(left) is not type(right):
        return False
    if isinstance(left, (tuple, list)):
        return len(left) == len(right) and all(map(_matches, left, right))
    if isinstance(left, dict):
        return left.keys() == right.keys() and all(
            _matches(v, right[k]) for k, v in left.items()
        )
    if dataclasses.is_dataclass(left) and not isinstance(left, type):
        return all(
            _matches(getattr(left, f.name), getattr(right, f.name))
            for f in dataclasses.fields(left)
        )
    return left == right


def then_if(value: Any, condition: bool, fn: Callable[..., Any]) -> Any:
    """Return ``fn``'s result when ``condition`` holds, else ``value``.

    A one-argument ``fn`` receives ``value``.
    """
    arity = callback_arity(fn, helper="then_if")
    if condition:
        return invoke(fn, arity, value)
    return value


def pipe(value: Any, *funcs: Callable[[Any], Any]) -> Any:
    """Thread ``value`` through ``funcs`` from left to right.

    Example:
        >>> pipe(1, lambda x: x + 1, ok)
        Success(value=2)
    """
    return reduce(lambda acc, fn: fn(acc), funcs, value)


__all__ = [
    "continue_",
    "error",
    "halt",
    "noreply",
    "ok",
    "pair",
    "pipe",
    "reply",
    "reply_to",
    "rpair",
    "tap_ok",
    "tap_on",
    "then_if",
    "then_ok",
    "then_on",
    "unpair",
    "unwrap",
]
