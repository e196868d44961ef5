"""Outcome variants threaded through pipelines.

Each variant is a frozen dataclass (or ``NamedTuple`` for pairs) so callers can
build them directly and take them apart with ``match``:

    match outcome:
        case Success(value):
            ...
        case Failure(err):
            ...

Zero-payload markers live in :class:`Marker` rather than as payload-bearing
variants holding a placeholder.
"""

from __future__ import annotations

import dataclasses
import enum
from typing import Any, Final, NamedTuple


@dataclasses.dataclass(frozen=True, slots=True)
class Success[T]:
    """A successful step, carrying its value."""

    value: T


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E]:
    """A failed step, carrying the caller's error payload untouched."""

    error: E


@dataclasses.dataclass(frozen=True, slots=True)
class Reply[R, S]:
    """A reply envelope: the reply to send and the state to keep."""

    reply: R
    state: S


@dataclasses.dataclass(frozen=True, slots=True)
class NoReply[S]:
    """Keep ``state`` without replying."""

    state: S


class _NoReplyGiven:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<no reply>"


NO_REPLY: Final = _NoReplyGiven()
_UNSET: Final = object()


@dataclasses.dataclass(frozen=True, slots=True, init=False)
class Halt[S]:
    """Stop processing with ``state``, optionally sending ``reply`` first.

    Built by arity like ``Reply``: ``Halt(state)`` or ``Halt(reply, state)``.
    Match positionally with ``case Halt(reply, state)``. A halt built without
    a reply is distinct from one whose reply is ``None``.
    """

    reply: Any
    state: S

    def __init__(
        self, *args: Any, reply: Any = NO_REPLY, state: Any = _UNSET
    ) -> None:
        if args and (reply is not NO_REPLY or state is not _UNSET):
            raise TypeError("Halt() takes positional or keyword fields, not both")
        match args:
            case ():
                pass
            case (only,):
                state = only
            case (reply, state):
                pass
            case _:
                raise TypeError(
                    f"Halt() takes state or reply and state, got {len(args)} arguments"
                )
        if state is _UNSET:
            raise TypeError("Halt() missing required field 'state'")
        object.__setattr__(self, "reply", reply)
        object.__setattr__(self, "state", state)

    @property
    def has_reply(self) -> bool:
        return self.reply is not NO_REPLY


@dataclasses.dataclass(frozen=True, slots=True)
class Continue[S]:
    """Keep going with ``state``."""

    state: S


class Pair(NamedTuple):
    """Generic two-element pairing; equal to the plain tuple ``(first, second)``."""

    first: Any
    second: Any


class Marker(enum.Enum):
    """Bare outcome markers that carry no payload."""

    OK = "ok"
    ERROR = "error"

    def __repr__(self) -> str:
        return f"{type(self).__name__}.{self.name}"


OK: Final = Marker.OK
ERROR: Final = Marker.ERROR

__all__ = [
    "ERROR",
    "NO_REPLY",
    "OK",
    "Continue",
    "Failure",
    "Halt",
    "Marker",
    "NoReply",
    "Pair",
    "Reply",
    "Success",
]
