"""Callback shape checks shared by the tap/then helpers and the flow.

Callbacks may take no positional argument (the payload is dropped) or exactly
one (the payload is passed). The shape is read from the signature once per
call, before any branch is taken, so a malformed callback fails even when the
outcome would have bypassed it.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Literal

from pipehelpers.errors import InvalidCallbackError

log = logging.getLogger(__name__)

Arity = Literal[0, 1]

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def callback_arity(fn: Any, *, helper: str) -> Arity:
    """Return 0 or 1 for ``fn``, raising ``InvalidCallbackError`` otherwise."""
    if not callable(fn):
        raise InvalidCallbackError(
            f"{helper} callback must be callable, got {type(fn).__name__}",
            helper=helper,
        )

    try:
        sig = inspect.signature(fn)
    except (ValueError, TypeError):
        # Some builtins expose no signature; assume they take the payload.
        log.debug(
            "%s: signature of %r not introspectable, passing payload", helper, fn
        )
        return 1

    params = list(sig.parameters.values())
    required = [
        p for p in params if p.kind in _POSITIONAL and p.default is p.empty
    ]
    required_kw = [
        p
        for p in params
        if p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is p.empty
    ]
    if len(required) > 1 or required_kw:
        raise InvalidCallbackError(
            f"{helper} function arity can only be 0 or 1, got {sig}",
            helper=helper,
            hint="Accept the payload as a single argument, or take none.",
        )

    accepts_one = bool(required) or any(
        p.kind in _POSITIONAL or p.kind is inspect.Parameter.VAR_POSITIONAL
        for p in params
    )
    return 1 if accepts_one else 0


def invoke(fn: Any, arity: Arity, payload: Any) -> Any:
    """Call ``fn`` with or without ``payload`` according to ``arity``."""
    if arity == 0:
        return fn()
    return fn(payload)
