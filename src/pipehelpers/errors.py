"""Exception hierarchy for pipehelpers.

Only contract violations raise. Expected failures travel as outcome values.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any


class PipeHelpersError(Exception):
    """Base exception for all pipehelpers errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(PipeHelpersError):
    """Settings validation or resolution failed."""


class ContractError(PipeHelpersError):
    """A caller broke a helper contract (a bug in the calling code)."""


class InvalidCallbackError(ContractError, TypeError):
    """A tap/then callback does not take zero or one positional argument."""

    def __init__(
        self, message: str, *, helper: str, hint: str | None = None
    ) -> None:
        super().__init__(message, hint=hint)
        self.helper = helper


class DuplicateStepError(ContractError, ValueError):
    """A step name was reused within one flow run."""

    def __init__(self, name: Hashable) -> None:
        super().__init__(
            f"name {name!r} is already used in flow",
            hint="Step names must be unique within one run; pick a new name "
            "or use tap_ok() for steps whose result is not recorded.",
        )
        self.name = name


class UnwrapError(ContractError, ValueError):
    """``unwrap()`` was called on something other than a ``Success``."""

    def __init__(self, outcome: Any) -> None:
        super().__init__(
            f"cannot unwrap non-success outcome: {outcome!r}",
            hint="Branch with then_ok() or match on Failure before unwrapping.",
        )
        self.outcome = outcome


class UnpairError(ContractError, TypeError):
    """``unpair()`` was called on something other than a two-element pair."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"expected a two-element pair, got {value!r}")
        self.value = value
