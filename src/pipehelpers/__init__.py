"""pipehelpers: small helpers for structuring result pipelines.

Public API:
    - ok(), error(), reply(), noreply(), halt(), continue_(): wrap outcomes
    - pair(), rpair(), unpair(), unwrap(): build and take apart values
    - tap_ok(), tap_on(), then_ok(), then_on(), then_if(): branch on outcomes
    - flow: accumulate named step results, stopping at the first failure
"""

from __future__ import annotations

import logging

from pipehelpers import flow
from pipehelpers.errors import (
    ConfigurationError,
    ContractError,
    DuplicateStepError,
    InvalidCallbackError,
    PipeHelpersError,
    UnpairError,
    UnwrapError,
)
from pipehelpers.flow import Flow, StepFailure
from pipehelpers.helpers import (
    continue_,
    error,
    halt,
    noreply,
    ok,
    pair,
    pipe,
    reply,
    reply_to,
    rpair,
    tap_ok,
    tap_on,
    then_if,
    then_ok,
    then_on,
    unpair,
    unwrap,
)
from pipehelpers.outcomes import (
    ERROR,
    OK,
    Continue,
    Failure,
    Halt,
    Marker,
    NoReply,
    Pair,
    Reply,
    Success,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("pipehelpers")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("pipehelpers").addHandler(logging.NullHandler())

__all__ = [
    "ERROR",
    "OK",
    "ConfigurationError",
    "Continue",
    "ContractError",
    "DuplicateStepError",
    "Failure",
    "Flow",
    "Halt",
    "InvalidCallbackError",
    "Marker",
    "NoReply",
    "Pair",
    "PipeHelpersError",
    "Reply",
    "StepFailure",
    "Success",
    "UnpairError",
    "UnwrapError",
    "continue_",
    "error",
    "flow",
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
