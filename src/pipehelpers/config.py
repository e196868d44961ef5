"""Settings: tracing toggles resolved from the environment.

Resolution order (highest first): explicit overrides, process environment,
``.env`` file, field defaults. Tracing is off unless explicitly enabled so the
hot path stays a couple of attribute reads.
"""

from __future__ import annotations

from functools import cache
import os
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError

from pipehelpers.errors import ConfigurationError

_ENV_VARS: dict[str, str] = {
    "trace_steps": "PIPEHELPERS_TRACE",
    "trace_payloads": "PIPEHELPERS_TRACE_PAYLOADS",
}


class Settings(BaseModel):
    """Validated, immutable settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    #: Emit a DEBUG record for every flow step outcome.
    trace_steps: bool = False
    #: Include step results and error payloads in trace records.
    trace_payloads: bool = False


def resolve_settings(**overrides: Any) -> Settings:
    """Build ``Settings`` from ``.env``, the environment and ``overrides``.

    Raises:
        ConfigurationError: When a value fails validation.
    """
    load_dotenv(find_dotenv(usecwd=True), override=False)

    raw: dict[str, Any] = {}
    for field_name, env_var in _ENV_VARS.items():
        value = os.environ.get(env_var)
        if value is not None and value.strip() != "":
            raw[field_name] = value.strip()
    raw.update(overrides)

    try:
        return Settings(**raw)
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
        raise ConfigurationError(
            f"Invalid pipehelpers settings: {fields or exc}",
            hint="Boolean toggles accept 1/0, true/false, yes/no or on/off.",
        ) from exc


@cache
def get_settings() -> Settings:
    """Return the process-wide settings, resolved once."""
    return resolve_settings()


def reset_settings() -> None:
    """Forget cached settings so the next lookup re-reads the environment."""
    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings", "resolve_settings"]
