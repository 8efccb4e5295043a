"""Configuration schemas for convergences."""
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from .const import CONF_INTERVAL, CONF_TIMEOUT, DEFAULT_TIMEOUT, POLL_INTERVAL
from .errors import ConvergenceConfigError

_LOGGER = logging.getLogger(__name__)


def _whole_number(value):
    if isinstance(value, bool):
        raise vol.Invalid("expected an integer, got a boolean")
    if isinstance(value, float) and not value.is_integer():
        raise vol.Invalid(f"expected an integer, got {value}")
    return value


TIMEOUT_SCHEMA = vol.All(_whole_number, vol.Coerce(int), vol.Range(min=0))

INTERVAL_SCHEMA = vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_TIMEOUT, default=DEFAULT_TIMEOUT): TIMEOUT_SCHEMA,
        vol.Optional(CONF_INTERVAL, default=POLL_INTERVAL): INTERVAL_SCHEMA,
    }
)


def validate_timeout(value: Any) -> int:
    """Return ``value`` as a timeout in milliseconds, or raise ConvergenceConfigError."""
    try:
        return TIMEOUT_SCHEMA(value)
    except vol.Invalid as ex:
        raise ConvergenceConfigError(f"invalid timeout {value!r}: {ex}") from ex


def validate_interval(value: Any) -> float:
    try:
        return INTERVAL_SCHEMA(value)
    except vol.Invalid as ex:
        raise ConvergenceConfigError(f"invalid interval {value!r}: {ex}") from ex


def load_config(config: dict[str, Any] | None) -> dict[str, Any]:
    """Validate a configuration mapping and fill in defaults."""
    config = config or {}
    try:
        validated = CONFIG_SCHEMA(dict(config))
    except vol.Invalid as ex:
        raise ConvergenceConfigError(f"invalid convergence config: {ex}") from ex
    _LOGGER.debug("Loaded convergence config: %s", validated)
    return validated
