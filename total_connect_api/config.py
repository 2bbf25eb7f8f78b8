"""Configuration schema for the Total Connect client."""

from typing import Any

import voluptuous as vol

from .const import ProtocolGeneration

CONF_USERNAME = "username"
CONF_PASSWORD = "password"
CONF_PROTOCOL = "protocol"
CONF_DELAY_FIRST_CHECK = "delay_first_check"
CONF_DELAY_CHECK_OPERATION = "delay_check_operation"
CONF_MAX_POLL_ATTEMPTS = "max_poll_attempts"

DEFAULT_PROTOCOL = ProtocolGeneration.REST.value

_DELAY = vol.Any(None, vol.All(vol.Coerce(float), vol.Range(min=0)))

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_USERNAME): str,
        vol.Required(CONF_PASSWORD): str,
        vol.Optional(CONF_PROTOCOL, default=DEFAULT_PROTOCOL): vol.Any(
            vol.Coerce(ProtocolGeneration),
            vol.All(str, vol.Lower, vol.Coerce(ProtocolGeneration)),
        ),
        vol.Optional(CONF_DELAY_FIRST_CHECK, default=None): _DELAY,
        vol.Optional(CONF_DELAY_CHECK_OPERATION, default=None): _DELAY,
        vol.Optional(CONF_MAX_POLL_ATTEMPTS, default=None): vol.Any(
            None, vol.All(vol.Coerce(int), vol.Range(min=1))
        ),
    }
)


def validate_config(config: dict[str, Any]) -> dict[str, Any]:
    """Validate a configuration mapping, raising vol.Invalid if it is wrong."""
    return CONFIG_SCHEMA(config)
