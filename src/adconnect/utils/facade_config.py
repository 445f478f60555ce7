#!/usr/bin/env python
"""Configuration for the request/response façade.

All tunables live in one frozen attrs class. Values are validated at
construction, so a bad timeout or log level fails fast instead of at the
first request.
"""

import os
from typing import Any

import attr

from adconnect.utils.config import (
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_PROBE_HOST,
    DEFAULT_PROBE_PORT,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    LOG_LEVELS,
)


def _positive(_instance: Any, attribute: attr.Attribute, value: float) -> None:
    if value <= 0:
        raise ValueError(f"{attribute.name} must be positive, got {value!r}")


def _valid_port(_instance: Any, attribute: attr.Attribute, value: int) -> None:
    if not 0 < value < 65536:
        raise ValueError(f"{attribute.name} must be a TCP/UDP port, got {value!r}")


@attr.define(slots=True, frozen=True)
class FacadeConfig:
    """Settings shared by the request builder, transport and reachability probe.

    Examples:
        >>> config = FacadeConfig()
        >>> config.timeout_seconds
        60.0
        >>> config = FacadeConfig.create(timeout_seconds=15)
        >>> config = FacadeConfig.from_env()
    """

    timeout_seconds: float = attr.field(
        default=DEFAULT_TIMEOUT_SECONDS,
        converter=float,
        validator=_positive,
    )
    follow_redirects: bool = attr.field(default=True, validator=attr.validators.instance_of(bool))
    max_connections: int = attr.field(
        default=DEFAULT_MAX_CONNECTIONS,
        validator=[attr.validators.instance_of(int), _positive],
    )
    user_agent: str = attr.field(default=DEFAULT_USER_AGENT, validator=attr.validators.instance_of(str))
    probe_host: str = attr.field(default=DEFAULT_PROBE_HOST, validator=attr.validators.instance_of(str))
    probe_port: int = attr.field(
        default=DEFAULT_PROBE_PORT,
        validator=[attr.validators.instance_of(int), _valid_port],
    )
    log_level: str = attr.field(
        default="ERROR",
        converter=str.upper,
        validator=attr.validators.in_(LOG_LEVELS),
    )

    @classmethod
    def create(cls, **kwargs: Any) -> "FacadeConfig":
        """Create a configuration with the given overrides."""
        return cls(**kwargs)

    @classmethod
    def from_env(cls, **overrides: Any) -> "FacadeConfig":
        """Create configuration from environment variables.

        Environment variables:
        - ADC_TIMEOUT_SECONDS: Request timeout in seconds (default: 60)
        - ADC_FOLLOW_REDIRECTS: Follow redirects (default: true)
        - ADC_MAX_CONNECTIONS: HTTP client connection limit (default: 10)
        - ADC_USER_AGENT: User-Agent header value
        - ADC_PROBE_HOST: Address used for the default-route probe
        - ADC_PROBE_PORT: Port used for the default-route probe (default: 53)
        - ADC_LOG_LEVEL: Log level (default: ERROR)

        Args:
            **overrides: Override any environment variable values

        Returns:
            FacadeConfig instance configured from environment
        """
        config_dict: dict[str, Any] = {
            "timeout_seconds": os.getenv("ADC_TIMEOUT_SECONDS"),
            "follow_redirects": _parse_bool_env("ADC_FOLLOW_REDIRECTS"),
            "max_connections": _parse_int_env("ADC_MAX_CONNECTIONS"),
            "user_agent": os.getenv("ADC_USER_AGENT"),
            "probe_host": os.getenv("ADC_PROBE_HOST"),
            "probe_port": _parse_int_env("ADC_PROBE_PORT"),
            "log_level": os.getenv("ADC_LOG_LEVEL"),
        }

        config_dict.update(overrides)

        # Unset variables fall back to the class defaults
        config_dict = {k: v for k, v in config_dict.items() if v is not None}

        return cls(**config_dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return attr.asdict(self)

    def with_overrides(self, **kwargs: Any) -> "FacadeConfig":
        """Create a new configuration with specified overrides."""
        return attr.evolve(self, **kwargs)


def _parse_bool_env(env_var: str) -> bool | None:
    env_value = os.getenv(env_var)
    if env_value is None:
        return None
    return env_value.lower() in ("true", "1", "yes")


def _parse_int_env(env_var: str) -> int | None:
    env_value = os.getenv(env_var)
    if env_value is None:
        return None
    return int(env_value)
