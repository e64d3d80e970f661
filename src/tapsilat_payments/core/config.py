"""
Configuration objects for the Tapsilat client.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment
from .errors import TapsilatError

__all__ = [
    "ConfigError",
    "ClientConfig",
    "load_client_config",
]

_PARAMETER_TO_ENV_KEY = {
    "base_url": "TAPSILAT_BASE_URL",
    "api_token": "TAPSILAT_API_TOKEN",
    "timeout_seconds": "TAPSILAT_TIMEOUT_SECONDS",
    "max_attempts": "TAPSILAT_MAX_ATTEMPTS",
    "retry_delay": "TAPSILAT_RETRY_DELAY",
}

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_DELAY = 1.0


class ConfigError(TapsilatError):
    """Raised when the supplied configuration is invalid or incomplete."""


def _collect_parameter_overrides(explicit: Mapping[str, Any]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for key, value in explicit.items():
        if value is None:
            continue
        overrides[_PARAMETER_TO_ENV_KEY[key]] = str(value)
    return overrides


def _parse_number(values: Mapping[str, str], key: str, default: float, cast: type) -> Any:
    raw = values.get(key)
    if raw is None or not str(raw).strip():
        return cast(default)
    try:
        parsed = cast(str(raw).strip())
    except ValueError as exc:
        raise ConfigError(f"{key} must be a valid number, got '{raw}'") from exc
    if parsed <= 0:
        raise ConfigError(f"{key} must be greater than zero")
    return parsed


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class ClientConfig:
    """
    Connection settings for a single :class:`TapsilatClient`.

    The object is immutable: build a new one (or use :meth:`reset`) instead of
    mutating shared state.
    """

    base_url: Optional[str] = None
    api_token: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retry_delay: float = DEFAULT_RETRY_DELAY

    @property
    def configured(self) -> bool:
        return bool(self.base_url and self.api_token)

    def reset(self) -> "ClientConfig":
        """Return a copy with the base URL and API token cleared."""
        return replace(self, base_url=None, api_token=None)

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        base_url = _optional_text(values.get("TAPSILAT_BASE_URL"))
        if base_url is not None:
            base_url = base_url.rstrip("/")

        return cls(
            base_url=base_url,
            api_token=_optional_text(values.get("TAPSILAT_API_TOKEN")),
            timeout_seconds=_parse_number(
                values, "TAPSILAT_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS, float
            ),
            max_attempts=_parse_number(
                values, "TAPSILAT_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS, int
            ),
            retry_delay=_parse_number(
                values, "TAPSILAT_RETRY_DELAY", DEFAULT_RETRY_DELAY, float
            ),
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout_seconds: Optional[float | str] = None,
        max_attempts: Optional[int | str] = None,
        retry_delay: Optional[float | str] = None,
    ) -> "ClientConfig":
        parameter_overrides = _collect_parameter_overrides(
            {
                "base_url": base_url,
                "api_token": api_token,
                "timeout_seconds": timeout_seconds,
                "max_attempts": max_attempts,
                "retry_delay": retry_delay,
            }
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.settings())


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    base_url: Optional[str] = None,
    api_token: Optional[str] = None,
    timeout_seconds: Optional[float | str] = None,
    max_attempts: Optional[int | str] = None,
    retry_delay: Optional[float | str] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    Settings may come from ``TAPSILAT_*`` environment variables, a ``.env`` file,
    keyword arguments, or any combination of the three.
    """
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        base_url=base_url,
        api_token=api_token,
        timeout_seconds=timeout_seconds,
        max_attempts=max_attempts,
        retry_delay=retry_delay,
    )
