"""Redirector configuration settings.

RedirectorSettings is the single configuration object accepted by create_app()
and the CLI. It is a plain dataclass (not env-coupled) so tests can inject
config without touching os.environ; ``from_env`` is the production factory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .mapping.loader import DEFAULT_MAPPING_PATH
from .observability.logging import parse_log_level

DEFAULT_PORT = 8080
DEFAULT_PORT_TLS = 8443
DEFAULT_LOG_LEVEL = "DEBUG"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class SettingsError(ValueError):
    """Raised when an environment value cannot be interpreted."""


@dataclass(frozen=True, slots=True)
class RedirectorSettings:
    """Configuration for the redirector application.

    All fields have sensible defaults for local development.
    """

    # ── Logging ────────────────────────────────────────────────────
    log_level: str = DEFAULT_LOG_LEVEL
    """One of DEBUG, INFO, WARNING, ERROR, CRITICAL (case-insensitive)."""

    log_format: str = "json"
    """``json`` for JSON lines, ``console`` for human-readable output."""

    # ── Mapping / templates ────────────────────────────────────────
    mapping_path: str = DEFAULT_MAPPING_PATH
    """Path of the YAML/JSON redirect mapping file."""

    template_path: str = ""
    """Optional Jinja2 interstitial template; empty uses the built-in page."""

    performance_mode: bool = False
    """Render the interstitial template without HTML autoescaping."""

    # ── Listener ───────────────────────────────────────────────────
    bind_host: str = "0.0.0.0"
    port: int = 0
    """Listen port. 0 selects 8080 for plain HTTP and 8443 for TLS."""

    use_http: bool = True
    """Serve plain HTTP. When False, cert_file and key_file are required."""

    cert_file: str = ""
    key_file: str = ""

    @property
    def effective_port(self) -> int:
        if self.port:
            return self.port
        return DEFAULT_PORT if self.use_http else DEFAULT_PORT_TLS

    @property
    def json_logs(self) -> bool:
        return self.log_format != "console"

    def validate(self) -> list[str]:
        """Return a list of configuration errors. Empty means valid."""
        errors: list[str] = []
        try:
            parse_log_level(self.log_level)
        except ValueError as exc:
            errors.append(str(exc))
        if self.log_format not in ("json", "console"):
            errors.append(f"log_format must be json or console, got {self.log_format!r}")
        if not 0 <= self.port <= 65535:
            errors.append(f"port must be between 0 and 65535, got {self.port}")
        if not self.use_http:
            if not self.cert_file:
                errors.append("cert_file is required when serving TLS")
            if not self.key_file:
                errors.append("key_file is required when serving TLS")
        return errors

    @classmethod
    def from_env(cls, env: dict[str, str] | None = None) -> RedirectorSettings:
        """Build settings from environment variables.

        This is a convenience factory for production use. Tests should
        construct RedirectorSettings directly.

        Raises:
            SettingsError: If PORT is not an integer.
        """
        if env is None:
            env = dict(os.environ)

        port_raw = env.get("PORT", "").strip()
        try:
            port = int(port_raw) if port_raw else 0
        except ValueError as exc:
            raise SettingsError(f"PORT must be an integer, got {port_raw!r}") from exc

        return cls(
            log_level=env.get("LOG_LEVEL", "").strip() or DEFAULT_LOG_LEVEL,
            log_format=env.get("LOG_FORMAT", "json").strip() or "json",
            mapping_path=env.get("MAPPING_PATH", "").strip() or DEFAULT_MAPPING_PATH,
            template_path=env.get("TEMPLATE_PATH", "").strip(),
            performance_mode=_env_flag(env, "PERFORMANCE_MODE", False),
            bind_host=env.get("BIND_HOST", "").strip() or "0.0.0.0",
            port=port,
            use_http=_env_flag(env, "HTTP", True),
            cert_file=env.get("CERT_FILE", "").strip(),
            key_file=env.get("KEY_FILE", "").strip(),
        )


def _env_flag(env: dict[str, str], key: str, default: bool) -> bool:
    raw = env.get(key, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUTHY
