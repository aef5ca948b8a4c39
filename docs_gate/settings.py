"""Environment-driven settings for hosts that configure the gate externally.

The gate itself never reads the environment; ``GateSettings.options()``
turns loaded settings into the same option setters code would pass.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docs_gate.config import (
    Option,
    with_allowed_ips,
    with_auth_token,
    with_enabled,
    with_path,
    with_protect_doc_json,
    with_strict_allowlist,
    with_trusted_proxies,
)
from docs_gate.constants import DEFAULT_PATH


def _split_csv(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class GateSettings(BaseSettings):
    """Docs gate settings loaded from ``DOCS_GATE_*`` variables or ``.env``.

    Attributes:
        enabled: Serve the docs at all
        path: UI route pattern
        allowed_ips: Comma-separated IPs/CIDRs; empty disables the check
        auth_token: Static X-API-TOKEN value; empty disables the check
        protect_doc_json: Gate the doc.json route as well
        trusted_proxy_cidrs: Comma-separated proxy CIDRs for X-Forwarded-For
        strict_allowlist: Refuse to start on malformed allow-list entries
        log_level: Logging level
        log_json: Emit JSON log lines
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCS_GATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = True
    path: str = DEFAULT_PATH
    allowed_ips: str = ""
    auth_token: str = ""
    protect_doc_json: bool = False
    trusted_proxy_cidrs: str = ""
    strict_allowlist: bool = False

    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper

    def options(self) -> list[Option]:
        """Option setters equivalent to these settings."""
        return [
            with_enabled(self.enabled),
            with_path(self.path),
            with_allowed_ips(*_split_csv(self.allowed_ips)),
            with_auth_token(self.auth_token),
            with_protect_doc_json(self.protect_doc_json),
            with_trusted_proxies(*_split_csv(self.trusted_proxy_cidrs)),
            with_strict_allowlist(self.strict_allowlist),
        ]


@lru_cache
def get_settings() -> GateSettings:
    """Get cached settings instance.

    Returns:
        GateSettings instance loaded from environment variables
    """
    return GateSettings()
