"""Runtime settings for the i2p-identity tools.

Values come from keyword overrides first, then ``I2P_IDENTITY_*``
environment variables, then the defaults below.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_data_dir() -> Path:
    return Path.home() / ".i2p-identity"


class IdentitySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="I2P_IDENTITY_",
        extra="ignore",
    )

    data_dir: Path = Field(default_factory=_default_data_dir)
    app: str = "i2p-identity"
    kind: str = "router-identity"
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"


def load_settings(**overrides: Any) -> IdentitySettings:
    """Build settings, letting non-``None`` *overrides* win over the environment."""
    explicit = {key: value for key, value in overrides.items() if value is not None}
    return IdentitySettings(**explicit)


__all__ = ["IdentitySettings", "load_settings"]
