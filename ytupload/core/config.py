"""Configuration management for ytupload.

Supports YAML profiles and environment variable overrides. Passwords are
never written to disk; they only come from the environment or the caller.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from ytupload.core.exceptions import ConfigurationError, ProfileNotFoundError
from ytupload.core.timeouts import DEFAULT_HTTP_TIMEOUT_SECONDS

# =============================================================================
# Constants
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "ytupload"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

DEFAULT_BASE_HOST = "gdata.youtube.com"
DEFAULT_AUTH_HOST = "www.google.com"
DEFAULT_CLIENT_ID = "ytupload"

# Environment variable names
ENV_USER = "YT_USER"
ENV_PASS = "YT_PASS"
ENV_DEV_KEY = "YT_DEV_KEY"
ENV_CLIENT_ID = "YT_CLIENT_ID"
ENV_PROFILE = "YT_PROFILE"
ENV_VERIFY_SSL = "YT_VERIFY_SSL"
ENV_TIMEOUT = "YT_TIMEOUT"


# =============================================================================
# Profile
# =============================================================================


@dataclass
class Profile:
    """Connection settings for one upload account."""

    username: str
    developer_key: str = ""
    client_id: str = DEFAULT_CLIENT_ID
    base_host: str = DEFAULT_BASE_HOST
    auth_host: str = DEFAULT_AUTH_HOST
    use_ssl: bool = False
    verify_ssl: bool = True
    timeout: int = DEFAULT_HTTP_TIMEOUT_SECONDS

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "username": self.username,
            "developer_key": self.developer_key,
            "client_id": self.client_id,
            "base_host": self.base_host,
            "auth_host": self.auth_host,
            "use_ssl": self.use_ssl,
            "verify_ssl": self.verify_ssl,
            "timeout": self.timeout,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Create from dictionary."""
        return cls(
            username=data.get("username", ""),
            developer_key=data.get("developer_key", ""),
            client_id=data.get("client_id", DEFAULT_CLIENT_ID),
            base_host=data.get("base_host", DEFAULT_BASE_HOST),
            auth_host=data.get("auth_host", DEFAULT_AUTH_HOST),
            use_ssl=data.get("use_ssl", False),
            verify_ssl=data.get("verify_ssl", True),
            timeout=data.get("timeout", DEFAULT_HTTP_TIMEOUT_SECONDS),
        )


# =============================================================================
# Config
# =============================================================================


@dataclass
class Config:
    """Application configuration."""

    default_profile: str = "default"
    profiles: dict[str, Profile] = field(default_factory=dict)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load config from file with environment variable overrides.

        Priority (highest to lowest):
        1. Environment variables
        2. Config file
        3. Defaults

        Args:
            config_path: Optional path to config file.

        Returns:
            Loaded configuration.

        Raises:
            ConfigurationError: If the file exists but cannot be parsed.
        """
        path = config_path or CONFIG_FILE
        config = cls()

        if path.exists():
            try:
                with open(path) as f:
                    data = yaml.safe_load(f) or {}

                config.default_profile = data.get("default_profile", "default")

                for name, pdata in data.get("profiles", {}).items():
                    config.profiles[name] = Profile.from_dict(pdata or {})
            except (OSError, yaml.YAMLError, AttributeError) as e:
                raise ConfigurationError(f"Failed to load config: {e}") from e

        # Environment variable overrides
        if username := os.getenv(ENV_USER):
            try:
                timeout = int(os.getenv(ENV_TIMEOUT, str(DEFAULT_HTTP_TIMEOUT_SECONDS)))
            except ValueError as e:
                raise ConfigurationError(
                    "Timeout must be an integer",
                    field=ENV_TIMEOUT,
                    value=os.getenv(ENV_TIMEOUT),
                ) from e
            verify_ssl = os.getenv(ENV_VERIFY_SSL, "true").lower() in ("true", "1", "yes")

            config.profiles["default"] = Profile(
                username=username,
                developer_key=os.getenv(ENV_DEV_KEY, ""),
                client_id=os.getenv(ENV_CLIENT_ID, DEFAULT_CLIENT_ID),
                verify_ssl=verify_ssl,
                timeout=timeout,
            )

        if profile := os.getenv(ENV_PROFILE):
            config.default_profile = profile

        return config

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save config to file (excludes secrets).

        Args:
            config_path: Optional path to config file.
        """
        path = config_path or CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "default_profile": self.default_profile,
            "profiles": {name: p.to_dict() for name, p in self.profiles.items()},
        }

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def get_profile(self, name: Optional[str] = None) -> Profile:
        """Get profile by name or default.

        Args:
            name: Profile name. If None, uses default_profile.

        Returns:
            Profile configuration.

        Raises:
            ProfileNotFoundError: If profile doesn't exist.
        """
        name = name or self.default_profile
        if name not in self.profiles:
            raise ProfileNotFoundError(name)
        return self.profiles[name]

    def has_profile(self, name: str) -> bool:
        return name in self.profiles

    def add_profile(self, name: str, username: str, **settings: Any) -> Profile:
        """Add or update a profile.

        Args:
            name: Profile name.
            username: Account name used for ClientLogin and upload paths.
            **settings: Any other Profile field.

        Returns:
            Created profile.
        """
        profile = Profile(username=username, **settings)
        self.profiles[name] = profile
        return profile

    def remove_profile(self, name: str) -> bool:
        """Remove a profile.

        Returns:
            True if removed, False if didn't exist.
        """
        if name in self.profiles:
            del self.profiles[name]
            return True
        return False

    def set_default_profile(self, name: str) -> None:
        """Set the default profile.

        Raises:
            ProfileNotFoundError: If profile doesn't exist.
        """
        if name not in self.profiles:
            raise ProfileNotFoundError(name)
        self.default_profile = name


def get_password() -> Optional[str]:
    """Get the account password from the environment."""
    return os.getenv(ENV_PASS)
