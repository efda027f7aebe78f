"""Configuration module for the reverse-DNS zone planner.

Loads and validates environment variables once at start-up; everything
downstream receives a typed Config instance.
"""

import os
from dataclasses import dataclass


ZONE_KINDS = ("Master", "Slave")
OUTPUT_FORMATS = ("json", "yaml")
MAX_TTL = 2147483647


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Input
    manifest_path: str

    # Planning defaults
    default_ttl: int
    default_zone_kind: str
    strict_zone_cidr: bool

    # Operational Configuration
    output_format: str
    verbose: bool

    @classmethod
    def from_env(cls, manifest_path: str | None = None) -> "Config":
        """Load configuration from environment variables.

        Args:
            manifest_path: Manifest path from the command line; takes
                precedence over MANIFEST_PATH.

        Raises:
            ValueError: If required variables are missing or invalid.

        Returns:
            Config: Validated configuration instance.
        """
        if not manifest_path:
            manifest_path = cls._get_required_env("MANIFEST_PATH")

        try:
            default_ttl = int(os.getenv("DEFAULT_TTL", "3600"))
        except ValueError:
            raise ValueError("DEFAULT_TTL must be an integer") from None
        if not 0 <= default_ttl <= MAX_TTL:
            raise ValueError(f"DEFAULT_TTL must be between 0 and {MAX_TTL}")

        default_zone_kind = os.getenv("DEFAULT_ZONE_KIND", "Master")
        if default_zone_kind not in ZONE_KINDS:
            raise ValueError("DEFAULT_ZONE_KIND must be Master or Slave")

        strict_zone_cidr = cls._get_bool_env("STRICT_ZONE_CIDR", "true")

        output_format = os.getenv("OUTPUT_FORMAT", "json").lower()
        if output_format not in OUTPUT_FORMATS:
            raise ValueError("OUTPUT_FORMAT must be json or yaml")

        verbose = cls._get_bool_env("VERBOSE", "false")

        return cls(
            manifest_path=manifest_path,
            default_ttl=default_ttl,
            default_zone_kind=default_zone_kind,
            strict_zone_cidr=strict_zone_cidr,
            output_format=output_format,
            verbose=verbose,
        )

    @staticmethod
    def _get_required_env(key: str) -> str:
        """Get required environment variable or raise ValueError.

        Args:
            key: Environment variable name.

        Returns:
            str: Environment variable value.

        Raises:
            ValueError: If environment variable is not set or empty.
        """
        value = os.getenv(key)
        if not value:
            raise ValueError(f"Required environment variable {key} is not set")
        return value

    @staticmethod
    def _get_bool_env(key: str, default: str) -> bool:
        return os.getenv(key, default).lower() in ("true", "1", "yes")
