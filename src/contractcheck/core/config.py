# src/contractcheck/core/config.py
"""
Configuration schema and loading for contract verification.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.

The active settings are scoped with a ContextVar rather than a mutable
module global: use_settings() installs settings for the current context
(and, through the harness, for the worker threads it starts).
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class IdentitySettings(BaseModel):
    """Policy for the identity (equality/hash) contract."""

    model_config = {"frozen": True}

    require_hashable: bool = Field(
        default=False,
        description="Treat types declaring __hash__ = None as hash contract violations",
    )


class OrderingSettings(BaseModel):
    """Policy for the ordering contract.

    Natural ordering need not agree with equality (e.g. a decimal type
    where 1.0 and 1.00 compare equal but are not ==), so the consistency
    check is opt-in.
    """

    model_config = {"frozen": True}

    consistent_with_equals: bool = Field(
        default=False,
        description="Require compare(a, b) == 0 exactly when a == b in pairwise ordering checks",
    )


class DiagnosticsSettings(BaseModel):
    """How offending objects are rendered in failure messages."""

    model_config = {"frozen": True}

    max_repr_length: int = Field(
        default=240,
        ge=16,
        description="Truncate object representations in failure messages to this many characters",
    )


class LoggingSettings(BaseModel):
    """Logging configuration passed to configure_logging()."""

    model_config = {"frozen": True}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Log level for contractcheck and stdlib logging",
    )
    json_output: bool = Field(default=False, description="Emit JSON instead of console output")


class ContractCheckSettings(BaseModel):
    """Top-level settings.

    Example YAML:
        ordering:
          consistent_with_equals: true
        diagnostics:
          max_repr_length: 120
        logging:
          level: DEBUG
    """

    model_config = {"frozen": True}

    identity: IdentitySettings = Field(default_factory=IdentitySettings)
    ordering: OrderingSettings = Field(default_factory=OrderingSettings)
    diagnostics: DiagnosticsSettings = Field(default_factory=DiagnosticsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


DEFAULT_SETTINGS = ContractCheckSettings()

_active: ContextVar[ContractCheckSettings] = ContextVar("contractcheck_settings", default=DEFAULT_SETTINGS)


def active_settings() -> ContractCheckSettings:
    """Settings in force for the current context."""
    return _active.get()


@contextmanager
def use_settings(settings: ContractCheckSettings) -> Iterator[ContractCheckSettings]:
    """Scope settings to the enclosed block.

    Example:
        with use_settings(load_settings(Path("contractcheck.yaml"))):
            assert_ordering_invariants_with(a, b)
    """
    token = _active.set(settings)
    try:
        yield settings
    finally:
        _active.reset(token)


def load_settings(config_path: Path | None = None) -> ContractCheckSettings:
    """Load settings from an optional file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (CONTRACTCHECK_*) - highest priority
    2. Config file (YAML or TOML), when given
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: CONTRACTCHECK_ORDERING__CONSISTENT_WITH_EQUALS=true
    for nested keys.

    Args:
        config_path: Path to a configuration file, or None for env-only

    Returns:
        Validated ContractCheckSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If an explicit config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="CONTRACTCHECK",
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,  # No [default]/[production] sections
        load_dotenv=False,  # Don't auto-load .env
        merge_enabled=True,  # Deep merge nested dicts
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    # Also filter out internal Dynaconf settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): _lower_keys(v) for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return ContractCheckSettings(**raw_config)


def _lower_keys(value: object) -> object:
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value
