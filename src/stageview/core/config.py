# src/stageview/core/config.py
"""
Configuration schema and loading for stageview.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from stageview.contracts.enums import Status


def _default_failure_causes() -> dict[str, Status]:
    return {status.value: status for status in (Status.FAILED, Status.ABORTED, Status.UNSTABLE)}


DEFAULT_FAILURE_CAUSES: dict[str, Status] = _default_failure_causes()
"""Failure causes every engine is expected to report, keyed by normalized name."""


def normalize_cause(cause: str) -> str:
    """Normalize a failure-cause identifier for table lookup."""
    return cause.strip().upper()


class StageViewSettings(BaseModel):
    """Top-level settings.

    Example YAML:
        failure_causes:
          TIMEOUT: ABORTED
          TESTS_FAILED: UNSTABLE
        log_level: DEBUG
        json_logs: true
    """

    model_config = {"frozen": True}

    failure_causes: dict[str, Status] = Field(
        default_factory=dict,
        description="Extra engine failure causes and the failure status each one reports",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit structured JSON logs instead of console output",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("failure_causes")
    @classmethod
    def validate_failure_causes(cls, v: dict[str, Status]) -> dict[str, Status]:
        """Failure causes may only map onto failure statuses."""
        normalized: dict[str, Status] = {}
        for cause, status in v.items():
            key = normalize_cause(cause)
            if not key:
                raise ValueError("failure cause names must be non-empty")
            if not status.is_failure:
                allowed = ", ".join(sorted(s.value for s in DEFAULT_FAILURE_CAUSES.values()))
                raise ValueError(f"failure cause '{cause}' maps to {status.value}; must be one of: {allowed}")
            normalized[key] = status
        return normalized

    def failure_cause_table(self) -> dict[str, Status]:
        """Default failure causes merged with configured ones (configured win)."""
        return {**DEFAULT_FAILURE_CAUSES, **self.failure_causes}


def load_settings(config_path: Path) -> StageViewSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (STAGEVIEW_*) - highest priority
    2. Config file
    3. Defaults from Pydantic schema - lowest priority

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated StageViewSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="STAGEVIEW",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; Pydantic fields are lowercase
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return StageViewSettings(**raw_config)
