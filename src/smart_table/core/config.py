"""
Settings for smart-table engines and the command line.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class TableSettings(BaseModel):
    """Engine tuning shared by every table built with it.

    Example YAML:
        processing_delay_ms: 20
        sort_debounce_ms: 150
        default_page_size: 25
        log_level: DEBUG
    """

    model_config = {"frozen": True, "extra": "forbid"}

    processing_delay_ms: int = Field(
        default=20,
        ge=0,
        description="Delay between exec() being called and the local pipeline running",
    )
    sort_debounce_ms: int = Field(
        default=0,
        ge=0,
        description="Quiet period before a sort toggle reaches the table",
    )
    default_page_size: int | None = Field(
        default=None,
        gt=0,
        description="Page size used when the initial table state defines none",
    )
    log_level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    json_logs: bool = Field(default=False, description="Emit structured JSON logs")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {v!r}")
        return level


def load_settings(config_path: Path) -> TableSettings:
    """Load settings from a YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (SMART_TABLE_*) - highest priority
    2. Config file
    3. Defaults from the Pydantic schema - lowest priority

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated TableSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="SMART_TABLE",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys and a few of its own settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config: dict[str, Any] = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return TableSettings(**raw_config)
