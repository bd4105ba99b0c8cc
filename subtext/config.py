"""
subtext.config - YAML config loading, override merging, validation.

Handles loading subtext.yaml from an explicit path or the working
directory, applying command-line overrides, and validating all parameters.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from subtext.exceptions import ConfigError
from subtext.export.subtitles import FORMATS
from subtext.transcribe.engine import BACKENDS

CONFIG_FILENAME = "subtext.yaml"


class SubtextConfig(BaseModel):
    """Resolved configuration for a Subtext run."""

    whisper_backend: str = "faster"
    whisper_model: str = "base"
    whisper_language: str | None = None
    translate: bool = False

    # Output rate of `subtext extract`; transcription always runs at 16kHz.
    sample_rate: int = Field(default=16000, gt=0)
    threaded_decoding: bool = False

    seek_to: float | None = Field(default=None, ge=0.0)
    duration: float | None = Field(default=None, gt=0.0)

    subtitle_format: str = "srt"

    @field_validator("whisper_backend")
    @classmethod
    def validate_whisper_backend(cls, v: str) -> str:
        if v not in BACKENDS:
            raise ValueError(f"whisper_backend must be one of: {', '.join(BACKENDS)}")
        return v

    @field_validator("subtitle_format")
    @classmethod
    def validate_subtitle_format(cls, v: str) -> str:
        if v not in FORMATS:
            raise ValueError(f"subtitle_format must be one of: {', '.join(FORMATS)}")
        return v


def merge_config(file_config: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Merge command-line overrides into file config. Overrides that are None are ignored."""
    merged = file_config.copy()
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML config file into a dict.

    Raises:
        ConfigError: If the file is not a YAML mapping
    """
    with open(path) as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping of settings")
    return raw


def load_config(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> SubtextConfig:
    """Load and validate configuration.

    Args:
        config_path: Explicit config file; defaults to ./subtext.yaml if present
        overrides: Values that take precedence over the file (None skipped)

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
        ConfigError: If any value is invalid
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        file_config = read_config_file(config_path)
    else:
        default_path = Path.cwd() / CONFIG_FILENAME
        file_config = read_config_file(default_path) if default_path.exists() else {}

    merged = merge_config(file_config, overrides or {})
    try:
        return SubtextConfig(**merged)
    except ValidationError as e:
        raise ConfigError(str(e)) from e


def create_default_config() -> dict[str, Any]:
    """Create a default config dict suitable for writing to subtext.yaml."""
    return SubtextConfig().model_dump()


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
