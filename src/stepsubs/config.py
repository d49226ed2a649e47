"""Plugin configuration loading and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from dotenv import load_dotenv

from stepsubs.subtitles import SubtitleFormat

PLUGIN_NAME = "subtitles"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class PluginConfig:
    enabled: bool = True
    format: str = SubtitleFormat.SRT.value

    @property
    def subtitle_format(self) -> SubtitleFormat:
        return SubtitleFormat.from_config(self.format)


def _parse_bool(value: str, source: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean '{value}' in {source}")


def _load_file_section(path: Path) -> dict:
    """Return the ``plugins.subtitles`` mapping of a YAML config file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Malformed config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    plugins = data.get("plugins") or {}
    if not isinstance(plugins, dict):
        raise ValueError(f"'plugins' in {path} must be a mapping")
    section = plugins.get(PLUGIN_NAME) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'plugins.{PLUGIN_NAME}' in {path} must be a mapping")
    return section


def load_config(
    config_path: Path | None = None,
    *,
    format: str | None = None,
    enabled: bool | None = None,
) -> PluginConfig:
    """Load plugin configuration from a YAML file, environment, and overrides.

    Priority: explicit arguments > STEPSUBS_* env vars > config file > defaults.
    """
    load_dotenv()

    file_section = _load_file_section(config_path) if config_path is not None else {}

    resolved_format = format
    if resolved_format is None:
        resolved_format = os.environ.get("STEPSUBS_FORMAT") or None
    if resolved_format is None and file_section.get("format") is not None:
        resolved_format = str(file_section["format"])

    resolved_enabled = enabled
    if resolved_enabled is None:
        env_enabled = os.environ.get("STEPSUBS_ENABLED")
        if env_enabled:
            resolved_enabled = _parse_bool(env_enabled, "STEPSUBS_ENABLED")
    if resolved_enabled is None and "enabled" in file_section:
        raw = file_section["enabled"]
        resolved_enabled = raw if isinstance(raw, bool) else _parse_bool(str(raw), str(config_path))

    kwargs: dict = {}
    if resolved_format is not None:
        kwargs["format"] = resolved_format
    if resolved_enabled is not None:
        kwargs["enabled"] = resolved_enabled
    return PluginConfig(**kwargs)
