"""Settings that control how diffs are accepted and applied."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

DEFAULT_CONFIG_NAME = "hunkpatch.yaml"
CONFIG_SECTION = "patch"
_DEFAULT_MAX_PATCH_BYTES = 200_000
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class PatchSettings(BaseModel):
    """Validated patch settings."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_patch_bytes: int = Field(default=_DEFAULT_MAX_PATCH_BYTES, ge=0)
    normalized_fallback: bool = True
    emit_telemetry: bool = True


def _read_config_file(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as error:
        raise ConfigError(f"Failed to parse config {path}: {error}") from error
    if not isinstance(loaded, Mapping):
        raise ConfigError(f"Configuration must be a mapping at the top level: {path}")
    return loaded


def _env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    env_limit = env.get("HUNKPATCH_MAX_PATCH_BYTES")
    if env_limit is not None:
        try:
            parsed = int(str(env_limit).strip())
            if parsed > 0:
                overrides["max_patch_bytes"] = parsed
        except ValueError:
            pass

    env_fallback = env.get("HUNKPATCH_NORMALIZED_FALLBACK")
    if env_fallback is not None:
        lowered = env_fallback.strip().lower()
        if lowered in _TRUE_VALUES:
            overrides["normalized_fallback"] = True
        elif lowered in _FALSE_VALUES:
            overrides["normalized_fallback"] = False

    return overrides


def load_settings(
    config_path: Path | str | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> PatchSettings:
    """Load settings from the ``patch`` section of a YAML file plus env overrides.

    A missing file yields defaults.  ``HUNKPATCH_MAX_PATCH_BYTES`` and
    ``HUNKPATCH_NORMALIZED_FALLBACK`` take precedence over the file.
    """
    env_mapping = os.environ if env is None else env
    path = Path(config_path) if config_path is not None else Path(DEFAULT_CONFIG_NAME)

    config = _read_config_file(path)
    section = config.get(CONFIG_SECTION) or {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"'{CONFIG_SECTION}' section must be a mapping: {path}")

    values = dict(section)
    values.update(_env_overrides(env_mapping))
    try:
        return PatchSettings(**values)
    except ValidationError as error:
        raise ConfigError(f"Invalid patch settings in {path}: {error}") from error


__all__ = ["CONFIG_SECTION", "DEFAULT_CONFIG_NAME", "PatchSettings", "load_settings"]
