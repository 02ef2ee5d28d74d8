"""Configuration models and loaders for mtojson.

Values come from an optional YAML file with environment variable overrides
on top. The library itself only needs ``RenderConfig``; logging settings
are used by the command line tool.
"""

from __future__ import annotations

import codecs
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CONFIG_PATH = "mtojson.yaml"


class RenderConfig(BaseModel):
    """Settings for a single render."""

    max_depth: int = Field(default=256, ge=1)
    encoding: str = "utf-8"
    default_capacity: int = Field(default=4096, ge=1)

    @field_validator("encoding")
    @classmethod
    def _validate_encoding(cls, value: str) -> str:
        try:
            name = codecs.lookup(value).name
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {value}") from exc
        # Structural bytes are written as ASCII; text must encode alongside them.
        ascii_text = '{": ,}[]-0123456789'
        try:
            encoded = ascii_text.encode(name)
        except (UnicodeError, LookupError) as exc:
            raise ValueError(f"encoding {value} cannot encode ASCII punctuation") from exc
        if encoded != ascii_text.encode("ascii") or len("a".encode(name)) != 1:
            raise ValueError(f"encoding {value} is not ASCII-compatible")
        return name


class LoggingConfig(BaseModel):
    """Logging-related configuration."""

    model_config = ConfigDict(populate_by_name=True)

    level: str = "WARNING"
    json_logs: bool = Field(default=False, alias="json")


class MtojsonConfig(BaseModel):
    """Top-level configuration."""

    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _load_yaml(path: str | None) -> dict[str, Any]:
    """Load a YAML file into a dictionary.

    Missing files are treated as empty config.
    """
    if not path:
        return {}
    cfg_path = Path(path)
    if not cfg_path.exists():
        return {}
    with cfg_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be object: {path}")
    return data


def _override_from_env(data: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides on top of file configuration."""
    env_map = {
        "render.max_depth": "MTOJSON_MAX_DEPTH",
        "render.encoding": "MTOJSON_ENCODING",
        "render.default_capacity": "MTOJSON_DEFAULT_CAPACITY",
        "logging.level": "MTOJSON_LOG_LEVEL",
        "logging.json": "MTOJSON_LOG_JSON",
    }

    out = dict(data)
    out["render"] = dict(out.get("render") or {})
    out["logging"] = dict(out.get("logging") or {})

    for key, env_name in env_map.items():
        value = os.getenv(env_name)
        if value is None:
            continue
        section, name = key.split(".", 1)
        if name in {"max_depth", "default_capacity"}:
            out[section][name] = int(value)
        elif name == "json":
            out[section][name] = value.lower() in {"1", "true", "yes", "on"}
        else:
            out[section][name] = value

    return out


def load_config(path: str | None = None) -> MtojsonConfig:
    """Load, merge, and validate configuration."""
    final_path = path or os.getenv("MTOJSON_CONFIG") or DEFAULT_CONFIG_PATH
    raw = _load_yaml(final_path)
    raw = _override_from_env(raw)
    return MtojsonConfig.model_validate(raw)
