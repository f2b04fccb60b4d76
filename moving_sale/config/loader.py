from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import CompressSettings, SiteConfig

"""Config loader for the catalog builder.

Responsibilities:
- Load YAML config/site.yml
- Validate against site_schema.json (shipped inside the package)
- Apply defaults for omitted optional keys
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/site.yml")
SCHEMA_PATH = Path(__file__).with_name("site_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / not valid JSON, or the config data
            fails validation (missing required keys, wrong types, unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> SiteConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = SiteConfig(source_csv="", output_path="")
    comp_raw = data.get("compress", {})
    comp_defaults = CompressSettings()
    compress = CompressSettings(
        max_size=comp_raw.get("max_size", comp_defaults.max_size),
        jpeg_quality=comp_raw.get("jpeg_quality", comp_defaults.jpeg_quality),
        backup_dir=comp_raw.get("backup_dir", comp_defaults.backup_dir),
    )
    return SiteConfig(
        source_csv=data["source_csv"],
        output_path=data["output_path"],
        image_prefix=data.get("image_prefix", defaults.image_prefix),
        currency=data.get("currency", defaults.currency),
        title=data.get("title", defaults.title),
        stylesheet=data.get("stylesheet", defaults.stylesheet),
        script=data.get("script", defaults.script),
        swipe_threshold=data.get("swipe_threshold", defaults.swipe_threshold),
        compress=compress,
    )
