from __future__ import annotations

import codecs
import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_DATE_FORMATS, DEFAULT_ENCODING, ImportConfig, ParseOptions

"""Config loader.

Responsibilities:
- Load YAML config/sales_history.yml
- Validate against config_schema.json (unknown keys rejected)
- Apply defaults (ebay_site_id=3, encoding=iso-8859-1, default date formats)
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/sales_history.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: the schema file is missing or invalid, or the config data
            fails validation (missing keys, wrong types, unsupported site id,
            unknown keys)
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


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    encoding = data.get("encoding", DEFAULT_ENCODING)
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise ConfigError(f"unknown encoding: {encoding}") from e

    options = ParseOptions(
        site_id=data.get("ebay_site_id", 3),
        encoding=encoding,
        date_formats=tuple(data.get("date_formats") or DEFAULT_DATE_FORMATS),
        strict_record_count=data.get("strict_record_count", False),
    )
    return ImportConfig(
        source_directory=data["source_directory"],
        parse_options=options,
        export_directory=data.get("export_directory"),
    )
