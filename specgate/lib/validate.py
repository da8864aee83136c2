"""
Schema validation for specgate.

Enforces JSON Schema validation at every data boundary: spec documents,
project config, proposed tasks and the analysis snapshot.
Raises with clear errors when data doesn't match schema.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
import yaml


class ValidationError(Exception):
    """Schema validation failed."""

    def __init__(self, schema_name: str, message: str, path: str = None):
        self.schema_name = schema_name
        self.path = path
        self.message = message
        super().__init__(f"[{schema_name}] {message}" + (f" at {path}" if path else ""))


def _get_schemas_dir() -> Path:
    """Get path to the packaged schemas directory."""
    return Path(__file__).parent.parent / "schemas"


@lru_cache(maxsize=None)
def _load_schema(schema_name: str) -> dict:
    """Load schema by name. Schemas are read-only, so the result is memoized."""
    schema_path = _get_schemas_dir() / f"{schema_name}.schema.json"
    if not schema_path.exists():
        raise ValidationError(schema_name, f"Schema file not found: {schema_path}")
    return json.loads(schema_path.read_text())


def validate(data: Any, schema_name: str) -> None:
    """
    Validate data against named schema.

    Args:
        data: Parsed document to validate
        schema_name: Schema name (e.g., "use_case", "roadmap", "analysis")

    Raises:
        ValidationError: If validation fails
    """
    schema = _load_schema(schema_name)

    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        path = ".".join(str(p) for p in e.absolute_path) if e.absolute_path else "(root)"
        raise ValidationError(schema_name, e.message, path) from None


def validate_yaml_file(filepath: Path, schema_name: str, loader: type = yaml.SafeLoader) -> Any:
    """
    Load YAML file and validate against schema.

    Args:
        filepath: Path to YAML file
        schema_name: Schema name to validate against
        loader: PyYAML loader class (a SafeLoader subclass)

    Returns:
        Parsed and validated data

    Raises:
        ValidationError: If file missing, unreadable, not YAML, or doesn't match schema
    """
    if not filepath.exists():
        raise ValidationError(schema_name, f"File not found: {filepath}")

    try:
        text = filepath.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ValidationError(schema_name, f"Unreadable: not UTF-8 ({e.reason} at byte {e.start})") from None
    except OSError as e:
        raise ValidationError(schema_name, f"Unreadable: {e.strerror or e}") from None

    try:
        data = yaml.load(text, Loader=loader)
    except yaml.YAMLError as e:
        raise ValidationError(schema_name, f"Invalid YAML: {_one_line(e)}") from None

    validate(data, schema_name)
    return data


def validate_before_write(data: Any, schema_name: str, filepath: Path) -> None:
    """
    Validate data before writing to file. Ensures we never write invalid data.

    Raises:
        ValidationError: If data doesn't match schema
    """
    try:
        validate(data, schema_name)
    except ValidationError as e:
        raise ValidationError(
            schema_name,
            f"Refusing to write invalid data to {filepath}: {e}"
        ) from None


def _one_line(error: Exception) -> str:
    """Collapse a multi-line parser message (PyYAML marks) to one line."""
    return " ".join(str(error).split())
