"""
Configuration loader for specgate.

Loads specgate.yaml from the project root. If no config file exists,
returns defaults matching the conventional docs/ and tests/ layout.
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import yaml

from specgate.lib import validate
from specgate.lib.constants import CONFIG_FILE_NAME, SNAPSHOT_FILE_NAME

logger = logging.getLogger(__name__)


DEFAULT_TEST_FILE_SUFFIXES = ["_test.go", "_test.py"]


class ConfigError(Exception):
    """specgate.yaml exists but can't be used."""


@dataclass
class ProjectConfig:
    """Project-level configuration from specgate.yaml.

    Paths are stored relative to root, as written in the file; the
    *_path properties resolve them.
    """
    root: Path
    roadmap: str = "docs/road-map.yaml"
    requirements_dir: str = "docs/specs/product-requirements"
    use_cases_dir: str = "docs/specs/use-cases"
    test_suites_dir: str = "docs/specs/test-suites"
    constitutions_dir: str = "docs/constitutions"
    tests_dir: str = "tests"
    test_file_suffixes: list[str] = field(default_factory=lambda: list(DEFAULT_TEST_FILE_SUFFIXES))
    snapshot_path: str = f".specgate/{SNAPSHOT_FILE_NAME}"
    max_requirements_per_task: int = 0  # 0 = unlimited
    enforce_task_validation: bool = True

    @property
    def roadmap_path(self) -> Path:
        return self.root / self.roadmap

    @property
    def requirements_path(self) -> Path:
        return self.root / self.requirements_dir

    @property
    def use_cases_path(self) -> Path:
        return self.root / self.use_cases_dir

    @property
    def test_suites_path(self) -> Path:
        return self.root / self.test_suites_dir

    @property
    def constitutions_path(self) -> Path:
        return self.root / self.constitutions_dir

    @property
    def tests_path(self) -> Path:
        return self.root / self.tests_dir

    @property
    def snapshot_file(self) -> Path:
        return self.root / self.snapshot_path

    def relative(self, path: Path) -> str:
        """Render a path relative to the project root for messages."""
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()


def load_project_config(root: Path, config_path: Optional[Path] = None) -> ProjectConfig:
    """Load specgate.yaml and return ProjectConfig.

    Args:
        root: Project root; relative paths in the config resolve against it
        config_path: Explicit config file (default: <root>/specgate.yaml)

    Raises:
        ConfigError: If the file is not valid YAML or fails the config schema
    """
    root = Path(root)
    if config_path is None:
        config_path = root / CONFIG_FILE_NAME

    if not config_path.exists():
        logger.debug(f"No {config_path.name} at {root}, using defaults")
        return ProjectConfig(root=root)

    try:
        data = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {config_path}: {e}") from None

    # An empty file is the same as no overrides
    if data is None:
        data = {}

    try:
        validate.validate(data, "config")
    except validate.ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from None

    known = {f.name for f in fields(ProjectConfig)} - {"root"}
    overrides = {k: v for k, v in data.items() if k in known}
    return ProjectConfig(root=root, **overrides)
