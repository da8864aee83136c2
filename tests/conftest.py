"""Shared fixtures for specgate tests."""

import pytest
import yaml

from specgate.lib.config import ProjectConfig


@pytest.fixture
def project(tmp_path):
    """A ProjectConfig with default layout rooted at tmp_path."""
    return ProjectConfig(root=tmp_path)


@pytest.fixture
def write_yaml(tmp_path):
    """Write data as YAML to a path relative to tmp_path, creating dirs."""
    def _write(rel_path, data):
        path = tmp_path / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(data, sort_keys=False))
        return path
    return _write


@pytest.fixture
def spec_tree(write_yaml):
    """A small consistent project: one PRD, one use case, one suite, one release."""
    write_yaml("docs/specs/product-requirements/prd001-core.yaml", {
        "id": "prd001-core",
        "title": "Core",
        "requirements": [
            {"id": "R1", "text": "Load documents", "items": [{"id": "R1.1", "text": "YAML only"}]},
            {"id": "R2", "text": "Report findings"},
        ],
    })
    write_yaml("docs/specs/use-cases/rel01.0-uc001-init.yaml", {
        "id": "rel01.0-uc001-init",
        "title": "Initialization",
        "touchpoints": [
            {"T1": "prd001-core R1"},
            {"T2": "prd001-core R1.1, R2"},
        ],
    })
    write_yaml("docs/specs/test-suites/ts-rel01.0.yaml", {
        "id": "ts-rel01.0",
        "title": "Release 1 suite",
        "release": "rel01.0",
        "traces": ["rel01.0-uc001-init"],
    })
    write_yaml("docs/road-map.yaml", {
        "releases": [
            {
                "version": "01.0",
                "name": "Foundation",
                "status": "in progress",
                "use_cases": [{"id": "rel01.0-uc001-init", "status": "done"}],
            },
        ],
    })
