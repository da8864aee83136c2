"""
specgate constitution - Preview constitution files and check for drift.
"""

from pathlib import Path

from specgate.lib.config import ProjectConfig
from specgate.specs.constitution import (
    ConstitutionError,
    detect_constitution_drift,
    preview_constitution_file,
)


def cmd_constitution_preview(args, config: ProjectConfig) -> int:
    """Render a constitution YAML file as markdown."""
    try:
        markdown = preview_constitution_file(Path(args.file))
    except ConstitutionError as e:
        print(f"ERROR: {e}")
        return 2

    print(markdown, end="")
    return 0


def cmd_constitution_drift(args, config: ProjectConfig) -> int:
    """List on-disk constitutions that differ from the canonical ones."""
    drift = detect_constitution_drift(config.constitutions_path)
    if not drift:
        print("No constitution drift.")
        return 0

    print("Constitution drift:")
    for name in drift:
        print(f"  - {name}")
    return 1
