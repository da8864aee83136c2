"""
specgate check-tasks - Validate a proposed-tasks file against task policy.
"""

from pathlib import Path

from specgate.lib.config import ProjectConfig
from specgate.tasks.importer import TaskImportError, load_proposed_tasks
from specgate.tasks.policy import validate_proposed_tasks


def cmd_check_tasks(args, config: ProjectConfig) -> int:
    """Print policy errors and warnings.

    Errors fail the command unless enforcement is skipped, either by flag
    or by enforce_task_validation: false in specgate.yaml.
    """
    try:
        tasks = load_proposed_tasks(Path(args.file))
    except TaskImportError as e:
        print(f"ERROR: {e}")
        return 2

    max_requirements = args.max_requirements
    if max_requirements is None:
        max_requirements = config.max_requirements_per_task

    result = validate_proposed_tasks(tasks, max_requirements)

    print(f"Checked {len(tasks)} task(s)")
    for err in result.errors:
        print(f"  ERROR: {err}")
    for warning in result.warnings:
        print(f"  WARNING: {warning}")

    if not result.has_errors():
        print("OK")
        return 0

    if args.skip_enforcement or not config.enforce_task_validation:
        print(f"{len(result.errors)} error(s) (enforcement skipped)")
        return 0

    print(f"FAILED: {len(result.errors)} error(s)")
    return 1
