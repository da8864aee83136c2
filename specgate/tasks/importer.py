"""
Task import gate.

Loads a proposed-tasks file, runs the validation policy, and hands the
tasks to an issue tracker. With enforcement on, any policy error stops
the import before a single task is created.
"""

import logging
from pathlib import Path
from typing import Protocol

import yaml

from specgate.lib.validate import ValidationError, validate
from specgate.tasks.models import ProposedTask
from specgate.tasks.policy import validate_proposed_tasks

logger = logging.getLogger(__name__)


class TaskImportError(Exception):
    """The proposed-tasks file could not be read."""


class TaskValidationError(Exception):
    """Proposed tasks violate policy and enforcement is on."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"validation failed with {len(errors)} error(s): " + "; ".join(errors))


class IssueTracker(Protocol):
    def create_issue(self, task: ProposedTask) -> str:
        """Create an issue for task and return its id."""
        ...


def load_proposed_tasks(path: Path) -> list[ProposedTask]:
    """Read a YAML list of proposed tasks.

    A missing index defaults to the task's position in the file.

    Raises:
        TaskImportError: If the file is missing, not YAML, or fails the
            proposed_tasks schema
    """
    if not path.exists():
        raise TaskImportError(f"Proposed tasks file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise TaskImportError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise TaskImportError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = []
    try:
        validate(data, "proposed_tasks")
    except ValidationError as e:
        raise TaskImportError(f"{path}: {e}") from e

    return [
        ProposedTask(
            index=item.get("index", position),
            title=item["title"],
            description=item["description"],
            dependency=item.get("dependency"),
        )
        for position, item in enumerate(data)
    ]


def order_by_dependency(tasks: list[ProposedTask]) -> list[ProposedTask]:
    """Order tasks so each one follows the task it depends on.

    File order is kept wherever dependencies allow. A dependency on a
    task outside the batch (or on itself) is ignored. Tasks caught in a
    cycle are appended in file order.
    """
    indexes = {t.index for t in tasks}
    placed: set[int] = set()
    ordered: list[ProposedTask] = []
    pending = list(tasks)

    while pending:
        ready = [
            t for t in pending
            if t.dependency is None
            or t.dependency == t.index
            or t.dependency not in indexes
            or t.dependency in placed
        ]
        if not ready:
            logger.warning(
                f"Dependency cycle among tasks {[t.index for t in pending]}, creating them in file order"
            )
            ordered.extend(pending)
            break
        ordered.extend(ready)
        placed.update(t.index for t in ready)
        pending = [t for t in pending if t not in ready]

    return ordered


def import_proposed_tasks(
    path: Path,
    tracker: IssueTracker,
    max_requirements: int = 0,
    enforce: bool = True,
    skip_enforcement: bool = False,
) -> list[str]:
    """Validate proposed tasks and create them through tracker.

    Args:
        path: YAML file of proposed tasks
        tracker: Issue tracker client
        max_requirements: Requirement cap per task (0 = no cap)
        enforce: Whether policy errors block the import
        skip_enforcement: One-off override of enforce for this call

    Returns:
        Ids of the created issues, in creation order (dependencies
        first, see order_by_dependency). Tasks the tracker rejects are
        logged and left out.

    Raises:
        TaskImportError: If the file can't be loaded
        TaskValidationError: If policy errors exist and enforcement applies
    """
    tasks = load_proposed_tasks(path)
    if not tasks:
        return []

    result = validate_proposed_tasks(tasks, max_requirements)
    for warning in result.warnings:
        logger.warning(warning)

    if result.has_errors():
        if enforce and not skip_enforcement:
            raise TaskValidationError(result.errors)
        for error in result.errors:
            logger.warning(f"Ignoring policy error: {error}")

    ids = []
    for task in order_by_dependency(tasks):
        try:
            issue_id = tracker.create_issue(task)
        except Exception as e:
            logger.error(f"Failed to create issue for task {task.index} \"{task.title}\": {e}")
            continue
        logger.info(f"Created issue {issue_id} for task {task.index}")
        ids.append(issue_id)

    return ids
