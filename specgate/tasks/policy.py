"""
Task validation policy.

Checks proposed tasks against structural policies before they are imported:

- P9: requirement count must fall in the range for the deliverable type
- an optional absolute cap on requirements per task
- P7: a file must not be named after its parent directory
- minimum acceptance criteria and design decisions per deliverable type
- a dependency must name another task in the same batch (warning)

Every task is checked; errors and warnings accumulate into one result.
"""

import logging
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Optional

import yaml

from specgate.lib.validate import ValidationError, validate
from specgate.tasks.models import ProposedTask, TaskDescription

logger = logging.getLogger(__name__)

DEFAULT_DELIVERABLE_TYPE = "code"


@dataclass(frozen=True)
class CountRange:
    low: int
    high: int

    def contains(self, n: int) -> bool:
        return self.low <= n <= self.high

    def __str__(self) -> str:
        return f"{self.low}-{self.high}"


@dataclass(frozen=True)
class DeliverableProfile:
    requirements: CountRange                   # hard range (error)
    min_acceptance_criteria: int               # hard minimum (error)
    acceptance_criteria: CountRange            # expected range (warning)
    min_design_decisions: int = 0
    design_decisions: Optional[CountRange] = None


DELIVERABLE_PROFILES = {
    "code": DeliverableProfile(
        requirements=CountRange(5, 8),
        min_acceptance_criteria=1,
        acceptance_criteria=CountRange(5, 8),
        min_design_decisions=1,
        design_decisions=CountRange(3, 5),
    ),
    "documentation": DeliverableProfile(
        requirements=CountRange(2, 4),
        min_acceptance_criteria=1,
        acceptance_criteria=CountRange(3, 5),
    ),
}


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def has_errors(self) -> bool:
        """Warnings never gate import."""
        return bool(self.errors)


def parse_task_description(text: str) -> TaskDescription:
    """Parse a task description YAML document.

    Raises:
        ValueError: If the text is not YAML or doesn't match the
            task_description schema
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"invalid YAML: {e}") from e

    if data is None:
        data = {}
    try:
        validate(data, "task_description")
    except ValidationError as e:
        raise ValueError(str(e)) from e

    files = []
    for entry in data.get("files") or []:
        files.append(entry["path"] if isinstance(entry, dict) else entry)

    return TaskDescription(
        deliverable_type=str(data.get("deliverable_type") or ""),
        files=files,
        requirements=list(data.get("requirements") or []),
        acceptance_criteria=list(data.get("acceptance_criteria") or []),
        design_decisions=list(data.get("design_decisions") or []),
    )


def is_named_after_directory(path: str) -> bool:
    """pkg/foo/foo.go -> True, pkg/foo/bar.go -> False."""
    p = PurePosixPath(path)
    return bool(p.parent.name) and p.stem == p.parent.name


def _check_task(task: ProposedTask, max_requirements: int, result: ValidationResult) -> None:
    label = f'task {task.index} "{task.title}"'

    try:
        desc = parse_task_description(task.description)
    except ValueError as e:
        result.warnings.append(f"{label}: could not parse description: {e}")
        return

    dtype = desc.deliverable_type or DEFAULT_DELIVERABLE_TYPE
    profile = DELIVERABLE_PROFILES.get(dtype)
    if profile is None:
        result.warnings.append(
            f"{label}: unknown deliverable type {dtype!r}, checking as {DEFAULT_DELIVERABLE_TYPE}"
        )
        profile = DELIVERABLE_PROFILES[DEFAULT_DELIVERABLE_TYPE]

    n_req = len(desc.requirements)
    if not profile.requirements.contains(n_req):
        result.errors.append(
            f"{label}: {dtype} deliverable has {n_req} requirements, "
            f"P9 range is {profile.requirements}"
        )

    if max_requirements > 0 and n_req > max_requirements:
        result.errors.append(
            f"{label}: {n_req} requirements exceeds limit (max is {max_requirements})"
        )

    for path in desc.files:
        if is_named_after_directory(path):
            result.errors.append(f"{label}: file {path} is named after its directory (P7 violation)")

    n_ac = len(desc.acceptance_criteria)
    if n_ac < profile.min_acceptance_criteria:
        result.errors.append(f"{label}: {dtype} deliverable has no acceptance criteria")
    elif not profile.acceptance_criteria.contains(n_ac):
        result.warnings.append(
            f"{label}: {dtype} deliverable has {n_ac} acceptance criteria, "
            f"expected {profile.acceptance_criteria}"
        )

    n_dd = len(desc.design_decisions)
    if n_dd < profile.min_design_decisions:
        result.errors.append(f"{label}: {dtype} deliverable has no design decisions")
    elif profile.design_decisions and not profile.design_decisions.contains(n_dd):
        result.warnings.append(
            f"{label}: {dtype} deliverable has {n_dd} design decisions, "
            f"expected {profile.design_decisions}"
        )


def _check_dependency(task: ProposedTask, indexes: set[int], result: ValidationResult) -> None:
    if task.dependency is None:
        return
    if task.dependency == task.index or task.dependency not in indexes:
        result.warnings.append(
            f'task {task.index} "{task.title}": dependency {task.dependency} is not another task in this batch'
        )


def validate_proposed_tasks(tasks: list[ProposedTask], max_requirements: int = 0) -> ValidationResult:
    """Check every task and return the combined result.

    Args:
        tasks: Proposed tasks, in order
        max_requirements: Absolute requirement cap per task (0 = no cap)
    """
    result = ValidationResult()
    indexes = {t.index for t in tasks}
    for task in tasks:
        _check_task(task, max_requirements, result)
        _check_dependency(task, indexes, result)

    logger.debug(
        f"Validated {len(tasks)} tasks: {len(result.errors)} errors, "
        f"{len(result.warnings)} warnings"
    )
    return result
