"""
Proposed task validation and import.
"""

from specgate.tasks.models import ProposedTask, TaskDescription
from specgate.tasks.policy import (
    DELIVERABLE_PROFILES,
    CountRange,
    DeliverableProfile,
    ValidationResult,
    parse_task_description,
    validate_proposed_tasks,
)
from specgate.tasks.importer import (
    IssueTracker,
    TaskImportError,
    TaskValidationError,
    import_proposed_tasks,
    load_proposed_tasks,
    order_by_dependency,
)

__all__ = [
    "ProposedTask",
    "TaskDescription",
    "DELIVERABLE_PROFILES",
    "CountRange",
    "DeliverableProfile",
    "ValidationResult",
    "parse_task_description",
    "validate_proposed_tasks",
    "IssueTracker",
    "TaskImportError",
    "TaskValidationError",
    "import_proposed_tasks",
    "load_proposed_tasks",
    "order_by_dependency",
]
