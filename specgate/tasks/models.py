"""
Data models for proposed tasks.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ProposedTask:
    """A work item proposed by the planner, before it reaches the tracker.

    The description is itself a YAML document (see TaskDescription).
    """
    index: int                                 # position in the proposal file
    title: str
    description: str                           # YAML text
    dependency: Optional[int] = None           # index of a task this one waits on


@dataclass
class TaskDescription:
    """Structured content of a task description."""
    deliverable_type: str = ""                 # "code", "documentation", "" if unset
    files: list[str] = field(default_factory=list)
    requirements: list = field(default_factory=list)
    acceptance_criteria: list = field(default_factory=list)
    design_decisions: list = field(default_factory=list)
