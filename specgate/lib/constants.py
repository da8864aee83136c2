"""Shared constants for specgate."""

import re

# Roadmap status vocabulary
STATUS_DONE = "done"
STATUS_IN_PROGRESS = "in progress"
STATUS_NOT_STARTED = "not started"
STATUSES = (STATUS_DONE, STATUS_IN_PROGRESS, STATUS_NOT_STARTED)

# Code status vocabulary
CODE_IMPLEMENTED = "implemented"
CODE_NOT_STARTED = "not started"

READINESS_ALL = "all implemented"
READINESS_PARTIAL = "partial"
READINESS_NONE = "none"

# rel01.0-uc001-orchestrator-initialization -> ("01.0", "001")
USE_CASE_ID_PATTERN = re.compile(r'^rel(\d+\.\d+)-uc(\d+)')

CONFIG_FILE_NAME = "specgate.yaml"
SNAPSHOT_FILE_NAME = "analysis.yaml"

SPEC_FILE_SUFFIXES = (".yaml", ".yml")


def normalize_status(status: str | None) -> str:
    """Map accepted status spellings onto the closed vocabulary.

    "In_Progress", "in-progress" -> "in progress". Missing status means
    not started. Unknown spellings come back normalized but outside
    STATUSES.
    """
    if not status:
        return STATUS_NOT_STARTED
    return re.sub(r'[\s_-]+', ' ', status.strip().lower())


def release_key(version: str) -> str:
    """Normalize a release identifier so rel01.0 and 01.0 compare equal."""
    version = version.strip()
    if version.startswith("rel"):
        return version[3:]
    return version
