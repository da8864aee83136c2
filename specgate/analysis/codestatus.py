"""
Code status reconciler.

Compares the status the roadmap declares for each release and use case
against implementation evidence: test files under

  tests/rel<version>/uc<number>/

Gaps are reported, never raised. The only failure is a missing roadmap.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from specgate.lib.constants import (
    CODE_IMPLEMENTED,
    CODE_NOT_STARTED,
    READINESS_ALL,
    READINESS_NONE,
    READINESS_PARTIAL,
    STATUS_DONE,
    STATUS_IN_PROGRESS,
    USE_CASE_ID_PATTERN,
)
from specgate.specs.models import Roadmap

logger = logging.getLogger(__name__)


class RoadmapMissingError(Exception):
    """No usable roadmap, so no status can be computed."""


@dataclass
class UseCaseCodeStatus:
    id: str
    spec_status: str                           # from the roadmap
    code_status: str                           # "implemented" or "not started"
    test_dir: str = ""                         # evidence dir, set when implemented
    test_files: int = 0


@dataclass
class ReleaseCodeStatus:
    version: str
    name: str
    spec_status: str
    code_readiness: str                        # "all implemented", "partial", "none"
    use_cases: list[UseCaseCodeStatus] = field(default_factory=list)


@dataclass
class CodeStatusReport:
    releases: list[ReleaseCodeStatus] = field(default_factory=list)
    gaps: list[str] = field(default_factory=list)


def use_case_prefix(uc_id: str) -> str:
    """rel01.0-uc001-orchestrator-initialization -> rel01.0-uc001. "" if no match."""
    m = USE_CASE_ID_PATTERN.match(uc_id)
    return m.group(0) if m else ""


def evidence_dir_for(uc_id: str) -> Optional[str]:
    """rel01.0-uc001-name -> tests/rel01.0/uc001. None if the id has no prefix."""
    m = USE_CASE_ID_PATTERN.match(uc_id)
    if not m:
        return None
    return f"tests/rel{m.group(1)}/uc{m.group(2)}"


def count_test_files(directory: Path, suffixes: Iterable[str]) -> int:
    """Count regular files in directory (not recursive) ending in one of suffixes."""
    suffixes = tuple(suffixes)
    try:
        entries = list(directory.iterdir())
    except OSError:
        return 0
    return sum(1 for e in entries if e.is_file() and e.name.endswith(suffixes))


def _subdirs(directory: Path, prefix: str) -> list[Path]:
    """Sorted child directories named prefix*. Unreadable directory -> []."""
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        logger.warning(f"Skipping unreadable evidence directory {directory}: {e}")
        return []
    return [e for e in entries if e.name.startswith(prefix) and e.is_dir()]


def scan_evidence(tests_root: Path, suffixes: Iterable[str]) -> dict[str, int]:
    """Map use-case prefix (rel01.0-uc001) -> test file count.

    Only rel*/uc* directories are considered; directories with no test
    files are left out. A missing root yields {}, and an unreadable
    directory is skipped.
    """
    suffixes = tuple(suffixes)
    result: dict[str, int] = {}
    if not tests_root.is_dir():
        logger.debug(f"No evidence tree at {tests_root}")
        return result

    for rel_dir in _subdirs(tests_root, "rel"):
        for uc_dir in _subdirs(rel_dir, "uc"):
            count = count_test_files(uc_dir, suffixes)
            if count > 0:
                result[f"{rel_dir.name}-{uc_dir.name}"] = count
    return result


def compute_code_status(roadmap: Roadmap, evidence: dict[str, int]) -> CodeStatusReport:
    """Pair each planned use case's spec status with its code status.

    Releases with no use cases are skipped. Gaps are not filled in here.
    """
    report = CodeStatusReport()

    for release in roadmap.releases:
        if not release.use_cases:
            continue

        statuses = []
        for uc in release.use_cases:
            prefix = use_case_prefix(uc.id)
            count = evidence.get(prefix, 0) if prefix else 0
            if count > 0:
                statuses.append(UseCaseCodeStatus(
                    id=uc.id,
                    spec_status=uc.status,
                    code_status=CODE_IMPLEMENTED,
                    test_dir=evidence_dir_for(uc.id) or "",
                    test_files=count,
                ))
            else:
                statuses.append(UseCaseCodeStatus(
                    id=uc.id,
                    spec_status=uc.status,
                    code_status=CODE_NOT_STARTED,
                ))

        implemented = sum(1 for s in statuses if s.code_status == CODE_IMPLEMENTED)
        if implemented == len(statuses):
            readiness = READINESS_ALL
        elif implemented > 0:
            readiness = READINESS_PARTIAL
        else:
            readiness = READINESS_NONE

        report.releases.append(ReleaseCodeStatus(
            version=release.version,
            name=release.name,
            spec_status=release.status,
            code_readiness=readiness,
            use_cases=statuses,
        ))

    return report


def detect_spec_code_gaps(report: CodeStatusReport) -> list[str]:
    """Find places where the roadmap says done but the evidence disagrees."""
    gaps = []
    for rel in report.releases:
        if rel.spec_status == STATUS_DONE and rel.code_readiness != READINESS_ALL:
            gaps.append(
                f'release {rel.version}: spec status is "{rel.spec_status}" '
                f'but code readiness is "{rel.code_readiness}"'
            )
        for uc in rel.use_cases:
            if uc.spec_status == STATUS_DONE and uc.code_status == CODE_NOT_STARTED:
                gaps.append(f'{uc.id}: spec status is "{uc.spec_status}" but no test files found')
    return gaps


def reconcile(roadmap: Optional[Roadmap], tests_root: Path, suffixes: Iterable[str]) -> CodeStatusReport:
    """Scan evidence, compute status, and attach gaps.

    Raises:
        RoadmapMissingError: If roadmap is None
    """
    if roadmap is None:
        raise RoadmapMissingError("cannot compute code status: roadmap is missing or unreadable")

    report = compute_code_status(roadmap, scan_evidence(tests_root, suffixes))
    report.gaps = detect_spec_code_gaps(report)
    if report.gaps:
        logger.info(f"Found {len(report.gaps)} spec-vs-code gap(s)")
    return report


def status_icon(status: str) -> str:
    """Short visual marker for a spec, code or readiness status."""
    if status in (STATUS_DONE, CODE_IMPLEMENTED, READINESS_ALL):
        return "[ok]"
    if status in (READINESS_PARTIAL, STATUS_IN_PROGRESS):
        return "[~~]"
    if status in (CODE_NOT_STARTED, READINESS_NONE):
        return "[  ]"
    return "[??]"


def format_code_status_report(report: CodeStatusReport) -> str:
    """Render the report for the terminal."""
    lines = ["Code Status Report", "=" * 18]

    for rel in report.releases:
        lines.append("")
        lines.append(f"Release {rel.version} - {rel.name}" if rel.name else f"Release {rel.version}")
        lines.append(f"  Spec status:    {rel.spec_status}")
        lines.append(f"  Code readiness: {rel.code_readiness}")
        for uc in rel.use_cases:
            line = f"    {status_icon(uc.spec_status)} spec  {status_icon(uc.code_status)} code  {uc.id}"
            if uc.test_files > 0:
                line += f" ({uc.test_files} test files)"
            lines.append(line)

    lines.append("")
    if report.gaps:
        lines.append("Gaps between specification and code:")
        lines.extend(f"  - {gap}" for gap in report.gaps)
    else:
        lines.append("No gaps between specification and code.")

    return "\n".join(lines)
