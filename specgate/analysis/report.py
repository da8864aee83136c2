"""
Analysis snapshot: the merged consistency result and code status report,
persisted as YAML for downstream planning.

  consistency_errors: 2
  consistency_details: [...]
  defects: [...]
  code_status:
    releases: [...]
    gaps: [...]
"""

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from specgate.analysis.codestatus import (
    CodeStatusReport,
    ReleaseCodeStatus,
    UseCaseCodeStatus,
    format_code_status_report,
)
from specgate.analysis.consistency import ConsistencyResult
from specgate.lib.validate import validate_before_write

logger = logging.getLogger(__name__)


@dataclass
class AnalysisSnapshot:
    consistency_errors: int = 0
    consistency_details: list[str] = field(default_factory=list)
    defects: list[str] = field(default_factory=list)
    code_status: Optional[CodeStatusReport] = None

    def total_issues(self) -> int:
        """Consistency errors plus spec-vs-code gaps. Defects are not counted."""
        gaps = len(self.code_status.gaps) if self.code_status else 0
        return self.consistency_errors + gaps

    def to_dict(self) -> dict:
        return {
            "consistency_errors": self.consistency_errors,
            "consistency_details": list(self.consistency_details),
            "defects": list(self.defects),
            "code_status": asdict(self.code_status) if self.code_status else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisSnapshot":
        code_status = None
        raw = data.get("code_status")
        if raw:
            code_status = CodeStatusReport(
                releases=[
                    ReleaseCodeStatus(
                        version=r["version"],
                        name=r.get("name", ""),
                        spec_status=r["spec_status"],
                        code_readiness=r["code_readiness"],
                        use_cases=[UseCaseCodeStatus(**uc) for uc in r.get("use_cases") or []],
                    )
                    for r in raw.get("releases") or []
                ],
                gaps=list(raw.get("gaps") or []),
            )
        return cls(
            consistency_errors=data.get("consistency_errors", 0),
            consistency_details=list(data.get("consistency_details") or []),
            defects=list(data.get("defects") or []),
            code_status=code_status,
        )


def assemble_snapshot(result: ConsistencyResult, code_status: Optional[CodeStatusReport]) -> AnalysisSnapshot:
    """Merge analyzer and reconciler output."""
    return AnalysisSnapshot(
        consistency_errors=result.consistency_errors(),
        consistency_details=result.consistency_details(),
        defects=result.defects(),
        code_status=code_status,
    )


def write_snapshot(snapshot: AnalysisSnapshot, path: Path) -> None:
    """Validate and write the snapshot, creating parent directories.

    Raises:
        ValidationError: If the snapshot doesn't match the analysis schema
    """
    data = snapshot.to_dict()
    validate_before_write(data, "analysis", path)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True))
    logger.debug(f"Wrote analysis snapshot to {path}")


def load_snapshot(path: Path) -> Optional[AnalysisSnapshot]:
    """Load a snapshot written by write_snapshot.

    Returns None if the file doesn't exist or can't be read or parsed.
    """
    if not path.exists():
        return None
    if path.is_dir():
        logger.warning(f"Analysis snapshot path {path} is a directory")
        return None

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to read analysis snapshot {path}: {e}")
        return None
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse analysis snapshot {path}: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Analysis snapshot {path} is not a mapping")
        return None

    try:
        return AnalysisSnapshot.from_dict(data)
    except (KeyError, TypeError) as e:
        logger.warning(f"Failed to load analysis snapshot {path}: {e}")
        return None


def format_snapshot(snapshot: AnalysisSnapshot) -> str:
    """Render a snapshot for the terminal."""
    lines = [f"Consistency errors: {snapshot.consistency_errors}"]
    lines.extend(f"  - {d}" for d in snapshot.consistency_details)

    lines.append("")
    lines.append(f"Defects: {len(snapshot.defects)}")
    lines.extend(f"  - {d}" for d in snapshot.defects)

    lines.append("")
    if snapshot.code_status is not None:
        lines.append(format_code_status_report(snapshot.code_status))
    else:
        lines.append("Code status: unavailable (no roadmap)")

    return "\n".join(lines)
