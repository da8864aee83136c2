"""
Analysis passes over loaded spec documents.

Consistency analysis (graph integrity), code status reconciliation
(roadmap vs. test evidence), and the snapshot that merges both.
"""

from specgate.analysis.consistency import ConsistencyResult, analyze_consistency
from specgate.analysis.codestatus import (
    CodeStatusReport,
    ReleaseCodeStatus,
    RoadmapMissingError,
    UseCaseCodeStatus,
    compute_code_status,
    detect_spec_code_gaps,
    reconcile,
    scan_evidence,
)
from specgate.analysis.report import (
    AnalysisSnapshot,
    assemble_snapshot,
    load_snapshot,
    write_snapshot,
)
from specgate.analysis.precycle import run_precycle_analysis

__all__ = [
    "ConsistencyResult",
    "analyze_consistency",
    "CodeStatusReport",
    "ReleaseCodeStatus",
    "RoadmapMissingError",
    "UseCaseCodeStatus",
    "compute_code_status",
    "detect_spec_code_gaps",
    "reconcile",
    "scan_evidence",
    "AnalysisSnapshot",
    "assemble_snapshot",
    "load_snapshot",
    "write_snapshot",
    "run_precycle_analysis",
]
