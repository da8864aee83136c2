"""
Pre-cycle analysis: the full load -> analyze -> reconcile -> snapshot pass
run before each planning cycle.
"""

import logging

from specgate.analysis.codestatus import RoadmapMissingError, reconcile
from specgate.analysis.consistency import analyze_consistency
from specgate.analysis.report import AnalysisSnapshot, assemble_snapshot, write_snapshot
from specgate.lib.config import ProjectConfig
from specgate.specs.constitution import detect_constitution_drift
from specgate.specs.index import ReferenceIndex
from specgate.specs.loader import load_document_set

logger = logging.getLogger(__name__)


def run_precycle_analysis(config: ProjectConfig, write: bool = True) -> AnalysisSnapshot:
    """Analyze the project's spec documents and record a snapshot.

    A missing roadmap leaves code_status empty; the snapshot is still
    produced and written.
    """
    docs = load_document_set(config)
    index = ReferenceIndex.build(docs)
    drift = detect_constitution_drift(config.constitutions_path)

    result = analyze_consistency(docs, index, drift)

    try:
        code_status = reconcile(docs.roadmap, config.tests_path, config.test_file_suffixes)
    except RoadmapMissingError as e:
        logger.warning(f"Skipping code status: {e}")
        code_status = None

    snapshot = assemble_snapshot(result, code_status)

    if write:
        write_snapshot(snapshot, config.snapshot_file)

    return snapshot
