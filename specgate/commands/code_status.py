"""
specgate code-status - Compare roadmap status against test evidence.
"""

from specgate.analysis.codestatus import RoadmapMissingError, format_code_status_report, reconcile
from specgate.lib.config import ProjectConfig
from specgate.specs.loader import load_roadmap


def cmd_code_status(args, config: ProjectConfig) -> int:
    schema_errors: list[str] = []
    roadmap = load_roadmap(config, schema_errors)
    for err in schema_errors:
        print(f"WARNING: {err}")

    try:
        report = reconcile(roadmap, config.tests_path, config.test_file_suffixes)
    except RoadmapMissingError as e:
        print(f"ERROR: {e}")
        return 2

    print(format_code_status_report(report))
    return 1 if report.gaps else 0
