"""
specgate analyze - Run pre-cycle analysis and record a snapshot.
"""

from specgate.analysis.precycle import run_precycle_analysis
from specgate.analysis.report import format_snapshot
from specgate.lib.config import ProjectConfig


def cmd_analyze(args, config: ProjectConfig) -> int:
    """Analyze spec documents; exit 1 on consistency errors or gaps."""
    snapshot = run_precycle_analysis(config, write=not args.no_write)

    print(format_snapshot(snapshot))
    print()
    if not args.no_write:
        print(f"Snapshot written to {config.relative(config.snapshot_file)}")

    total = snapshot.total_issues()
    if total:
        print(f"FAILED: {total} issue(s)")
        return 1

    print("OK")
    return 0
