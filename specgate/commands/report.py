"""
specgate report - Show the last recorded analysis snapshot.
"""

from specgate.analysis.report import format_snapshot, load_snapshot
from specgate.lib.config import ProjectConfig


def cmd_report(args, config: ProjectConfig) -> int:
    path = config.snapshot_file
    snapshot = load_snapshot(path)
    if snapshot is None:
        print(f"ERROR: No analysis snapshot at {config.relative(path)}. Run 'specgate analyze' first.")
        return 2

    print(format_snapshot(snapshot))
    print()
    print(f"Total issues: {snapshot.total_issues()}")
    return 0
