#!/usr/bin/env python3
"""specgate CLI entrypoint."""

import sys
import logging
import argparse
from pathlib import Path

from specgate.lib.config import ConfigError, load_project_config
from specgate.commands import analyze as cmd_analyze_module
from specgate.commands import code_status as cmd_code_status_module
from specgate.commands import tasks as cmd_tasks_module
from specgate.commands import constitution as cmd_constitution_module
from specgate.commands import report as cmd_report_module


def get_project_config(args):
    """Load project config from --root / --config."""
    root = Path(args.root).resolve()
    config_path = Path(args.config) if args.config else None
    try:
        return load_project_config(root, config_path)
    except ConfigError as e:
        print(f"ERROR: {e}")
        sys.exit(2)


def cmd_analyze(args):
    return cmd_analyze_module.cmd_analyze(args, get_project_config(args))


def cmd_code_status(args):
    return cmd_code_status_module.cmd_code_status(args, get_project_config(args))


def cmd_check_tasks(args):
    return cmd_tasks_module.cmd_check_tasks(args, get_project_config(args))


def cmd_constitution_preview(args):
    return cmd_constitution_module.cmd_constitution_preview(args, get_project_config(args))


def cmd_constitution_drift(args):
    return cmd_constitution_module.cmd_constitution_drift(args, get_project_config(args))


def cmd_report(args):
    return cmd_report_module.cmd_report(args, get_project_config(args))


def main(argv=None):
    parser = argparse.ArgumentParser(prog='specgate', description='Spec consistency and task policy checks')
    parser.add_argument('--root', '-r', default='.', help='Project root (default: current directory)')
    parser.add_argument('--config', '-c', help='Config file (default: <root>/specgate.yaml)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # specgate analyze
    p_analyze = subparsers.add_parser('analyze', help='Run pre-cycle analysis and write a snapshot')
    p_analyze.add_argument('--no-write', action='store_true', help='Do not write the snapshot')
    p_analyze.set_defaults(func=cmd_analyze)

    # specgate code-status
    p_code = subparsers.add_parser('code-status', help='Compare roadmap status against test evidence')
    p_code.set_defaults(func=cmd_code_status)

    # specgate check-tasks
    p_check = subparsers.add_parser('check-tasks', help='Validate proposed tasks against policy')
    p_check.add_argument('file', help='Proposed tasks YAML file')
    p_check.add_argument('--max-requirements', type=int, default=None,
                         help='Requirement cap per task (default: from config, 0 = no cap)')
    p_check.add_argument('--skip-enforcement', action='store_true',
                         help='Report errors without failing')
    p_check.set_defaults(func=cmd_check_tasks)

    # specgate constitution
    p_const = subparsers.add_parser('constitution', help='Constitution commands')
    const_sub = p_const.add_subparsers(dest='const_command', required=True)

    # specgate constitution preview
    p_preview = const_sub.add_parser('preview', help='Render a constitution file as markdown')
    p_preview.add_argument('file', help='Constitution YAML file')
    p_preview.set_defaults(func=cmd_constitution_preview)

    # specgate constitution drift
    p_drift = const_sub.add_parser('drift', help='Check on-disk constitutions against canonical copies')
    p_drift.set_defaults(func=cmd_constitution_drift)

    # specgate report
    p_report = subparsers.add_parser('report', help='Show the last analysis snapshot')
    p_report.set_defaults(func=cmd_report)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
