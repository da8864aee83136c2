"""Tests for the specgate CLI entrypoint and commands."""

import pytest
import yaml

from specgate.cli import main
from specgate.specs.constitution import get_canonical_dir


def run(tmp_path, *argv):
    return main(["--root", str(tmp_path), *argv])


def add_evidence(tmp_path):
    d = tmp_path / "tests" / "rel01.0" / "uc001"
    d.mkdir(parents=True)
    (d / "init_test.go").write_text("")


class TestAnalyze:
    def test_clean_project_passes(self, tmp_path, spec_tree, capsys):
        add_evidence(tmp_path)

        assert run(tmp_path, "analyze") == 0

        out = capsys.readouterr().out
        assert "Consistency errors: 0" in out
        assert "Snapshot written to .specgate/analysis.yaml" in out
        assert "OK" in out

    def test_gaps_fail(self, tmp_path, spec_tree, capsys):
        assert run(tmp_path, "analyze") == 1
        assert "FAILED: 1 issue(s)" in capsys.readouterr().out

    def test_no_write(self, tmp_path, spec_tree):
        add_evidence(tmp_path)
        run(tmp_path, "analyze", "--no-write")
        assert not (tmp_path / ".specgate").exists()

    def test_bad_config_exits_2(self, tmp_path, capsys):
        (tmp_path / "specgate.yaml").write_text("not_a_key: 1\n")

        with pytest.raises(SystemExit) as exc_info:
            run(tmp_path, "analyze")

        assert exc_info.value.code == 2
        assert "ERROR: Invalid config" in capsys.readouterr().out


class TestCodeStatus:
    def test_missing_roadmap(self, tmp_path, capsys):
        assert run(tmp_path, "code-status") == 2
        assert "roadmap is missing" in capsys.readouterr().out

    def test_reports_gaps(self, tmp_path, spec_tree, capsys):
        assert run(tmp_path, "code-status") == 1
        assert "no test files found" in capsys.readouterr().out

    def test_all_implemented(self, tmp_path, spec_tree):
        add_evidence(tmp_path)
        assert run(tmp_path, "code-status") == 0


class TestCheckTasks:
    def write_tasks(self, tmp_path, requirements):
        desc = yaml.safe_dump({
            "deliverable_type": "code",
            "requirements": [{"id": f"R{i}"} for i in range(1, requirements + 1)],
            "acceptance_criteria": [{"id": f"AC{i}"} for i in range(1, 6)],
            "design_decisions": [{"id": f"D{i}"} for i in range(1, 4)],
        })
        path = tmp_path / "tasks.yaml"
        path.write_text(yaml.safe_dump([{"index": 0, "title": "Task", "description": desc}]))
        return path

    def test_valid(self, tmp_path, capsys):
        path = self.write_tasks(tmp_path, 5)
        assert run(tmp_path, "check-tasks", str(path)) == 0
        assert "OK" in capsys.readouterr().out

    def test_errors_fail(self, tmp_path, capsys):
        path = self.write_tasks(tmp_path, 2)
        assert run(tmp_path, "check-tasks", str(path)) == 1
        assert "P9 range is 5-8" in capsys.readouterr().out

    def test_skip_enforcement(self, tmp_path):
        path = self.write_tasks(tmp_path, 2)
        assert run(tmp_path, "check-tasks", str(path), "--skip-enforcement") == 0

    def test_enforcement_disabled_in_config(self, tmp_path):
        (tmp_path / "specgate.yaml").write_text("enforce_task_validation: false\n")
        path = self.write_tasks(tmp_path, 2)
        assert run(tmp_path, "check-tasks", str(path)) == 0

    def test_cap_from_flag(self, tmp_path, capsys):
        path = self.write_tasks(tmp_path, 6)
        assert run(tmp_path, "check-tasks", str(path), "--max-requirements", "5") == 1
        assert "max is 5" in capsys.readouterr().out

    def test_cap_from_config(self, tmp_path):
        (tmp_path / "specgate.yaml").write_text("max_requirements_per_task: 5\n")
        path = self.write_tasks(tmp_path, 6)
        assert run(tmp_path, "check-tasks", str(path)) == 1

    def test_unreadable_file(self, tmp_path, capsys):
        assert run(tmp_path, "check-tasks", str(tmp_path / "nope.yaml")) == 2
        assert "ERROR:" in capsys.readouterr().out


class TestConstitution:
    def test_preview(self, tmp_path, capsys):
        assert run(tmp_path, "constitution", "preview", str(get_canonical_dir() / "design.yaml")) == 0
        assert capsys.readouterr().out.startswith("## Core Principles\n\n")

    def test_preview_bad_file(self, tmp_path):
        assert run(tmp_path, "constitution", "preview", str(tmp_path / "nope.yaml")) == 2

    def test_drift(self, tmp_path, capsys):
        const_dir = tmp_path / "docs" / "constitutions"
        const_dir.mkdir(parents=True)
        (const_dir / "execution.yaml").write_text("id: execution\n")

        assert run(tmp_path, "constitution", "drift") == 1
        assert "execution.yaml" in capsys.readouterr().out

    def test_no_drift(self, tmp_path, capsys):
        assert run(tmp_path, "constitution", "drift") == 0
        assert "No constitution drift." in capsys.readouterr().out


class TestReport:
    def test_without_snapshot(self, tmp_path, capsys):
        assert run(tmp_path, "report") == 2
        assert "Run 'specgate analyze' first" in capsys.readouterr().out

    def test_after_analyze(self, tmp_path, spec_tree, capsys):
        run(tmp_path, "analyze")
        capsys.readouterr()

        assert run(tmp_path, "report") == 0
        assert "Total issues: 1" in capsys.readouterr().out
