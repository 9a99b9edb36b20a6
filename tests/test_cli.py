"""Tests for the command-line interface."""

import json

from typer.testing import CliRunner

from conftest import make_feature, make_roadmap
from roadmapkit.cli import app

runner = CliRunner()


def test_init_creates_roadmap(tmp_path):
    """Test init writes roadmap.json."""
    result = runner.invoke(app, ["init", "--path", str(tmp_path)])

    assert result.exit_code == 0
    assert "Roadmap initialized" in result.output
    assert (tmp_path / "roadmap.json").exists()


def test_init_refuses_existing(tmp_path):
    """Test init fails without --force when a roadmap exists."""
    (tmp_path / "roadmap.json").write_text("{}")

    result = runner.invoke(app, ["init", "--path", str(tmp_path)])

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_init_force(tmp_path):
    """Test init --force overwrites."""
    (tmp_path / "roadmap.json").write_text("{}")

    result = runner.invoke(app, ["init", "--path", str(tmp_path), "--force"])

    assert result.exit_code == 0
    assert "features" in json.loads((tmp_path / "roadmap.json").read_text())


def test_scan_updates_roadmap(repo_builder):
    """Test scan applies tagged commits and prints a summary."""
    repo_builder.write_roadmap(make_roadmap([make_feature("f1", ["t1", "t2"])]))
    repo_builder.commit("Initial commit", {"README.md": "# Project\n"})
    repo_builder.commit("[task:t1] [status:completed] done", {"a.py": "a\n"})

    result = runner.invoke(app, ["scan", "--path", str(repo_builder.path)])

    assert result.exit_code == 0
    assert "Updated tasks: 1" in result.output
    assert "Total progress: 50%" in result.output
    assert repo_builder.read_roadmap()["features"][0]["progress"] == 50


def test_scan_not_a_repository(tmp_path):
    """Test scan exits with an error outside a Git repository."""
    result = runner.invoke(app, ["scan", "--path", str(tmp_path)])

    assert result.exit_code == 1
    assert "Not a Git repository" in result.output


def test_scan_missing_roadmap(repo_builder):
    """Test scan suggests init when the roadmap is missing."""
    repo_builder.commit("Initial commit", {"README.md": "# Project\n"})

    result = runner.invoke(app, ["scan", "--path", str(repo_builder.path)])

    assert result.exit_code == 1
    assert "roadmapkit init" in result.output


def test_status_shows_features(tmp_path):
    """Test status prints project and feature progress."""
    roadmap = make_roadmap([make_feature("checkout", ["c1", "c2"])])
    roadmap["project_info"]["total_progress"] = 50
    roadmap["features"][0]["progress"] = 50
    roadmap["features"][0]["tasks"][0]["status"] = "completed"
    (tmp_path / "roadmap.json").write_text(json.dumps(roadmap))

    result = runner.invoke(app, ["status", "--path", str(tmp_path)])

    assert result.exit_code == 0
    assert "Test Project" in result.output
    assert "checkout" in result.output
    assert "1/2" in result.output
    assert "never" in result.output


def test_tasks_filter_by_status(tmp_path):
    """Test tasks --status only lists matching tasks."""
    roadmap = make_roadmap([make_feature("f1", ["alpha", "beta"])])
    roadmap["features"][0]["tasks"][0]["status"] = "completed"
    (tmp_path / "roadmap.json").write_text(json.dumps(roadmap))

    result = runner.invoke(app, ["tasks", "--path", str(tmp_path), "--status", "completed"])

    assert result.exit_code == 0
    assert "alpha" in result.output
    assert "beta" not in result.output
    assert "1 task(s)" in result.output


def test_status_missing_roadmap(tmp_path):
    """Test status fails cleanly without a roadmap."""
    result = runner.invoke(app, ["status", "--path", str(tmp_path)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_invalid_settings_reported(tmp_path, monkeypatch):
    """Test a malformed environment setting gives a clean error."""
    monkeypatch.setenv("ROADMAP_MAX_COMMITS", "abc")

    result = runner.invoke(app, ["status", "--path", str(tmp_path)])

    assert result.exit_code == 1
    assert "Invalid settings" in result.output
    assert not isinstance(result.exception, ValueError)
