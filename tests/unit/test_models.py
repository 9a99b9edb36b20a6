"""Unit tests for roadmap and configuration models."""

from datetime import datetime, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from roadmapkit.models import CommitInfo, Roadmap, ScanConfig, Settings, Task


class TestRoadmapModels:
    """Tests for roadmap document models."""

    def test_minimal_task_gets_defaults(self):
        """Test that missing sub-records are filled in."""
        task = Task.model_validate({"id": "t1"})

        assert task.status == "pending"
        assert task.priority == "medium"
        assert task.affected_files == []
        assert task.technical_debt == []
        assert task.metrics.complexity_score == 0
        assert task.git.commits == []
        assert task.git.last_commit is None

    def test_null_sub_records_are_tolerated(self):
        """Test explicit nulls for git, metrics and lists."""
        task = Task.model_validate(
            {"id": "t1", "git": None, "metrics": None, "affected_files": None, "technical_debt": None}
        )

        assert task.git.commits == []
        assert task.metrics.lines_added == 0
        assert task.affected_files == []
        assert task.technical_debt == []

    def test_invalid_status_rejected(self):
        """Test that unknown task statuses fail validation."""
        with pytest.raises(ValidationError):
            Task.model_validate({"id": "t1", "status": "archived"})

    def test_unknown_fields_round_trip(self):
        """Test fields owned by other tools survive a dump."""
        data = {
            "project_info": {
                "name": "Shop",
                "last_sync": "2024-01-15T10:30:00Z",
                "shared_resources": {"ui_components": [{"path": "src/Button.jsx"}]},
            },
            "features": [
                {
                    "id": "f1",
                    "tasks": [
                        {
                            "id": "t1",
                            "ai_notes": "reuse Button",
                            "assigned_to": "u1",
                            "git": {"branch": "feat/t1", "commits": []},
                        }
                    ],
                }
            ],
        }

        dumped = Roadmap.model_validate(data).model_dump(mode="json")

        assert dumped["project_info"]["shared_resources"] == data["project_info"]["shared_resources"]
        assert dumped["features"][0]["tasks"][0]["ai_notes"] == "reuse Button"
        assert dumped["features"][0]["tasks"][0]["assigned_to"] == "u1"
        assert dumped["features"][0]["tasks"][0]["git"]["branch"] == "feat/t1"

    def test_enum_values_serialize_as_strings(self):
        """Test statuses and priorities are dumped as plain strings."""
        dumped = Task(id="t1").model_dump(mode="json")

        assert dumped["status"] == "pending"
        assert dumped["priority"] == "medium"

    def test_last_sync_parsed_as_datetime(self):
        """Test ISO-8601 watermarks with a Z suffix."""
        roadmap = Roadmap.model_validate({"project_info": {"last_sync": "2024-01-15T10:30:00.000Z"}})

        assert roadmap.project_info.last_sync == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_iter_tasks(self):
        """Test tasks are yielded with their feature in document order."""
        roadmap = Roadmap.model_validate(
            {"features": [{"id": "a", "tasks": [{"id": "1"}, {"id": "2"}]}, {"id": "b", "tasks": [{"id": "3"}]}]}
        )

        assert [(f.id, t.id) for f, t in roadmap.iter_tasks()] == [("a", "1"), ("a", "2"), ("b", "3")]


class TestConfig:
    """Tests for scan configuration and settings."""

    def test_scan_config_defaults(self):
        """Test default scan configuration values."""
        config = ScanConfig(project_root=Path("/tmp/project"))

        assert config.max_commits == 50
        assert config.branch == "HEAD"
        assert config.roadmap_path == Path("/tmp/project/roadmap.json")

    def test_scan_config_rejects_zero_commits(self):
        """Test the commit cap must be positive."""
        with pytest.raises(ValidationError):
            ScanConfig(project_root=Path("."), max_commits=0)

    def test_settings_from_environment(self, monkeypatch):
        """Test ROADMAP_ prefixed environment variables."""
        monkeypatch.setenv("ROADMAP_MAX_COMMITS", "7")
        monkeypatch.setenv("ROADMAP_ROADMAP_FILENAME", "plan.json")

        settings = Settings()
        config = ScanConfig.from_settings(Path("/tmp/project"), settings)

        assert config.max_commits == 7
        assert config.roadmap_path == Path("/tmp/project/plan.json")


@pytest.mark.parametrize("model", [CommitInfo, ScanConfig, Roadmap])
def test_schema_examples_use_model_config(model):
    """Test schema examples are declared through ConfigDict."""
    assert "Config" not in vars(model)
    assert "example" in model.model_json_schema()
