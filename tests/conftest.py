"""Shared fixtures: temporary Git repositories with controlled commit dates."""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, Optional, Union

import git
import pytest
import structlog

BASE_DATE = datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


def git_date(when: datetime) -> str:
    """Format a datetime in git's raw "<epoch> <offset>" form."""
    return f"{int(when.timestamp())} +0000"


class RepoBuilder:
    """Builds a Git repository commit by commit."""

    def __init__(self, path: Path):
        self.path = path
        self.repo = git.Repo.init(path)
        self.repo.config_writer().set_value("user", "name", "Test User").release()
        self.repo.config_writer().set_value("user", "email", "test@example.com").release()
        self._next_date = BASE_DATE

    def commit(
        self,
        message: str,
        files: Optional[Dict[str, Union[str, bytes]]] = None,
        when: Optional[datetime] = None,
    ) -> git.Commit:
        """Write files and commit them.

        Args:
            message: Commit message
            files: Mapping of relative path to new content
            when: Author/committer date (defaults to one minute after the previous commit)
        """
        files = files or {}
        for relative_path, content in files.items():
            target = self.path / relative_path
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        if files:
            self.repo.index.add(list(files))

        when = when or self._next_date
        self._next_date = when + timedelta(minutes=1)
        date = git_date(when)
        return self.repo.index.commit(message, author_date=date, commit_date=date)

    def write_roadmap(self, data: dict, filename: str = "roadmap.json") -> Path:
        roadmap_path = self.path / filename
        roadmap_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return roadmap_path

    def read_roadmap(self, filename: str = "roadmap.json") -> dict:
        return json.loads((self.path / filename).read_text(encoding="utf-8"))


def make_roadmap(features=None, last_sync=None) -> dict:
    """Build a raw roadmap document."""
    return {
        "project_info": {
            "name": "Test Project",
            "version": "1.0.0",
            "total_progress": 0,
            "last_sync": last_sync,
        },
        "features": features or [],
    }


def make_feature(feature_id: str, task_ids=(), **extra) -> dict:
    """Build a raw feature document with pending tasks."""
    feature = {
        "id": feature_id,
        "name": f"Feature {feature_id}",
        "priority": "medium",
        "progress": 0,
        "tasks": [{"id": task_id, "name": f"Task {task_id}", "status": "pending"} for task_id in task_ids],
    }
    feature.update(extra)
    return feature


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def repo_builder(tmp_path):
    """Create an empty Git repository for testing."""
    return RepoBuilder(tmp_path / "project")
