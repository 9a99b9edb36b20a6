"""Data models for roadmaps, commits and configuration."""

from roadmapkit.models.commit import CommitInfo, CommitStats, CommitTags
from roadmapkit.models.config import ScanConfig, Settings
from roadmapkit.models.roadmap import (
    Feature,
    Priority,
    ProjectInfo,
    Roadmap,
    Task,
    TaskGitInfo,
    TaskMetrics,
    TaskStatus,
    TechnicalDebt,
)

__all__ = [
    "CommitInfo",
    "CommitStats",
    "CommitTags",
    "ScanConfig",
    "Settings",
    "Feature",
    "Priority",
    "ProjectInfo",
    "Roadmap",
    "Task",
    "TaskGitInfo",
    "TaskMetrics",
    "TaskStatus",
    "TechnicalDebt",
]
