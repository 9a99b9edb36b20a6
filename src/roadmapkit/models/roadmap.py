"""Data models for the roadmap document."""

from datetime import datetime
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskStatus(str, Enum):
    """Lifecycle states a task can be in."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Priority(str, Enum):
    """Priority levels for features and tasks."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RoadmapModel(BaseModel):
    """Base for roadmap models.

    Unknown keys are kept so that fields written by other tools (dashboard,
    AI assistants) survive a load/save round trip.
    """

    model_config = ConfigDict(
        extra="allow",
        use_enum_values=True,
        validate_assignment=True,
        validate_default=True,
    )


class TechnicalDebt(RoadmapModel):
    """A technical debt annotation recorded against a task."""

    description: str = Field(..., description="Free-text description of the debt")
    severity: str = Field("medium", description="Severity: high, medium or low")
    estimated_effort: str = Field("TBD", description="Effort estimate for paying the debt")


class TaskMetrics(RoadmapModel):
    """Cumulative code metrics across every commit linked to a task."""

    lines_added: int = Field(0, ge=0, description="Total lines added")
    lines_removed: int = Field(0, ge=0, description="Total lines removed")
    files_created: int = Field(0, ge=0, description="Total files created")
    files_modified: int = Field(0, ge=0, description="Total files modified")
    complexity_score: int = Field(0, ge=0, le=10, description="Banded complexity (0 until first update)")


class TaskGitInfo(RoadmapModel):
    """Git metadata for a task."""

    branch: Optional[str] = Field(None, description="Working branch")
    pr_number: Optional[Union[int, str]] = Field(None, description="Pull request number")
    pr_url: Optional[str] = Field(None, description="Pull request URL")
    last_commit: Optional[str] = Field(None, description="Hash of the most recently applied commit")
    commits: List[str] = Field(default_factory=list, description="Hashes of every applied commit")

    @field_validator("commits", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value


class Task(RoadmapModel):
    """The atomic unit of work, referenced from commit messages by its id."""

    id: str = Field(..., description="Task id, unique within the roadmap")
    name: str = Field("", description="Short task name")
    description: str = Field("", description="Task description")
    status: TaskStatus = Field(TaskStatus.PENDING, description="Current status")
    priority: Priority = Field(Priority.MEDIUM, description="Task priority")
    started_at: Optional[datetime] = Field(None, description="First transition into in_progress")
    completed_at: Optional[datetime] = Field(None, description="First transition into completed")
    affected_files: List[str] = Field(default_factory=list, description="Files touched by linked commits")
    metrics: TaskMetrics = Field(default_factory=TaskMetrics)
    technical_debt: List[TechnicalDebt] = Field(default_factory=list)
    git: TaskGitInfo = Field(default_factory=TaskGitInfo)

    @field_validator("affected_files", "technical_debt", mode="before")
    @classmethod
    def _none_as_empty_list(cls, value):
        return [] if value is None else value

    @field_validator("metrics", "git", mode="before")
    @classmethod
    def _none_as_empty_record(cls, value):
        # Hand-edited roadmaps sometimes carry explicit nulls here
        return {} if value is None else value


class Feature(RoadmapModel):
    """A group of related tasks with its own completion percentage."""

    id: str = Field(..., description="Feature id, unique within the roadmap")
    name: str = Field("", description="Feature name")
    description: str = Field("", description="Feature description")
    priority: Priority = Field(Priority.MEDIUM, description="Feature priority")
    status: str = Field("pending", description="Feature status")
    progress: int = Field(0, ge=0, le=100, description="Percentage of completed tasks")
    tasks: List[Task] = Field(default_factory=list)

    @field_validator("tasks", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value


class ProjectInfo(RoadmapModel):
    """Project-level metadata and aggregates."""

    name: str = Field("My Project", description="Project name")
    version: str = Field("1.0.0", description="Project version")
    description: str = Field("", description="Project description")
    stack: List[str] = Field(default_factory=list, description="Technologies used")
    total_progress: int = Field(0, ge=0, le=100, description="Mean of feature progress values")
    last_sync: Optional[datetime] = Field(None, description="Watermark of the last successful scan")


class Roadmap(RoadmapModel):
    """Root roadmap document, persisted as a single JSON object."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "project_info": {
                    "name": "shop-api",
                    "version": "1.0.0",
                    "total_progress": 50,
                    "last_sync": "2024-01-15T10:30:00Z",
                },
                "features": [
                    {
                        "id": "auth",
                        "name": "Authentication",
                        "priority": "high",
                        "progress": 50,
                        "tasks": [
                            {"id": "auth-login", "name": "Login endpoint", "status": "completed"},
                            {"id": "auth-logout", "name": "Logout endpoint", "status": "pending"},
                        ],
                    }
                ],
            }
        }
    )

    project_info: ProjectInfo = Field(default_factory=ProjectInfo)
    features: List[Feature] = Field(default_factory=list)

    @field_validator("features", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    def iter_tasks(self) -> Iterator[Tuple[Feature, Task]]:
        """Yield (feature, task) pairs in document order."""
        for feature in self.features:
            for task in feature.tasks:
                yield feature, task
