"""Data models for Git commit information."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from roadmapkit.models.roadmap import TaskStatus


class CommitStats(BaseModel):
    """Diff summary of a commit against its first parent."""

    lines_added: int = Field(0, description="Lines added in non-binary files")
    lines_removed: int = Field(0, description="Lines removed in non-binary files")
    files_created: int = Field(0, description="Non-binary files with no deleted lines")
    files_modified: int = Field(0, description="Non-binary files with at least one deleted line")
    files: List[str] = Field(default_factory=list, description="Every path in the diff, binary included")

    @classmethod
    def empty(cls) -> "CommitStats":
        """Stats used when no diff can be computed (e.g. root commit)."""
        return cls()


class CommitInfo(BaseModel):
    """Represents the metadata of a single Git commit needed for a scan."""

    hash: str = Field(..., description="Full commit SHA hash")
    short_hash: str = Field(..., description="Short commit SHA hash (7 chars)")
    author_name: str = Field(..., description="Author name")
    author_email: str = Field(..., description="Author email")
    authored_at: datetime = Field(..., description="Authored date (timezone aware)")
    message: str = Field(..., description="Full commit message")
    message_summary: Optional[str] = Field(None, description="First line of commit message")
    parent_hashes: List[str] = Field(default_factory=list, description="Parent commit hashes")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "hash": "abc123def456",
                "short_hash": "abc123d",
                "author_name": "Jane Doe",
                "author_email": "jane@example.com",
                "authored_at": "2024-01-15T10:30:00+00:00",
                "message": "[task:auth-login] [status:completed] Implement JWT login",
                "message_summary": "[task:auth-login] [status:completed] Implement JWT login",
                "parent_hashes": ["parent123"],
            }
        }
    )


class CommitTags(BaseModel):
    """Structured tags found in a commit message."""

    task_id: Optional[str] = Field(None, description="Id from the first [task:...] tag")
    status: Optional[TaskStatus] = Field(None, description="Value of the first valid [status:...] tag")
    debts: List[str] = Field(default_factory=list, description="Texts of every [debt:...] tag, in order")

    @property
    def has_task(self) -> bool:
        return self.task_id is not None
