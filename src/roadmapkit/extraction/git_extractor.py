"""Git repository data extraction."""

from typing import Iterator, List, Optional

import git
import structlog
from git import Commit, Repo

from roadmapkit.models import CommitInfo, CommitStats, ScanConfig

logger = structlog.get_logger(__name__)

# git diff --numstat prints "-" instead of line counts for binary files
BINARY_MARKER = "-"


class GitExtractor:
    """Extracts commit history and diff statistics from a Git repository."""

    def __init__(self, config: ScanConfig) -> None:
        """Initialize the GitExtractor.

        Args:
            config: Scan configuration

        Raises:
            ValueError: If the project root is not a Git working tree
        """
        self.config = config
        if not config.project_root.exists():
            raise ValueError(f"Repository path does not exist: {config.project_root}")

        try:
            self.repo = Repo(config.project_root, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise ValueError(f"Not a Git repository: {config.project_root}") from e

        if self.repo.bare:
            raise ValueError(f"Bare repositories have no working tree: {config.project_root}")

    def iter_commits(self, max_count: Optional[int] = None, branch: Optional[str] = None) -> Iterator[CommitInfo]:
        """Iterate over commits, newest first.

        Args:
            max_count: Maximum number of commits (defaults to config.max_commits)
            branch: Revision to walk from (defaults to config.branch)

        Yields:
            CommitInfo objects
        """
        if not self.repo.head.is_valid():
            # Freshly initialized repository without any commit
            logger.info("repository_has_no_commits", path=str(self.config.project_root))
            return

        max_count = max_count or self.config.max_commits
        branch = branch or self.config.branch

        for commit in self.repo.iter_commits(branch, max_count=max_count):
            yield self._extract_commit_info(commit)

    def get_commit_stats(self, commit_hash: str) -> CommitStats:
        """Summarize the diff between a commit and its first parent.

        A non-binary file with no deleted lines counts as created, any other
        non-binary file as modified. Binary files are listed in ``files`` but
        left out of every count.

        Args:
            commit_hash: Commit hash

        Returns:
            CommitStats; all zeros when the diff cannot be computed (e.g. root commit)
        """
        try:
            output = self.repo.git.diff("--numstat", "-z", "--no-renames", f"{commit_hash}^", commit_hash)
        except git.exc.GitCommandError as e:
            logger.debug("commit_diff_unavailable", commit=commit_hash[:7], error=str(e).strip())
            return CommitStats.empty()

        return parse_numstat(output)

    def _extract_commit_info(self, commit: Commit) -> CommitInfo:
        """Extract metadata from a GitPython Commit object.

        Args:
            commit: GitPython Commit object

        Returns:
            CommitInfo object
        """
        message = commit.message.strip()
        message_lines = message.split("\n")
        message_summary = message_lines[0] if message_lines else ""

        return CommitInfo(
            hash=commit.hexsha,
            short_hash=commit.hexsha[:7],
            author_name=commit.author.name or "",
            author_email=commit.author.email or "",
            authored_at=commit.authored_datetime,
            message=message,
            message_summary=message_summary,
            parent_hashes=[p.hexsha for p in commit.parents],
        )


def parse_numstat(output: str) -> CommitStats:
    """Build CommitStats from ``git diff --numstat -z --no-renames`` output.

    Paths are NUL-terminated and never quoted, so names with spaces, tabs,
    quotes or non-ASCII characters come through unchanged.

    Args:
        output: Raw numstat text, one "added<TAB>deleted<TAB>path<NUL>" record per file

    Returns:
        CommitStats
    """
    lines_added = 0
    lines_removed = 0
    files_created = 0
    files_modified = 0
    files: List[str] = []

    for record in output.split("\0"):
        parts = record.split("\t", 2)
        if len(parts) != 3:
            continue

        added, deleted, path = parts
        files.append(path)

        if added == BINARY_MARKER or deleted == BINARY_MARKER:
            continue

        added_count = int(added)
        deleted_count = int(deleted)
        lines_added += added_count
        lines_removed += deleted_count

        if deleted_count == 0:
            files_created += 1
        else:
            files_modified += 1

    return CommitStats(
        lines_added=lines_added,
        lines_removed=lines_removed,
        files_created=files_created,
        files_modified=files_modified,
        files=files,
    )
