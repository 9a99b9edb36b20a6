"""Merging of a single commit into a task record."""

import structlog

from roadmapkit.models.commit import CommitInfo, CommitStats, CommitTags
from roadmapkit.models.roadmap import Task, TaskStatus, TechnicalDebt

logger = structlog.get_logger(__name__)

# (exclusive upper bound of changed lines, score)
COMPLEXITY_BANDS = (
    (50, 1),
    (100, 2),
    (200, 3),
    (500, 5),
    (1000, 7),
)
MAX_COMPLEXITY = 10

DEFAULT_DEBT_SEVERITY = "medium"
DEFAULT_DEBT_EFFORT = "TBD"


def calculate_complexity(lines_added: int, lines_removed: int) -> int:
    """Score complexity on a 1-10 scale from the number of changed lines."""
    total_lines = lines_added + lines_removed
    for upper_bound, score in COMPLEXITY_BANDS:
        if total_lines < upper_bound:
            return score
    return MAX_COMPLEXITY


def update_task(
    task: Task,
    commit: CommitInfo,
    tags: CommitTags,
    stats: CommitStats,
    keep_status: bool = False,
) -> Task:
    """Apply one commit's tags and diff stats to a task, in place.

    Must be called once per (commit, task) pair. Commit hashes and affected
    files are de-duplicated; metric counters and debt entries are additive.

    Args:
        task: Task to update
        commit: Commit being applied
        tags: Tags parsed from the commit message
        stats: Diff stats of the commit
        keep_status: Leave task.status untouched (a newer commit already set it);
            timestamps for the tagged status are still filled in

    Returns:
        The same task
    """
    if tags.status is not None:
        if not keep_status:
            task.status = tags.status

        # Timestamps are only set on the first transition into a state
        if tags.status == TaskStatus.IN_PROGRESS and task.started_at is None:
            task.started_at = commit.authored_at
        if tags.status == TaskStatus.COMPLETED and task.completed_at is None:
            task.completed_at = commit.authored_at

    task.git.last_commit = commit.hash
    if commit.hash not in task.git.commits:
        task.git.commits.append(commit.hash)

    for file_path in stats.files:
        if file_path not in task.affected_files:
            task.affected_files.append(file_path)

    metrics = task.metrics
    metrics.lines_added += stats.lines_added
    metrics.lines_removed += stats.lines_removed
    metrics.files_created += stats.files_created
    metrics.files_modified += stats.files_modified
    metrics.complexity_score = calculate_complexity(metrics.lines_added, metrics.lines_removed)

    for description in tags.debts:
        task.technical_debt.append(
            TechnicalDebt(
                description=description,
                severity=DEFAULT_DEBT_SEVERITY,
                estimated_effort=DEFAULT_DEBT_EFFORT,
            )
        )

    logger.debug(
        "task_updated",
        task_id=task.id,
        commit=commit.short_hash,
        status=task.status,
        complexity=metrics.complexity_score,
        new_debts=len(tags.debts),
    )
    return task
