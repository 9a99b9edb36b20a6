"""Roadmap synchronization with Git history.

Tagged commits are applied to the roadmap's tasks, progress percentages are
recomputed and the document is written back in a single pass.
"""

from roadmapkit.sync.locator import TaskLocation, build_task_index, find_task
from roadmapkit.sync.progress import (
    calculate_feature_progress,
    calculate_total_progress,
    recalculate_progress,
)
from roadmapkit.sync.scanner import RoadmapScanner, ScanResult, print_summary, scan_git_history
from roadmapkit.sync.store import RoadmapStore
from roadmapkit.sync.updater import calculate_complexity, update_task

__all__ = [
    "TaskLocation",
    "build_task_index",
    "find_task",
    "calculate_feature_progress",
    "calculate_total_progress",
    "recalculate_progress",
    "RoadmapScanner",
    "ScanResult",
    "print_summary",
    "scan_git_history",
    "RoadmapStore",
    "calculate_complexity",
    "update_task",
]
