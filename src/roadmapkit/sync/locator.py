"""Lookup of tasks by id inside a roadmap."""

from typing import Dict, NamedTuple, Optional

from roadmapkit.models.roadmap import Feature, Roadmap, Task


class TaskLocation(NamedTuple):
    """A task together with the feature that owns it."""

    feature: Feature
    task: Task


def find_task(roadmap: Roadmap, task_id: str) -> Optional[TaskLocation]:
    """Find a task by exact id.

    Args:
        roadmap: Roadmap to search
        task_id: Task id from a [task:...] tag

    Returns:
        TaskLocation of the first match, or None if no task has that id
    """
    for feature, task in roadmap.iter_tasks():
        if task.id == task_id:
            return TaskLocation(feature, task)
    return None


def build_task_index(roadmap: Roadmap) -> Dict[str, TaskLocation]:
    """Map every task id to its location.

    When ids repeat, the first task in document order wins, as with find_task.
    """
    index: Dict[str, TaskLocation] = {}
    for feature, task in roadmap.iter_tasks():
        index.setdefault(task.id, TaskLocation(feature, task))
    return index
