"""Progress aggregation for features and the whole project."""

import math
from typing import Iterable

from roadmapkit.models.roadmap import Feature, Roadmap, TaskStatus


def round_half_up(value: float) -> int:
    """Round halves up (12.5 -> 13) instead of to even like the built-in round."""
    return int(math.floor(value + 0.5))


def calculate_feature_progress(feature: Feature) -> int:
    """Percentage of a feature's tasks that are completed (0 when it has none)."""
    if not feature.tasks:
        return 0

    completed = sum(1 for task in feature.tasks if task.status == TaskStatus.COMPLETED)
    return round_half_up(completed / len(feature.tasks) * 100)


def calculate_total_progress(features: Iterable[Feature]) -> int:
    """Mean of feature progress values (0 when there are no features).

    Every feature weighs the same regardless of how many tasks it has.
    """
    values = [feature.progress for feature in features]
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def recalculate_progress(roadmap: Roadmap) -> Roadmap:
    """Recompute every feature's progress, then the project total, in place."""
    for feature in roadmap.features:
        feature.progress = calculate_feature_progress(feature)
    roadmap.project_info.total_progress = calculate_total_progress(roadmap.features)
    return roadmap
