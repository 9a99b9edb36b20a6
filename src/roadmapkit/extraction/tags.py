"""Parsing of roadmap tags embedded in commit messages.

Recognized tags (case-sensitive, in any order):

    [task:<id>]          first occurrence wins
    [status:<value>]     first occurrence wins, value must be a TaskStatus
    [debt:<text>]        every occurrence is collected, in order
"""

import re

from roadmapkit.models.commit import CommitTags
from roadmapkit.models.roadmap import TaskStatus

TASK_TAG_PATTERN = re.compile(r"\[task:([^\]]+)\]")
STATUS_TAG_PATTERN = re.compile(r"\[status:([^\]]+)\]")
DEBT_TAG_PATTERN = re.compile(r"\[debt:([^\]]+)\]")

VALID_STATUSES = {status.value for status in TaskStatus}


def parse_commit_tags(message: str) -> CommitTags:
    """Extract the task reference, status and debt entries from a commit message.

    Args:
        message: Full commit message

    Returns:
        CommitTags; an unknown status value is dropped silently
    """
    task_id = None
    task_match = TASK_TAG_PATTERN.search(message)
    if task_match:
        task_id = task_match.group(1)

    status = None
    status_match = STATUS_TAG_PATTERN.search(message)
    if status_match and status_match.group(1) in VALID_STATUSES:
        status = TaskStatus(status_match.group(1))

    debts = DEBT_TAG_PATTERN.findall(message)

    return CommitTags(task_id=task_id, status=status, debts=debts)
