"""Commit history and commit message extraction."""

from roadmapkit.extraction.git_extractor import GitExtractor, parse_numstat
from roadmapkit.extraction.tags import parse_commit_tags

__all__ = [
    "GitExtractor",
    "parse_commit_tags",
    "parse_numstat",
]
