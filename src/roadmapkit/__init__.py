"""roadmapkit - roadmap tracking driven by tagged Git commits."""

__version__ = "1.0.0"
