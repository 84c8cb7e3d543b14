"""Core pieces of a small software-rendered engine: profiling, jobs, paths, platform helpers, font atlas files and per-frame state."""

__version__ = "0.1.0"
__all__ = ["fontatlas", "frame", "jobs", "paths", "platform", "profiling"]