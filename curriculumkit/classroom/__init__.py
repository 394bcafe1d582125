"""
curriculumkit Classroom - Runtime components for reading and navigating the curriculum.

This module provides:
- CurriculumLoader: Load the curriculum artifact
- Navigator: Lookup, adjacency and progress summaries
- ProgressTracker: Completed modules and bookmarks with write-through storage
"""

from .loader import CurriculumLoader

from .progress import (
    ProgressTracker,
    ProgressRepository,
    SqliteProgressRepository,
    StorageError,
    DEFAULT_PROGRESS_DIR,
    DEFAULT_PROGRESS_DB,
)

from .navigator import (
    Navigator,
    AdjacentModules,
    ProgressSummary,
)

__all__ = [
    # Loader
    "CurriculumLoader",
    # Progress
    "ProgressTracker",
    "ProgressRepository",
    "SqliteProgressRepository",
    "StorageError",
    "DEFAULT_PROGRESS_DIR",
    "DEFAULT_PROGRESS_DB",
    # Navigator
    "Navigator",
    "AdjacentModules",
    "ProgressSummary",
]
