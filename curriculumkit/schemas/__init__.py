"""
curriculumkit Schemas - Pydantic models for the curriculum viewer.

This module exports all schema classes for:
- Curriculum: difficulty tiers, modules, phases, the assembled curriculum
- Progress: completed and bookmarked module ids
"""

# Curriculum schemas
from .curriculum import (
    Difficulty,
    Module,
    Phase,
    Curriculum,
)

# Progress schemas
from .progress import (
    ProgressRecord,
)

__all__ = [
    # Curriculum
    'Difficulty',
    'Module',
    'Phase',
    'Curriculum',
    # Progress
    'ProgressRecord',
]
