"""
Curriculum schemas for curriculumkit.

Defines Pydantic models for the assembled curriculum:
- Difficulty tiers derived from phase position
- Modules (one per lesson document)
- Phases (ordered sequence of modules)
- Curriculum (the serialized artifact consumed by a viewer)

Field names are snake_case in Python; the artifact keeps the camelCase keys
the viewer reads, via aliases.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


# -----------------------------------------------------------------------------
# Module / Phase / Curriculum
# -----------------------------------------------------------------------------


class Module(BaseModel):
    """One lesson unit, sourced from exactly one markdown document."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str                  # derived from the source file name, never the title
    title: str
    description: str
    learning_objectives: tuple[str, ...] = Field(default=(), alias="learningObjectives")
    prerequisites: tuple[str, ...] = ()
    sections: tuple[str, ...] = ()   # level-2 headings, document order
    topics: tuple[str, ...] = ()
    projects: tuple[str, ...] = ()
    duration: str            # e.g. "2-3 hours"
    difficulty: Difficulty


class Phase(BaseModel):
    """A top-level curriculum stage; module order is pedagogical order."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str                  # "phase-{index}" in the configured phase list
    title: str
    description: str
    color: Optional[str] = None  # presentation hint only
    modules: tuple[Module, ...] = ()


class Curriculum(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    description: str
    phases: tuple[Phase, ...] = ()

    @property
    def module_count(self) -> int:
        return sum(len(phase.modules) for phase in self.phases)

    def to_json(self) -> str:
        """Serialize with the artifact's camelCase keys."""
        return self.model_dump_json(by_alias=True, indent=2)
