"""
curriculumkit Ingest - Build-time components that turn a markdown corpus into a curriculum.

This module provides:
- parse_module_markdown / parse_module_file: One lesson document -> Module
- CurriculumAssembler: Phase directories -> Curriculum
- write_curriculum: Atomic JSON artifact
- publish_markdown: Copy lesson files for the viewer
"""

from .markdown_parser import (
    GENERIC_DESCRIPTION,
    CollectionMode,
    LineKind,
    Degradation,
    ClassifiedLine,
    ParseResult,
    ModuleReadError,
    classify_line,
    estimate_duration,
    determine_difficulty,
    parse_module_markdown,
    parse_module_file,
)

from .assembler import (
    CurriculumAssembler,
    AssemblyReport,
    ModuleIdCollisionError,
    derive_module_id,
    phase_title,
    read_phase_description,
)

from .artifact import write_curriculum

from .publish import publish_markdown

__all__ = [
    # Parser
    "GENERIC_DESCRIPTION",
    "CollectionMode",
    "LineKind",
    "Degradation",
    "ClassifiedLine",
    "ParseResult",
    "ModuleReadError",
    "classify_line",
    "estimate_duration",
    "determine_difficulty",
    "parse_module_markdown",
    "parse_module_file",
    # Assembler
    "CurriculumAssembler",
    "AssemblyReport",
    "ModuleIdCollisionError",
    "derive_module_id",
    "phase_title",
    "read_phase_description",
    # Artifact
    "write_curriculum",
    # Publish
    "publish_markdown",
]
