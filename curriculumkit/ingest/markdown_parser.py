"""
Markdown lesson parser.

Extracts a Module record from one lesson document with a single top-to-bottom
scan. Every extraction step degrades to a documented default rather than
raising; the only hard failure is an unreadable file (ModuleReadError).
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from curriculumkit.schemas import Difficulty, Module


GENERIC_DESCRIPTION = "Comprehensive module covering essential development concepts."
WORDS_PER_MINUTE = 200
PRACTICE_FACTOR = 1.5

OBJECTIVES_HEADING = "Learning Objectives"
PREREQUISITES_HEADING = "Prerequisites"

# "- **Term**: ..." -> "Term"
LABELED_BULLET_PATTERN = re.compile(r'^- \*\*(.+?)\*\*:')
PROJECT_BULLET_PREFIX = re.compile(r'^- \*\*Project.*?\*\*:?\s*')
PROJECT_BOLD_PREFIX = re.compile(r'^\*\*Project.*?\*\*:?\s*')
PHASE_NUMBER_PATTERN = re.compile(r'Phase-(\d+)')


class ModuleReadError(Exception):
    """Raised when a module document cannot be read."""

    def __init__(self, path: Path, cause: Exception):
        super().__init__(f"Cannot read module file {path}: {cause}")
        self.path = path
        self.cause = cause


class CollectionMode(str, Enum):
    NONE = "none"
    OBJECTIVES = "objectives"
    PREREQUISITES = "prerequisites"


class LineKind(str, Enum):
    TITLE_HEADING = "title_heading"                 # "# ..."
    OBJECTIVES_HEADING = "objectives_heading"       # "## Learning Objectives"
    PREREQUISITES_HEADING = "prerequisites_heading" # "## Prerequisites"
    SECTION_HEADING = "section_heading"             # any other "## ..."
    LABELED_BULLET = "labeled_bullet"               # "- **Term**: ..."
    BULLET = "bullet"                               # "- ..."
    TEXT = "text"


class Degradation(str, Enum):
    """Fallbacks applied while parsing, reported for diagnostics."""
    MISSING_TITLE = "missing_title"
    MISSING_DESCRIPTION = "missing_description"
    TOPICS_FROM_SECTIONS = "topics_from_sections"
    PLACEHOLDER_PROJECT = "placeholder_project"


@dataclass(frozen=True)
class ClassifiedLine:
    kind: LineKind
    text: str            # trimmed line
    content: str = ""    # heading text, bullet body, or bold label


@dataclass(frozen=True)
class ParseResult:
    """A parsed module plus the fallbacks that produced it."""
    module: Module
    degradations: frozenset[Degradation]

    @property
    def degraded(self) -> bool:
        return bool(self.degradations)


# -----------------------------------------------------------------------------
# Line classification
# -----------------------------------------------------------------------------


def classify_line(raw_line: str) -> ClassifiedLine:
    """Classify one line into exactly one LineKind."""
    line = raw_line.strip()

    if line.startswith("# "):
        return ClassifiedLine(LineKind.TITLE_HEADING, line, line[2:].strip())

    if line.startswith("## "):
        heading = line[3:].strip()
        if line == f"## {OBJECTIVES_HEADING}":
            return ClassifiedLine(LineKind.OBJECTIVES_HEADING, line, heading)
        if line == f"## {PREREQUISITES_HEADING}":
            return ClassifiedLine(LineKind.PREREQUISITES_HEADING, line, heading)
        return ClassifiedLine(LineKind.SECTION_HEADING, line, heading)

    if line.startswith("- "):
        match = LABELED_BULLET_PATTERN.match(line)
        if match:
            return ClassifiedLine(LineKind.LABELED_BULLET, line, match.group(1))
        return ClassifiedLine(LineKind.BULLET, line, line[2:].strip())

    return ClassifiedLine(LineKind.TEXT, line)


def _project_entry(line: ClassifiedLine) -> str | None:
    """Return the cleaned project text for a project-bearing line, else None."""
    if "project" not in line.text.lower():
        return None
    is_bullet = line.kind in (LineKind.BULLET, LineKind.LABELED_BULLET)
    if not is_bullet and not line.text.startswith("**Project"):
        return None

    cleaned = PROJECT_BULLET_PREFIX.sub("", line.text, count=1)
    cleaned = PROJECT_BOLD_PREFIX.sub("", cleaned, count=1).strip()
    return cleaned or None


# -----------------------------------------------------------------------------
# Derived fields
# -----------------------------------------------------------------------------


def estimate_duration(content: str) -> str:
    """
    Estimate study time from the raw word count.

    Reading time R = ceil(words / 200); practice time P = ceil(R * 1.5),
    reported as "{P}-{P+1} hours" with P at least 1.
    """
    word_count = len(content.split())
    reading_time = math.ceil(word_count / WORDS_PER_MINUTE)
    practice_time = max(1, math.ceil(reading_time * PRACTICE_FACTOR))
    return f"{practice_time}-{practice_time + 1} hours"


def determine_difficulty(phase_name: str) -> Difficulty:
    """Map a phase directory name to a difficulty tier by its phase number."""
    match = PHASE_NUMBER_PATTERN.search(phase_name)
    if not match:
        return Difficulty.ADVANCED
    number = int(match.group(1))
    if number <= 1:
        return Difficulty.BEGINNER
    if number <= 4:
        return Difficulty.INTERMEDIATE
    return Difficulty.ADVANCED


def _strip_frontmatter(lines: list[str]) -> list[str]:
    """Drop a leading ``---`` block, unless it holds a heading (then it is a rule)."""
    if not lines or lines[0].strip() != "---":
        return lines
    for index in range(1, len(lines)):
        stripped = lines[index].strip()
        if stripped.startswith("#"):
            return lines
        if stripped == "---":
            return lines[index + 1:]
    return lines


def _extract_description(lines: list[str]) -> tuple[str, Degradation | None]:
    """
    Take the block between the title and the first level-2 heading.

    Precedence: no heading or blank block -> generic sentence; otherwise the
    first line of the trimmed block.
    """
    start = 0
    for index, line in enumerate(lines):
        if classify_line(line).kind == LineKind.TITLE_HEADING:
            start = index + 1
            break

    end = None
    for index in range(start, len(lines)):
        if lines[index].strip().startswith("## "):
            end = index
            break

    if end is None:
        return GENERIC_DESCRIPTION, Degradation.MISSING_DESCRIPTION

    block = "\n".join(lines[start:end]).strip()
    if not block:
        return GENERIC_DESCRIPTION, Degradation.MISSING_DESCRIPTION

    # the block is trimmed, so its first line is never empty
    return block.split("\n")[0].strip(), None


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------


def parse_module_markdown(
    content: str,
    module_id: str,
    fallback_title: str,
    phase_name: str = "",
) -> ParseResult:
    """
    Parse one lesson document.

    Args:
        content: Raw markdown text
        module_id: Identifier already derived from the file name
        fallback_title: Title used when the document has no level-1 heading
        phase_name: Phase directory name, used only for difficulty

    Returns:
        ParseResult with the Module and any degradations applied
    """
    lines = _strip_frontmatter(content.split("\n"))
    degradations: set[Degradation] = set()

    title = ""
    objectives: list[str] = []
    prerequisites: list[str] = []
    sections: list[str] = []
    topics: list[str] = []
    projects: list[str] = []
    mode = CollectionMode.NONE

    for raw_line in lines:
        line = classify_line(raw_line)

        match line.kind:
            case LineKind.TITLE_HEADING:
                if not title and line.content:
                    title = line.content
                    continue
            case LineKind.OBJECTIVES_HEADING:
                mode = CollectionMode.OBJECTIVES
                continue
            case LineKind.PREREQUISITES_HEADING:
                mode = CollectionMode.PREREQUISITES
                continue
            case LineKind.SECTION_HEADING:
                mode = CollectionMode.NONE
                sections.append(line.content)
                continue
            case LineKind.LABELED_BULLET | LineKind.BULLET:
                item = line.text[2:].strip()
                if mode == CollectionMode.OBJECTIVES:
                    objectives.append(item)
                elif mode == CollectionMode.PREREQUISITES:
                    prerequisites.append(item)
                if line.kind == LineKind.LABELED_BULLET:
                    topics.append(line.content)
            case LineKind.TEXT:
                pass

        project = _project_entry(line)
        if project:
            projects.append(project)

    if not title:
        title = fallback_title
        degradations.add(Degradation.MISSING_TITLE)

    description, description_degradation = _extract_description(lines)
    if description_degradation:
        degradations.add(description_degradation)

    if not topics:
        topics = list(sections)
        if sections:
            degradations.add(Degradation.TOPICS_FROM_SECTIONS)

    if not projects:
        projects = [f"Complete hands-on exercises for {title}"]
        degradations.add(Degradation.PLACEHOLDER_PROJECT)

    module = Module(
        id=module_id,
        title=title,
        description=description,
        learning_objectives=objectives,
        prerequisites=prerequisites,
        sections=sections,
        topics=topics,
        projects=projects,
        duration=estimate_duration(content),
        difficulty=determine_difficulty(phase_name),
    )
    return ParseResult(module=module, degradations=frozenset(degradations))


def parse_module_file(path: Path, module_id: str, phase_name: str = "") -> ParseResult:
    """
    Read and parse one lesson file.

    Raises:
        ModuleReadError: If the file cannot be read or decoded
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ModuleReadError(path, e) from e

    return parse_module_markdown(content, module_id, path.stem, phase_name)
