"""
CurriculumAssembler - Build the curriculum model from a markdown corpus.

Walks the configured phase directories in order, parses every
Module-*.md file, assigns deterministic ids and produces an immutable
Curriculum. Partial corpora are tolerated; id collisions are fatal.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from curriculumkit.schemas import Curriculum, Module, Phase

from .markdown_parser import ModuleReadError, parse_module_file


logger = logging.getLogger(__name__)

MODULE_FILE_PREFIX = "Module-"
MODULE_FILE_SUFFIX = ".md"
README_NAME = "README.md"
PHASE_DESCRIPTION_HEADINGS = ("overview", "description")


class ModuleIdCollisionError(ValueError):
    """Raised when two module files derive the same id."""

    def __init__(self, module_id: str, first: Path, second: Path):
        super().__init__(
            f"Module id '{module_id}' derived from both {first} and {second}; "
            f"rename one of the files."
        )
        self.module_id = module_id
        self.first = first
        self.second = second


@dataclass
class AssemblyReport:
    """Counters collected during one assembly run."""
    phases_found: int = 0
    phases_missing: list[str] = field(default_factory=list)
    modules_parsed: int = 0
    modules_degraded: int = 0
    modules_skipped: list[Path] = field(default_factory=list)


# -----------------------------------------------------------------------------
# Naming rules
# -----------------------------------------------------------------------------


def derive_module_id(file_name: str) -> str:
    """Module-1.2-Intro.md -> module-1-2-intro"""
    stem = file_name[:-len(MODULE_FILE_SUFFIX)] if file_name.endswith(MODULE_FILE_SUFFIX) else file_name
    return stem.lower().replace(".", "-")


def phase_title(dir_name: str) -> str:
    """Phase-1-Foundation-Technologies -> Phase 1: Foundation Technologies"""
    return re.sub(r'Phase (\d+)', r'Phase \1:', dir_name.replace("-", " "), count=1)


def fallback_phase_description(dir_name: str) -> str:
    topic = re.sub(r'Phase-\d+-', '', dir_name, count=1).replace("-", " ").lower()
    return f"Advanced curriculum phase covering {topic}"


def is_module_file(path: Path) -> bool:
    return path.name.startswith(MODULE_FILE_PREFIX) and path.name.endswith(MODULE_FILE_SUFFIX)


def read_phase_description(phase_dir: Path) -> Optional[str]:
    """
    Read a phase description from the phase README.

    Returns the first non-empty, non-heading line after a heading that
    mentions "overview" or "description", or None.
    """
    readme_path = phase_dir / README_NAME
    if not readme_path.exists():
        return None

    try:
        content = readme_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Cannot read {readme_path}: {e}")
        return None

    found_heading = False
    for line in content.splitlines():
        stripped = line.strip()
        if stripped.startswith("##") and any(
            word in stripped.lower() for word in PHASE_DESCRIPTION_HEADINGS
        ):
            found_heading = True
            continue
        if found_heading and stripped and not stripped.startswith("#"):
            return stripped
    return None


# -----------------------------------------------------------------------------
# Assembler
# -----------------------------------------------------------------------------


class CurriculumAssembler:
    """
    Assemble a Curriculum from a corpus root and an ordered phase list.

    The phase order is configuration; directories are never re-sorted.
    """

    def __init__(
        self,
        corpus_root: str | Path,
        phase_directories: list[str],
        title: str,
        description: str,
        phase_colors: Optional[list[str]] = None,
    ):
        """
        Initialize assembler.

        Args:
            corpus_root: Directory containing the phase directories
            phase_directories: Phase directory names in curriculum order
            title: Curriculum title for the artifact
            description: Curriculum description for the artifact
            phase_colors: Optional presentation colors, by phase index
        """
        self.corpus_root = Path(corpus_root)
        self.phase_directories = list(phase_directories)
        self.title = title
        self.description = description
        self.phase_colors = list(phase_colors or [])

    def assemble(self) -> tuple[Curriculum, AssemblyReport]:
        """
        Build the curriculum.

        Returns:
            Tuple of (curriculum, report)

        Raises:
            ModuleIdCollisionError: If two files derive the same module id
        """
        report = AssemblyReport()
        seen_ids: dict[str, Path] = {}
        phases = []

        for index, dir_name in enumerate(self.phase_directories):
            phase_dir = self.corpus_root / dir_name
            if not phase_dir.is_dir():
                logger.info(f"Skipping {dir_name} - directory not found")
                report.phases_missing.append(dir_name)
                continue

            try:
                module_files = sorted(
                    (p for p in phase_dir.iterdir() if is_module_file(p)),
                    key=lambda p: p.name,
                )
            except OSError as e:
                logger.error(f"Error processing phase {dir_name}: {e}")
                report.phases_missing.append(dir_name)
                continue

            logger.info(f"Processing {dir_name}: found {len(module_files)} modules")
            modules = self._assemble_modules(dir_name, module_files, seen_ids, report)

            phases.append(Phase(
                id=f"phase-{index}",
                title=phase_title(dir_name),
                description=read_phase_description(phase_dir) or fallback_phase_description(dir_name),
                color=self.phase_colors[index] if index < len(self.phase_colors) else None,
                modules=modules,
            ))
            report.phases_found += 1

        curriculum = Curriculum(
            title=self.title,
            description=self.description,
            phases=phases,
        )
        return curriculum, report

    def _assemble_modules(
        self,
        dir_name: str,
        module_files: list[Path],
        seen_ids: dict[str, Path],
        report: AssemblyReport,
    ) -> list[Module]:
        modules = []
        for path in module_files:
            module_id = derive_module_id(path.name)
            if module_id in seen_ids:
                raise ModuleIdCollisionError(module_id, seen_ids[module_id], path)
            seen_ids[module_id] = path

            try:
                result = parse_module_file(path, module_id, dir_name)
            except ModuleReadError as e:
                logger.error(str(e))
                report.modules_skipped.append(path)
                continue

            if result.degraded:
                report.modules_degraded += 1
                fallbacks = ", ".join(sorted(d.value for d in result.degradations))
                logger.debug(f"  {path.name}: used fallbacks ({fallbacks})")

            modules.append(result.module)
            report.modules_parsed += 1
            logger.info(f"  - {result.module.title}")
        return modules
