"""
Navigator - Lookup and traversal over an assembled curriculum.

Provides:
- Phase and module lookup
- Previous/next module within a phase
- Phase and overall progress against a ProgressRecord
- Bookmark resolution

Every lookup returns None when nothing matches; nothing here raises for an
unknown id. Stale progress ids are ignored.
"""

from dataclasses import dataclass
from typing import Optional

from curriculumkit.schemas import Curriculum, Module, Phase, ProgressRecord


@dataclass(frozen=True)
class AdjacentModules:
    """Neighbours of a module inside its phase."""
    previous: Optional[Module]
    next: Optional[Module]


@dataclass(frozen=True)
class ProgressSummary:
    completed: int
    total: int
    percentage: float


def _summarize(modules: tuple[Module, ...], record: ProgressRecord) -> ProgressSummary:
    completed = sum(1 for module in modules if module.id in record.completed_module_ids)
    total = len(modules)
    return ProgressSummary(
        completed=completed,
        total=total,
        percentage=(completed / total * 100) if total > 0 else 0.0,
    )


class Navigator:
    """
    Navigate an immutable Curriculum.

    Indexes are built once in the constructor; the curriculum is never
    modified, so a Navigator can be shared freely between readers.
    """

    def __init__(self, curriculum: Curriculum):
        self.curriculum = curriculum
        self._phases: dict[str, Phase] = {phase.id: phase for phase in curriculum.phases}
        self._module_index: dict[str, dict[str, int]] = {
            phase.id: {module.id: idx for idx, module in enumerate(phase.modules)}
            for phase in curriculum.phases
        }
        self._module_phase: dict[str, str] = {
            module.id: phase.id
            for phase in curriculum.phases
            for module in phase.modules
        }

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def find_phase(self, phase_id: str) -> Optional[Phase]:
        return self._phases.get(phase_id)

    def find_module(self, phase_id: str, module_id: str) -> Optional[Module]:
        """Get a module by phase and module id, or None if either is unknown."""
        phase = self._phases.get(phase_id)
        if phase is None:
            return None
        idx = self._module_index[phase_id].get(module_id)
        if idx is None:
            return None
        return phase.modules[idx]

    def locate_module(self, module_id: str) -> Optional[tuple[Phase, Module]]:
        """Find a module anywhere in the curriculum."""
        phase_id = self._module_phase.get(module_id)
        if phase_id is None:
            return None
        phase = self._phases[phase_id]
        return phase, phase.modules[self._module_index[phase_id][module_id]]

    def first_module(self, phase_id: str) -> Optional[Module]:
        phase = self._phases.get(phase_id)
        if phase is None or not phase.modules:
            return None
        return phase.modules[0]

    def last_module(self, phase_id: str) -> Optional[Module]:
        phase = self._phases.get(phase_id)
        if phase is None or not phase.modules:
            return None
        return phase.modules[-1]

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def adjacent_modules(self, phase_id: str, module_id: str) -> Optional[AdjacentModules]:
        """
        Get the previous and next module within the same phase.

        Never crosses a phase boundary: the last module of a phase has no
        next module even if a later phase exists.

        Returns None if the phase or module is unknown.
        """
        phase = self._phases.get(phase_id)
        if phase is None:
            return None
        idx = self._module_index[phase_id].get(module_id)
        if idx is None:
            return None

        previous = phase.modules[idx - 1] if idx > 0 else None
        next_module = phase.modules[idx + 1] if idx + 1 < len(phase.modules) else None
        return AdjacentModules(previous=previous, next=next_module)

    # -------------------------------------------------------------------------
    # Progress
    # -------------------------------------------------------------------------

    def phase_progress(self, phase_id: str, record: ProgressRecord) -> Optional[ProgressSummary]:
        """Count completed modules of one phase; None if the phase is unknown."""
        phase = self._phases.get(phase_id)
        if phase is None:
            return None
        return _summarize(phase.modules, record)

    def total_progress(self, record: ProgressRecord) -> ProgressSummary:
        modules = tuple(
            module for phase in self.curriculum.phases for module in phase.modules
        )
        return _summarize(modules, record)

    def bookmarked_modules(self, record: ProgressRecord) -> list[tuple[Phase, Module]]:
        """Resolve bookmarks in curriculum order, skipping stale ids."""
        return [
            (phase, module)
            for phase in self.curriculum.phases
            for module in phase.modules
            if module.id in record.bookmarked_module_ids
        ]
