"""
Progress tracking schemas for curriculumkit.

Defines the Pydantic model for the learner's persisted state:
- Completed module ids
- Bookmarked module ids

Ids are not validated against the curriculum; stale ids are kept.
"""

from pydantic import BaseModel, ConfigDict


class ProgressRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    completed_module_ids: frozenset[str] = frozenset()
    bookmarked_module_ids: frozenset[str] = frozenset()

    def with_completed_toggled(self, module_id: str) -> "ProgressRecord":
        return self.model_copy(
            update={"completed_module_ids": _toggle(self.completed_module_ids, module_id)}
        )

    def with_bookmark_toggled(self, module_id: str) -> "ProgressRecord":
        return self.model_copy(
            update={"bookmarked_module_ids": _toggle(self.bookmarked_module_ids, module_id)}
        )

    def with_completed(self, module_id: str, completed: bool) -> "ProgressRecord":
        """Set completion explicitly (idempotent)."""
        if completed:
            ids = self.completed_module_ids | {module_id}
        else:
            ids = self.completed_module_ids - {module_id}
        return self.model_copy(update={"completed_module_ids": ids})


def _toggle(ids: frozenset[str], module_id: str) -> frozenset[str]:
    if module_id in ids:
        return ids - {module_id}
    return ids | {module_id}
