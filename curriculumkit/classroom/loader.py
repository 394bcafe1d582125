"""
CurriculumLoader - Load the curriculum artifact written at build time.

The artifact is read once and validated into an immutable Curriculum that
is then handed to the Navigator and the presentation layer.
"""

from pathlib import Path

from curriculumkit.schemas import Curriculum


class CurriculumLoader:
    """Read-only access to the curriculum JSON artifact."""

    def __init__(self, artifact_path: str | Path):
        """
        Initialize loader with path to curriculum.json.

        Args:
            artifact_path: Path to the JSON written by write_curriculum
        """
        self.artifact_path = Path(artifact_path)
        if not self.artifact_path.exists():
            raise FileNotFoundError(f"Curriculum artifact not found: {artifact_path}")

    def load(self) -> Curriculum:
        """Parse and validate the artifact."""
        return Curriculum.model_validate_json(self.artifact_path.read_text(encoding="utf-8"))
