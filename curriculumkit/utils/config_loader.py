"""
Configuration loader for curriculumkit.

Loads the curriculum YAML configuration from the config/ directory.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field


# Default config file (relative to project root)
CONFIG_DIR = Path(__file__).parent.parent.parent / "config"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "curriculum.yaml"


class CurriculumConfig(BaseModel):
    """Ordered phase list and artifact metadata."""
    title: str
    description: str = ""
    phase_directories: list[str] = Field(..., min_length=1)
    phase_colors: list[str] = []


def load_curriculum_config(path: Path | None = None) -> CurriculumConfig:
    """
    Load the curriculum configuration.

    Args:
        path: Optional config file (default: config/curriculum.yaml)

    Returns:
        Validated CurriculumConfig

    Raises:
        FileNotFoundError: If the config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If required keys are missing or malformed
    """
    file_path = Path(path) if path else DEFAULT_CONFIG_PATH

    if not file_path.exists():
        raise FileNotFoundError(f"Curriculum config not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return CurriculumConfig.model_validate(data)
