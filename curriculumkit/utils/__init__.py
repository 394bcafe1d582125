"""curriculumkit utilities."""

from .config_loader import CurriculumConfig, load_curriculum_config, DEFAULT_CONFIG_PATH

__all__ = ["CurriculumConfig", "load_curriculum_config", "DEFAULT_CONFIG_PATH"]
