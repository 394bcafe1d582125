"""Copy lesson markdown into a public directory so a viewer can fetch it."""

import logging
import shutil
from pathlib import Path


logger = logging.getLogger(__name__)


def publish_markdown(source_root: Path, dest_root: Path, phase_directories: list[str]) -> int:
    """
    Copy every .md file of each configured phase to dest_root/<phase>/.

    Missing phase directories are skipped.

    Returns:
        Number of files copied
    """
    source_root = Path(source_root)
    dest_root = Path(dest_root)
    dest_root.mkdir(parents=True, exist_ok=True)

    copied = 0
    for dir_name in phase_directories:
        source_dir = source_root / dir_name
        if not source_dir.is_dir():
            logger.warning(f"Skipping {dir_name} - directory not found")
            continue

        dest_dir = dest_root / dir_name
        dest_dir.mkdir(parents=True, exist_ok=True)
        markdown_files = sorted(p for p in source_dir.iterdir() if p.is_file() and p.suffix == ".md")
        logger.info(f"Copying {dir_name} ({len(markdown_files)} files)")
        for path in markdown_files:
            shutil.copy2(path, dest_dir / path.name)
            copied += 1

    return copied
