#!/usr/bin/env python3
"""
02_copy_curriculum_files.py - Copy lesson markdown into the viewer's public directory.

Usage:
  python scripts/02_copy_curriculum_files.py
  python scripts/02_copy_curriculum_files.py --corpus ../lessons --dest public/curriculum
"""

import argparse
import logging
import os
import sys
from pathlib import Path

# Project root for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv

load_dotenv(PROJECT_ROOT / ".env")

from curriculumkit.ingest import publish_markdown
from curriculumkit.utils import DEFAULT_CONFIG_PATH, load_curriculum_config

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Copy curriculum markdown files for the viewer")
    parser.add_argument(
        "--corpus",
        type=Path,
        default=Path(os.getenv("CURRICULUM_ROOT", PROJECT_ROOT.parent)),
        help="Directory containing the Phase-* directories",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(os.getenv("CURRICULUM_CONFIG", DEFAULT_CONFIG_PATH)),
        help="Curriculum YAML config (default: config/curriculum.yaml)",
    )
    parser.add_argument(
        "--dest",
        type=Path,
        default=Path(os.getenv("CURRICULUM_PUBLIC_DIR", PROJECT_ROOT / "public" / "curriculum")),
        help="Destination directory (default: public/curriculum)",
    )
    args = parser.parse_args()

    config = load_curriculum_config(args.config)

    logger.info("Copying curriculum files to public directory...")
    copied = publish_markdown(args.corpus, args.dest, config.phase_directories)
    print(f"Copied {copied} markdown files to {args.dest}")


if __name__ == "__main__":
    main()
