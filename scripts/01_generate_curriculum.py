#!/usr/bin/env python3
"""
01_generate_curriculum.py - Build curriculum.json from the markdown lesson corpus.

Walks the configured phase directories, parses every Module-*.md file and
writes the assembled curriculum as a single JSON artifact for the viewer.

Features:
  - Phase order comes from config/curriculum.yaml, not the filesystem
  - Missing phases and unreadable modules are logged and skipped
  - Duplicate module ids abort the run (rename the offending file)
  - Atomic write: the artifact is replaced only when complete

Usage:
  python scripts/01_generate_curriculum.py
  python scripts/01_generate_curriculum.py --corpus ../lessons --output data/curriculum.json
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

from curriculumkit.ingest import CurriculumAssembler, ModuleIdCollisionError, write_curriculum
from curriculumkit.utils import DEFAULT_CONFIG_PATH, load_curriculum_config

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Generate curriculum data from markdown lesson files",
    )
    parser.add_argument(
        "--corpus",
        type=Path,
        default=Path(os.getenv("CURRICULUM_ROOT", PROJECT_ROOT.parent)),
        help="Directory containing the Phase-* directories (default: $CURRICULUM_ROOT or parent of project)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(os.getenv("CURRICULUM_CONFIG", DEFAULT_CONFIG_PATH)),
        help="Curriculum YAML config (default: config/curriculum.yaml)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(os.getenv("CURRICULUM_OUTPUT", PROJECT_ROOT / "data" / "curriculum.json")),
        help="Output JSON path (default: data/curriculum.json)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log parser fallbacks for each module",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = load_curriculum_config(args.config)

    logger.info("Generating curriculum data from markdown files...")
    assembler = CurriculumAssembler(
        corpus_root=args.corpus,
        phase_directories=config.phase_directories,
        title=config.title,
        description=config.description,
        phase_colors=config.phase_colors,
    )

    try:
        curriculum, report = assembler.assemble()
    except ModuleIdCollisionError as e:
        logger.error(str(e))
        sys.exit(1)

    output_path = write_curriculum(curriculum, args.output)

    # Summary
    print(f"Curriculum data generated: {output_path}")
    print(f"  Total phases: {len(curriculum.phases)}")
    print(f"  Total modules: {curriculum.module_count}")
    if report.phases_missing:
        print(f"  Missing phases: {len(report.phases_missing)}")
    if report.modules_skipped:
        print(f"  Skipped modules: {len(report.modules_skipped)}")
    if report.modules_degraded:
        print(f"  Modules using fallbacks: {report.modules_degraded}")

    print("\nCurriculum Summary:")
    for phase in curriculum.phases:
        print(f"\n{phase.title} ({len(phase.modules)} modules):")
        for module in phase.modules:
            print(f"  - {module.title}")


if __name__ == "__main__":
    main()
