#!/usr/bin/env python3
"""
03_progress_report.py - Show learner progress against the built curriculum.

Reads data/curriculum.json and the local progress database, optionally
toggles completion or bookmarks, then prints per-phase progress.

Usage:
  python scripts/03_progress_report.py
  python scripts/03_progress_report.py --toggle-completed module-1-1-html-basics
  python scripts/03_progress_report.py --toggle-bookmark module-2-3-hooks
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

from curriculumkit.classroom import (
    CurriculumLoader,
    Navigator,
    ProgressTracker,
    SqliteProgressRepository,
    DEFAULT_PROGRESS_DB,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)


def main():
    parser = argparse.ArgumentParser(description="Show curriculum progress")
    parser.add_argument(
        "--curriculum",
        type=Path,
        default=Path(os.getenv("CURRICULUM_OUTPUT", PROJECT_ROOT / "data" / "curriculum.json")),
        help="Curriculum JSON artifact (default: data/curriculum.json)",
    )
    parser.add_argument(
        "--progress-db",
        type=Path,
        default=Path(os.getenv("CURRICULUM_PROGRESS_DB", DEFAULT_PROGRESS_DB)),
        help="Progress database (default: ~/.curriculumkit/progress.db)",
    )
    parser.add_argument("--toggle-completed", metavar="MODULE_ID", action="append", default=[])
    parser.add_argument("--toggle-bookmark", metavar="MODULE_ID", action="append", default=[])
    args = parser.parse_args()

    curriculum = CurriculumLoader(args.curriculum).load()
    navigator = Navigator(curriculum)
    tracker = ProgressTracker(SqliteProgressRepository(args.progress_db))

    for module_id in args.toggle_completed:
        if navigator.locate_module(module_id) is None:
            print(f"Note: '{module_id}' is not in the current curriculum")
        state = "completed" if tracker.toggle_completed(module_id) else "not completed"
        print(f"{module_id}: {state}")

    for module_id in args.toggle_bookmark:
        state = "bookmarked" if tracker.toggle_bookmark(module_id) else "not bookmarked"
        print(f"{module_id}: {state}")

    print(f"\n{curriculum.title}")
    for phase in curriculum.phases:
        summary = navigator.phase_progress(phase.id, tracker.record)
        print(f"  {phase.title}: {summary.completed}/{summary.total} ({summary.percentage:.0f}%)")

    total = navigator.total_progress(tracker.record)
    print(f"\nOverall: {total.completed}/{total.total} ({total.percentage:.0f}%)")

    bookmarks = navigator.bookmarked_modules(tracker.record)
    if bookmarks:
        print("\nBookmarks:")
        for phase, module in bookmarks:
            print(f"  - {module.title} ({phase.title})")


if __name__ == "__main__":
    main()
