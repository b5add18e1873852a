#!/usr/bin/env python3
"""Export public/projects.json from the SQLite project store.

On first run the database is created and seeded with the initial technology list
and three sample projects. A legacy projects table is migrated in place.

Usage:
    python scripts/export_projects.py
    python scripts/export_projects.py --db data/projects.db --output public/projects.json

Environment variables:
    PORTFOLIO_DB_PATH - SQLite database file (default: projects.db)
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

# Add repository root to path for imports
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from src.pipeline.database_pipeline import DatabasePipeline  # noqa: E402
from src.utils.config import load_config  # noqa: E402
from src.utils.logging_setup import setup_logging  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export the projects manifest from the SQLite store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: built-in defaults)",
    )
    parser.add_argument(
        "--base-dir",
        type=Path,
        default=None,
        help="Directory that relative paths resolve against (default: repository root)",
    )
    parser.add_argument("--db", type=Path, default=None, help="SQLite database path")
    parser.add_argument("--output", type=Path, default=None, help="Manifest output path")
    parser.add_argument("--log-level", default=None, help="Console log level")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(level=args.log_level)

    try:
        config = load_config(args.config, base_dir=args.base_dir)
        setup_logging(config.logging, level=args.log_level, base_dir=config.paths.base_dir)
        if args.db is not None:
            config.database.db_path = args.db.resolve()
        if args.output is not None:
            config.paths.output_path = args.output.resolve()

        report = DatabasePipeline(config).build()
        logger.info(report.summary())
        return 0

    except Exception as e:
        logger.error(f"Error exporting projects to JSON: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
