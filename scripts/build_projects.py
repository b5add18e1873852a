#!/usr/bin/env python3
"""Build public/projects.json from the project directories.

Each subdirectory of public/projects holds a project.yml sidecar plus its images
and videos. Projects that cannot be read are skipped; the script always exits 0.

Usage:
    python scripts/build_projects.py
    python scripts/build_projects.py --base-dir /path/to/site --log-level DEBUG
    python scripts/build_projects.py --config config/config.yaml --output dist/projects.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

# Add repository root to path for imports
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from src.pipeline.filesystem_pipeline import FilesystemPipeline  # noqa: E402
from src.utils.config import load_config  # noqa: E402
from src.utils.logging_setup import setup_logging  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build the projects manifest from project.yml sidecar files",
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
    parser.add_argument("--output", type=Path, default=None, help="Manifest output path")
    parser.add_argument("--log-level", default=None, help="Console log level")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args.config, base_dir=args.base_dir)
    except Exception as e:
        setup_logging(level=args.log_level)
        logger.error(f"Failed to load configuration: {e}")
        return 0

    setup_logging(config.logging, level=args.log_level, base_dir=config.paths.base_dir)
    if args.output is not None:
        config.paths.output_path = args.output.resolve()

    report = FilesystemPipeline(config).build()
    if report.aborted:
        logger.error(report.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
