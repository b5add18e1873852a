"""Build the project manifest from per-project directories.

This module orchestrates the filesystem build:
1. Enumerate project directories under the projects root
2. Read each directory's ``project.yml`` sidecar
3. Scan the directory for images and videos
4. Resolve technology icons from the icon directory
5. Sort the assembled records and overwrite the manifest
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from loguru import logger

from src.manifest.models import BuildReport, ProjectRecord, ProjectResult
from src.manifest.writer import sort_projects, write_manifest
from src.sources.asset_scanner import AssetScanner
from src.sources.metadata_reader import MetadataReader
from src.sources.tech_resolver import IconDirectoryResolver
from src.utils.config import Config
from src.utils.errors import ManifestBuildError, ProjectsRootNotFoundError


class FilesystemPipeline:
    """Assemble manifest records from sidecar files and colocated media.

    A project that cannot be read is skipped; the rest of the build continues.
    Failures that affect the whole run are logged and reported, never raised.

    Example:
        >>> pipeline = FilesystemPipeline(config)
        >>> report = pipeline.build()
        >>> print(report.summary())
    """

    def __init__(
        self,
        config: Config,
        reader: Optional[MetadataReader] = None,
        scanner: Optional[AssetScanner] = None,
        resolver: Optional[IconDirectoryResolver] = None,
    ) -> None:
        self.config = config
        self.projects_dir = config.projects_dir
        self.output_path = config.output_path
        self.reader = reader or MetadataReader(config.sources.sidecar_filename)
        self.scanner = scanner or AssetScanner(
            url_prefix=config.paths.projects_url_prefix, config=config.sources
        )
        self.resolver = resolver or IconDirectoryResolver(
            config.icons_dir,
            url_prefix=config.paths.icons_url_prefix,
            extensions=config.sources.icon_extensions,
        )

    def discover_project_dirs(self) -> List[Path]:
        """Subdirectories of the projects root, in name order.

        Raises:
            ProjectsRootNotFoundError: If the projects root does not exist
        """
        if not self.projects_dir.is_dir():
            raise ProjectsRootNotFoundError(self.projects_dir)
        return sorted(p for p in self.projects_dir.iterdir() if p.is_dir())

    def process_project(self, project_dir: Path, project_id: int) -> ProjectResult:
        """Assemble the record for one project directory."""
        folder = project_dir.name
        try:
            metadata = self.reader.read(project_dir)
        except ManifestBuildError as e:
            logger.error(str(e))
            return ProjectResult.skipped(folder, str(e))

        assets = self.scanner.scan(project_dir)
        try:
            record = ProjectRecord(
                id=project_id,
                title=metadata.title,
                subtitle=metadata.subtitle or None,
                description=metadata.description or "",
                start_date=metadata.start_date or "",
                end_date=metadata.end_date or "",
                tech=self.resolver.resolve(metadata.tech),
                images=assets.images,
                videos=assets.videos,
                image_layout=metadata.image_layout or self.config.sources.default_image_layout,
                github_url=metadata.github_url or None,
                live_url=metadata.live_url or None,
            )
        except (OSError, ValueError) as e:
            logger.error(f"Error assembling project {folder}: {e}")
            return ProjectResult.skipped(folder, str(e))

        return ProjectResult(source=folder, record=record)

    def build(self) -> BuildReport:
        """Run the whole build and overwrite the manifest.

        Returns:
            BuildReport; ``aborted`` is set when nothing was written
        """
        logger.info("Scanning for projects...")

        try:
            project_dirs = self.discover_project_dirs()
        except ProjectsRootNotFoundError as e:
            logger.error(str(e))
            return BuildReport(aborted=True, error=str(e))
        except OSError as e:
            logger.error(f"Error listing {self.projects_dir}: {e}")
            return BuildReport(aborted=True, error=str(e))

        records: List[ProjectRecord] = []
        skipped: List[ProjectResult] = []
        next_id = 1

        for project_dir in project_dirs:
            logger.info(f"Processing project: {project_dir.name}")
            result = self.process_project(project_dir, next_id)
            if not result.ok:
                skipped.append(result)
                continue

            record = result.record
            records.append(record)
            next_id += 1
            logger.info(f"  Added: {record.title}")
            if record.images:
                logger.info(f"  Found {len(record.images)} images")
            if record.videos:
                logger.info(f"  Found {len(record.videos)} videos")

        try:
            output_path = write_manifest(records, self.output_path)
        except OSError as e:
            logger.error(f"Error writing {self.output_path}: {e}")
            return BuildReport(records=records, skipped=skipped, aborted=True, error=str(e))

        ordered = sort_projects(records)
        logger.success(f"Successfully built {len(ordered)} projects!")
        logger.info(f"Output: {output_path}")
        for record in ordered:
            logger.info(f"  • {record.title} {record.media_summary()}")

        return BuildReport(records=ordered, skipped=skipped, output_path=output_path)
