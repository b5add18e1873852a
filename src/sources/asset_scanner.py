"""Image and video discovery inside a project directory."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, Field

from src.manifest.models import MediaAsset
from src.utils.config import SourceConfig


class AssetScan(BaseModel):
    """Media found in one project directory."""

    images: List[MediaAsset] = Field(default_factory=list)
    videos: List[MediaAsset] = Field(default_factory=list)


class AssetScanner:
    """Classify project files by extension and build their public paths.

    Example:
        >>> scanner = AssetScanner(url_prefix="/portfolio/projects")
        >>> scan = scanner.scan(Path("public/projects/demo"))
        >>> [v.thumbnail for v in scan.videos]
        ['/portfolio/projects/demo/intro-thumb.png']
    """

    def __init__(
        self,
        url_prefix: str = "/portfolio/projects",
        config: SourceConfig | None = None,
    ) -> None:
        self.config = config or SourceConfig()
        self.url_prefix = url_prefix.rstrip("/")
        self.image_extensions = set(self.config.image_extensions)
        self.video_extensions = set(self.config.video_extensions)
        self.thumbnail_extensions: Sequence[str] = self.config.thumbnail_extensions
        self.thumbnail_suffix = self.config.thumbnail_suffix

    def public_path(self, folder: str, filename: str) -> str:
        return f"{self.url_prefix}/{folder}/{filename}"

    def scan(self, project_dir: Path | str) -> AssetScan:
        """Return the images and videos of ``project_dir`` in name order.

        A directory or thumbnail sibling that cannot be read yields an empty scan.
        """
        project_dir = Path(project_dir)
        folder = project_dir.name
        scan = AssetScan()
        try:
            entries = sorted(p for p in project_dir.iterdir() if p.is_file())
            for entry in entries:
                ext = entry.suffix.lower()
                if ext in self.image_extensions:
                    path = self.public_path(folder, entry.name)
                    scan.images.append(MediaAsset(path=path, thumbnail=path))
                elif ext in self.video_extensions:
                    scan.videos.append(
                        MediaAsset(
                            path=self.public_path(folder, entry.name),
                            thumbnail=self.find_thumbnail(entry),
                        )
                    )
        except OSError as e:
            logger.error(f"Error scanning media in {project_dir}: {e}")
            return AssetScan()
        return scan

    def find_thumbnail(self, video_path: Path) -> Optional[str]:
        """Public path of the first ``<stem>-thumb.<ext>`` sibling, if any."""
        for ext in self.thumbnail_extensions:
            candidate = video_path.with_name(f"{video_path.stem}{self.thumbnail_suffix}{ext}")
            if candidate.is_file():
                return self.public_path(video_path.parent.name, candidate.name)
        return None
