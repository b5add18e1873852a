"""Sidecar (``project.yml``) reader for project directories."""

from __future__ import annotations

from pathlib import Path

import yaml

from src.manifest.models import ProjectMetadata
from src.utils.errors import SidecarError


class MetadataReader:
    """Read and parse the sidecar metadata file of a project directory."""

    def __init__(self, sidecar_filename: str = "project.yml") -> None:
        self.sidecar_filename = sidecar_filename

    def sidecar_path(self, project_dir: Path | str) -> Path:
        return Path(project_dir) / self.sidecar_filename

    def read(self, project_dir: Path | str) -> ProjectMetadata:
        """Parse the sidecar of ``project_dir``.

        Raises:
            SidecarError: If the file is missing, is not valid YAML, or its root
                is not a mapping
        """
        path = self.sidecar_path(project_dir)
        try:
            raw_text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise SidecarError(project_dir, f"{self.sidecar_filename} not found") from None
        except (OSError, UnicodeDecodeError) as e:
            raise SidecarError(project_dir, str(e)) from e

        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as e:
            raise SidecarError(project_dir, f"invalid YAML: {e}") from e

        if data is None:
            raise SidecarError(project_dir, f"{self.sidecar_filename} is empty")
        if not isinstance(data, dict):
            raise SidecarError(project_dir, "sidecar root must be a mapping")

        return ProjectMetadata.model_validate(data)
