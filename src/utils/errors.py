"""Exceptions raised while building the project manifest."""

from pathlib import Path


class ManifestBuildError(Exception):
    """Base class for manifest build failures."""


class SidecarError(ManifestBuildError):
    """A project's sidecar metadata file is missing or unreadable."""

    def __init__(self, project_dir: str | Path, reason: str):
        self.project_dir = Path(project_dir)
        self.reason = reason
        super().__init__(f"Error reading sidecar in {self.project_dir}: {reason}")


class ProjectsRootNotFoundError(ManifestBuildError):
    """The projects directory to scan does not exist."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(f"Projects directory not found: {self.path}")
