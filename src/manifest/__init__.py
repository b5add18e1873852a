"""Manifest records and writer."""

from src.manifest.models import (
    BuildReport,
    DatabaseProjectRecord,
    DatabaseTechItem,
    MediaAsset,
    ProjectMetadata,
    ProjectRecord,
    ProjectResult,
    Technology,
    TechItem,
)
from src.manifest.writer import render_manifest, sort_projects, write_manifest

__all__ = [
    "BuildReport",
    "DatabaseProjectRecord",
    "DatabaseTechItem",
    "MediaAsset",
    "ProjectMetadata",
    "ProjectRecord",
    "ProjectResult",
    "TechItem",
    "Technology",
    "render_manifest",
    "sort_projects",
    "write_manifest",
]
