"""Pydantic models for sidecar metadata and manifest records."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectMetadata(BaseModel):
    """Parsed ``project.yml`` sidecar.

    Nothing is required and no value types are enforced: a sidecar without a
    title still yields a record, and YAML booleans, lists or mappings are kept
    as parsed.
    """

    model_config = ConfigDict(extra="ignore")

    title: Any = None
    subtitle: Any = None
    description: Any = None
    start_date: Any = None
    end_date: Any = None
    tech: Any = None
    image_layout: Any = None
    github_url: Any = None
    live_url: Any = None

    @field_validator(
        "title",
        "subtitle",
        "description",
        "start_date",
        "end_date",
        "image_layout",
        "github_url",
        "live_url",
        mode="before",
    )
    @classmethod
    def coerce_scalar(cls, v: Any) -> Any:
        """YAML turns unquoted dates and numbers into non-strings; render them back."""
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (date, datetime)):
            return v.isoformat()
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class TechItem(BaseModel):
    """Technology entry resolved against the icon directory."""

    model_config = ConfigDict(frozen=True)

    name: str
    icon: Optional[str] = None


class DatabaseTechItem(BaseModel):
    """Technology entry resolved against the ``technologies`` table."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    icon: Optional[str] = None
    icon_type: Optional[str] = Field(default=None, alias="iconType")


class Technology(BaseModel):
    """Row of the ``technologies`` lookup table."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    icon_path: Optional[str] = None
    icon_type: Optional[str] = None


class MediaAsset(BaseModel):
    """Image or video discovered next to a sidecar."""

    model_config = ConfigDict(frozen=True)

    path: str
    thumbnail: Optional[str] = None


class ProjectRecord(BaseModel):
    """Manifest entry assembled from a project directory.

    Sidecar values are carried over as parsed, so the scalar fields are untyped.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    title: Any = None
    subtitle: Any = None
    description: Any = ""
    start_date: Any = ""
    end_date: Any = ""
    tech: List[TechItem] = Field(default_factory=list)
    images: List[MediaAsset] = Field(default_factory=list)
    videos: List[MediaAsset] = Field(default_factory=list)
    image_layout: Any = "grid"
    github_url: Any = None
    live_url: Any = None

    def media_summary(self) -> str:
        parts = []
        if self.images:
            parts.append(f"{len(self.images)} images")
        if self.videos:
            parts.append(f"{len(self.videos)} videos")
        return f"({', '.join(parts)})" if parts else "(no media)"


class DatabaseProjectRecord(BaseModel):
    """Manifest entry assembled from a ``projects`` table row."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: Optional[str] = None
    description: str = ""
    image: Optional[str] = None
    tech: List[DatabaseTechItem] = Field(default_factory=list)
    start_date: str = ""
    end_date: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ProjectResult(BaseModel):
    """Outcome of assembling one project: a record, or the reason it was skipped."""

    source: str
    record: ProjectRecord | DatabaseProjectRecord | None = None
    skipped_reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.record is not None

    @classmethod
    def skipped(cls, source: str, reason: str) -> "ProjectResult":
        return cls(source=source, skipped_reason=reason)


class BuildReport(BaseModel):
    """Summary of one pipeline run."""

    records: List[ProjectRecord | DatabaseProjectRecord] = Field(default_factory=list)
    skipped: List[ProjectResult] = Field(default_factory=list)
    output_path: Optional[Path] = None
    aborted: bool = False
    error: Optional[str] = None

    @property
    def written(self) -> bool:
        return self.output_path is not None

    def summary(self) -> str:
        """Return a human-readable summary of the run."""
        if self.aborted:
            return f"Build aborted: {self.error}"
        return (
            f"Built {len(self.records)} projects "
            f"({len(self.skipped)} skipped) -> {self.output_path}"
        )
