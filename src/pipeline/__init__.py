"""Pipeline orchestrators for the two manifest sources."""

from src.pipeline.database_pipeline import DatabasePipeline
from src.pipeline.filesystem_pipeline import FilesystemPipeline

__all__ = ["DatabasePipeline", "FilesystemPipeline"]
