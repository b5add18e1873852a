"""Export the project manifest from the SQLite store."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger

from src.manifest.models import BuildReport, DatabaseProjectRecord
from src.manifest.writer import sort_projects, write_manifest
from src.sources.tech_resolver import TechnologyCatalog
from src.storage.sqlite_manager import SQLiteManager
from src.utils.config import Config


def _text(value: Any) -> str:
    return "" if value is None else str(value)


class DatabasePipeline:
    """Join project rows with the technology table and write the manifest.

    Unlike the filesystem build, every failure here is fatal and propagates.
    """

    def __init__(self, config: Config, store: Optional[SQLiteManager] = None) -> None:
        self.config = config
        self.output_path = config.output_path
        self.store = store or SQLiteManager(config.database, db_path=config.db_path)

    def assemble_record(
        self, row: Dict[str, Any], project_id: int, catalog: TechnologyCatalog
    ) -> DatabaseProjectRecord:
        """Build the manifest record for one ``projects`` row."""
        return DatabaseProjectRecord(
            id=project_id,
            title=row.get("title"),
            description=row.get("description") or "",
            image=row.get("image") or None,
            tech=catalog.resolve(row.get("tech")),
            start_date=_text(row.get("start_date")),
            end_date=_text(row.get("end_date")),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    def build(self) -> BuildReport:
        """Bootstrap the store, read it, and overwrite the manifest.

        Raises:
            sqlite3.Error: On any database or schema failure
            OSError: If the manifest cannot be written
        """
        self.store.connect()
        try:
            bootstrap = self.store.bootstrap()
            if bootstrap.projects_seeded:
                logger.info("Projects table did not exist; sample projects created")

            catalog = TechnologyCatalog(self.store.list_technologies())
            rows = self.store.list_projects()
            records: List[DatabaseProjectRecord] = [
                self.assemble_record(row, project_id, catalog)
                for project_id, row in enumerate(rows, start=1)
            ]

            output_path = write_manifest(records, self.output_path, create_parents=True)
        finally:
            self.store.close()

        logger.success(f"Projects exported to {output_path}")
        logger.info(f"Total projects: {len(records)}")
        return BuildReport(records=sort_projects(records), output_path=output_path)
