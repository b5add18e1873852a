"""SQLite manager for the ``projects`` and ``technologies`` tables."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from loguru import logger
from pydantic import BaseModel

from src.manifest.models import Technology
from src.utils.config import DatabaseConfig

PROJECTS_DDL = """
    CREATE TABLE IF NOT EXISTS {name} (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        description TEXT,
        image TEXT,
        tech TEXT,
        start_date DATE,
        end_date DATE,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
"""

TECHNOLOGIES_DDL = """
    CREATE TABLE IF NOT EXISTS technologies (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT UNIQUE NOT NULL,
        icon_path TEXT NOT NULL,
        icon_type TEXT NOT NULL,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
"""

PROJECT_COLUMNS = (
    "id",
    "title",
    "description",
    "image",
    "tech",
    "start_date",
    "end_date",
    "created_at",
    "updated_at",
)

# Columns the legacy schema declared NOT NULL.
LEGACY_NOT_NULL_COLUMNS = {"description", "image", "tech"}

INITIAL_TECHNOLOGIES = [
    ("bash", "/portfolio/icons/bash.svg", "svg"),
    ("c#", "/portfolio/icons/c#.svg", "svg"),
    ("c++", "/portfolio/icons/c++.svg", "svg"),
    ("c", "/portfolio/icons/c.svg", "svg"),
    ("dart", "/portfolio/icons/dart.svg", "svg"),
    ("go", "/portfolio/icons/go.svg", "svg"),
    ("haskell", "/portfolio/icons/haskell.svg", "svg"),
    ("java", "/portfolio/icons/java.svg", "svg"),
    ("javascript", "/portfolio/icons/javascript.svg", "svg"),
    ("kotlin", "/portfolio/icons/kotlin.svg", "svg"),
    ("php", "/portfolio/icons/php.png", "png"),
    ("python", "/portfolio/icons/python.svg", "svg"),
    ("ruby", "/portfolio/icons/ruby.svg", "svg"),
    ("rust", "/portfolio/icons/rust.svg", "svg"),
    ("typescript", "/portfolio/icons/typescript.svg", "svg"),
]

SAMPLE_PROJECTS = [
    (
        "E-Commerce Platform",
        "A full-stack e-commerce application built with React, Node.js, and MongoDB.",
        "https://images.unsplash.com/photo-1556742049-0cfed4f6a45d?w=400&h=200&fit=crop",
        "React,Node.js,MongoDB,Express",
        "2024-01-15",
        "2024-06-30",
    ),
    (
        "Task Management App",
        "A collaborative task management tool with real-time updates and team features.",
        "https://images.unsplash.com/photo-1454165804606-c3d57bc86b40?w=400&h=200&fit=crop",
        "React,Firebase,Tailwind CSS",
        "2024-03-01",
        "2024-08-15",
    ),
    (
        "Portfolio Website",
        "A modern, responsive portfolio website showcasing my work and skills.",
        "https://images.unsplash.com/photo-1467232004584-a241de8bcf5d?w=400&h=200&fit=crop",
        "React,Vite,Pico CSS",
        "2024-07-01",
        "2024-08-24",
    ),
]


class BootstrapReport(BaseModel):
    """What ``SQLiteManager.bootstrap`` changed."""

    created_projects_table: bool = False
    migrated: bool = False
    technologies_seeded: int = 0
    projects_seeded: int = 0


class SQLiteManager:
    """Manager for the SQLite project store.

    Handles the connection, the schema bootstrap (creation, legacy migration and
    seeding) and the reads used by the export.

    Attributes:
        db_path: Database file location
        seed_sample_data: Insert sample projects when the table is first created
        conn: Open connection, or None before ``connect()``
    """

    def __init__(self, config: DatabaseConfig, db_path: Path | str | None = None):
        """Initialize the manager.

        Args:
            config: Database configuration
            db_path: Overrides ``config.db_path`` (already resolved by the caller)
        """
        self.db_path = Path(db_path) if db_path is not None else Path(config.db_path)
        self.seed_sample_data = config.seed_sample_data
        self.conn: Optional[sqlite3.Connection] = None

    def connect(self) -> None:
        """Open the database file, creating it if needed.

        Raises:
            sqlite3.Error: If the database cannot be opened
        """
        try:
            self.conn = sqlite3.connect(self.db_path)
            self.conn.row_factory = sqlite3.Row
            logger.info(f"Opened SQLite database at {self.db_path}")
        except sqlite3.Error as e:
            logger.error(f"Failed to open SQLite database {self.db_path}: {e}")
            raise

    def close(self) -> None:
        """Close the connection."""
        if self.conn is not None:
            self.conn.close()
            self.conn = None
            logger.info("Closed SQLite connection")

    def __enter__(self) -> "SQLiteManager":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Commit on success, roll back on error.

        Raises:
            RuntimeError: If not connected to the database
        """
        if self.conn is None:
            raise RuntimeError("Not connected to SQLite. Call connect() first.")
        # Explicit BEGIN so DDL statements are part of the transaction too.
        if not self.conn.in_transaction:
            self.conn.execute("BEGIN")
        try:
            yield self.conn
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise

    def _require_conn(self) -> sqlite3.Connection:
        if self.conn is None:
            raise RuntimeError("Not connected to SQLite. Call connect() first.")
        return self.conn

    # Schema
    def table_exists(self, table_name: str) -> bool:
        row = (
            self._require_conn()
            .execute("SELECT name FROM sqlite_master WHERE type='table' AND name=?", (table_name,))
            .fetchone()
        )
        return row is not None

    def has_legacy_projects_schema(self) -> bool:
        """True when ``projects`` still declares description/image/tech NOT NULL."""
        if not self.table_exists("projects"):
            return False
        columns = self._require_conn().execute("PRAGMA table_info(projects)").fetchall()
        return any(
            col["name"] in LEGACY_NOT_NULL_COLUMNS and col["notnull"] == 1 for col in columns
        )

    def migrate_legacy_projects_schema(self) -> bool:
        """Rebuild ``projects`` with nullable optional columns, keeping every row.

        Idempotent: does nothing when the schema is already current.

        Returns:
            True if a migration ran
        """
        if not self.has_legacy_projects_schema():
            return False

        logger.info("Migrating projects table from legacy schema...")
        columns = ", ".join(PROJECT_COLUMNS)
        with self.transaction() as conn:
            conn.execute("DROP TABLE IF EXISTS projects_new")
            conn.execute(PROJECTS_DDL.format(name="projects_new"))
            conn.execute(
                f"INSERT INTO projects_new ({columns}) SELECT {columns} FROM projects"
            )
            conn.execute("DROP TABLE projects")
            conn.execute("ALTER TABLE projects_new RENAME TO projects")

        if self.has_legacy_projects_schema():
            raise sqlite3.DatabaseError("projects table still has legacy schema after migration")
        logger.success("Database migration completed successfully")
        return True

    def create_schema(self) -> bool:
        """Create missing tables.

        Returns:
            True if the ``projects`` table did not exist before
        """
        created_projects = not self.table_exists("projects")
        with self.transaction() as conn:
            conn.execute(PROJECTS_DDL.format(name="projects"))
            conn.execute(TECHNOLOGIES_DDL)
        if created_projects:
            logger.info("Created projects table")
        return created_projects

    def seed_technologies(self) -> int:
        """Insert the initial technology list when the table is empty."""
        conn = self._require_conn()
        count = conn.execute("SELECT COUNT(*) AS count FROM technologies").fetchone()["count"]
        if count:
            return 0
        with self.transaction() as conn:
            conn.executemany(
                "INSERT INTO technologies (name, icon_path, icon_type) VALUES (?, ?, ?)",
                INITIAL_TECHNOLOGIES,
            )
        logger.info(f"Inserted {len(INITIAL_TECHNOLOGIES)} initial technologies")
        return len(INITIAL_TECHNOLOGIES)

    def seed_sample_projects(self) -> int:
        with self.transaction() as conn:
            conn.executemany(
                "INSERT INTO projects (title, description, image, tech, start_date, end_date) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                SAMPLE_PROJECTS,
            )
        logger.info(f"Created {len(SAMPLE_PROJECTS)} sample projects")
        return len(SAMPLE_PROJECTS)

    def bootstrap(self) -> BootstrapReport:
        """Bring the store to the current schema before it is read.

        Runs once per export: create missing tables, migrate a legacy
        ``projects`` table, seed technologies into an empty table, and seed
        sample projects only when ``projects`` was just created.
        """
        report = BootstrapReport()
        report.migrated = self.migrate_legacy_projects_schema()
        report.created_projects_table = self.create_schema()
        report.technologies_seeded = self.seed_technologies()
        if report.created_projects_table and self.seed_sample_data:
            report.projects_seeded = self.seed_sample_projects()
        return report

    # Reads
    def list_projects(self) -> List[Dict[str, Any]]:
        """All project rows, most recently ended (or created) first."""
        rows = (
            self._require_conn()
            .execute(
                """
                SELECT * FROM projects
                ORDER BY
                    CASE
                        WHEN end_date IS NOT NULL THEN end_date
                        ELSE created_at
                    END DESC,
                    created_at DESC
                """
            )
            .fetchall()
        )
        return [dict(row) for row in rows]

    def list_technologies(self) -> List[Technology]:
        rows = self._require_conn().execute("SELECT * FROM technologies").fetchall()
        return [Technology.model_validate(dict(row)) for row in rows]
