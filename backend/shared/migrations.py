"""
SQL migration tracking for the Supabase Postgres database.

Migrations are plain ``NNN_name.sql`` files applied in filename order.
Each applied file is recorded with a checksum in ``_migrations`` so edits
to an already-applied file can be reported.
"""

from dataclasses import dataclass
from datetime import datetime
import hashlib
import logging
from pathlib import Path
from typing import Optional

from psycopg2 import sql

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"
MIGRATIONS_TABLE = "_migrations"


@dataclass(frozen=True)
class MigrationFile:
    name: str
    path: Path
    checksum: str

    @classmethod
    def load(cls, path: Path) -> "MigrationFile":
        return cls(name=path.name, path=path, checksum=checksum_of(path.read_text()))

    def read(self) -> str:
        return self.path.read_text()


@dataclass(frozen=True)
class AppliedMigration:
    name: str
    checksum: str
    applied_at: Optional[datetime]


def checksum_of(content: str) -> str:
    return hashlib.sha256(content.encode()).hexdigest()[:16]


def discover(directory: Path = MIGRATIONS_DIR) -> list[MigrationFile]:
    """List migration files in apply order."""
    if not directory.exists():
        logger.warning(f"Migrations directory not found: {directory}")
        return []
    return [MigrationFile.load(p) for p in sorted(directory.glob("*.sql"))]


class MigrationRunner:
    """Applies pending migrations over a DB-API connection."""

    def __init__(self, conn, directory: Path = MIGRATIONS_DIR):
        self.conn = conn
        self.directory = directory

    def ensure_table(self) -> None:
        with self.conn.cursor() as cur:
            cur.execute(
                sql.SQL(
                    "CREATE TABLE IF NOT EXISTS {} ("
                    " id SERIAL PRIMARY KEY,"
                    " name VARCHAR(255) NOT NULL UNIQUE,"
                    " checksum VARCHAR(64) NOT NULL,"
                    " applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW())"
                ).format(sql.Identifier(MIGRATIONS_TABLE))
            )
        self.conn.commit()

    def applied(self) -> dict[str, AppliedMigration]:
        with self.conn.cursor() as cur:
            cur.execute(
                sql.SQL("SELECT name, checksum, applied_at FROM {} ORDER BY name").format(
                    sql.Identifier(MIGRATIONS_TABLE)
                )
            )
            rows = cur.fetchall()
        return {row[0]: AppliedMigration(*row) for row in rows}

    def pending(self) -> list[MigrationFile]:
        applied = self.applied()
        result = []
        for migration in discover(self.directory):
            previous = applied.get(migration.name)
            if previous is None:
                result.append(migration)
            elif previous.checksum != migration.checksum:
                logger.warning(f"Migration {migration.name} changed after it was applied")
        return result

    def apply(self, migration: MigrationFile) -> None:
        """Run one migration and record it in the same transaction."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(migration.read())
                cur.execute(
                    sql.SQL("INSERT INTO {} (name, checksum) VALUES (%s, %s)").format(
                        sql.Identifier(MIGRATIONS_TABLE)
                    ),
                    (migration.name, migration.checksum),
                )
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            logger.error(f"Migration {migration.name} failed")
            raise
        logger.info(f"Applied migration {migration.name}")

    def run(self, dry_run: bool = False) -> list[MigrationFile]:
        """Apply every pending migration. Returns the ones applied (or that would be)."""
        self.ensure_table()
        pending = self.pending()
        if not dry_run:
            for migration in pending:
                self.apply(migration)
        return pending
