"""Tests for shared/migrations.py."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from shared.migrations import (
    MIGRATIONS_DIR,
    MigrationRunner,
    checksum_of,
    discover,
)


@pytest.fixture
def migrations_dir(tmp_path):
    (tmp_path / "002_second.sql").write_text("CREATE TABLE b (id INT);")
    (tmp_path / "001_first.sql").write_text("CREATE TABLE a (id INT);")
    (tmp_path / "notes.txt").write_text("not a migration")
    return tmp_path


def make_conn(applied_rows=()):
    conn = MagicMock()
    cursor = conn.cursor.return_value.__enter__.return_value
    cursor.fetchall.return_value = list(applied_rows)
    return conn, cursor


class TestDiscover:
    def test_orders_by_filename(self, migrations_dir):
        names = [m.name for m in discover(migrations_dir)]
        assert names == ["001_first.sql", "002_second.sql"]

    def test_missing_directory(self, tmp_path):
        assert discover(tmp_path / "nope") == []

    def test_checksum_is_stable(self, migrations_dir):
        first = discover(migrations_dir)[0]
        assert first.checksum == checksum_of("CREATE TABLE a (id INT);")
        assert len(first.checksum) == 16

    def test_repo_ships_initial_schema(self):
        names = [m.name for m in discover(MIGRATIONS_DIR)]
        assert "001_initial_schema.sql" in names


class TestMigrationRunner:
    def test_pending_skips_applied(self, migrations_dir):
        checksum = checksum_of("CREATE TABLE a (id INT);")
        conn, _ = make_conn([("001_first.sql", checksum, datetime.now(timezone.utc))])
        runner = MigrationRunner(conn, migrations_dir)

        assert [m.name for m in runner.pending()] == ["002_second.sql"]

    def test_changed_applied_migration_is_not_rerun(self, migrations_dir):
        conn, _ = make_conn([("001_first.sql", "stale", None)])
        runner = MigrationRunner(conn, migrations_dir)

        assert [m.name for m in runner.pending()] == ["002_second.sql"]

    def test_run_applies_in_order_and_commits(self, migrations_dir):
        conn, cursor = make_conn()
        runner = MigrationRunner(conn, migrations_dir)

        applied = runner.run()

        assert [m.name for m in applied] == ["001_first.sql", "002_second.sql"]
        executed = [c.args[0] for c in cursor.execute.call_args_list]
        assert "CREATE TABLE a (id INT);" in executed
        assert executed.index("CREATE TABLE a (id INT);") < executed.index("CREATE TABLE b (id INT);")
        assert conn.commit.call_count >= 3

    def test_dry_run_executes_nothing(self, migrations_dir):
        conn, cursor = make_conn()
        runner = MigrationRunner(conn, migrations_dir)

        pending = runner.run(dry_run=True)

        assert len(pending) == 2
        executed = [c.args[0] for c in cursor.execute.call_args_list]
        assert "CREATE TABLE a (id INT);" not in executed

    def test_failure_rolls_back(self, migrations_dir):
        conn, cursor = make_conn()
        cursor.execute.side_effect = RuntimeError("syntax error")
        runner = MigrationRunner(conn, migrations_dir)
        migration = discover(migrations_dir)[0]

        with pytest.raises(RuntimeError):
            runner.apply(migration)
        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
