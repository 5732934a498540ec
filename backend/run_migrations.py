#!/usr/bin/env python3
"""
Database migration runner for Supabase.

Usage:
    python run_migrations.py              # Run pending migrations
    python run_migrations.py --status     # Show migration status
    python run_migrations.py --dry-run    # Show what would run

Configuration:
    Set SUPABASE_DB_URL in your .env file (Supabase Dashboard, Settings,
    Database, Connection string, URI).
"""

import argparse
import sys

import psycopg2
from rich.console import Console
from rich.table import Table

from shared.config import get_settings
from shared.migrations import MigrationRunner

console = Console()


def connect():
    settings = get_settings()
    if not settings.supabase_db_url:
        console.print("[red]Error:[/red] SUPABASE_DB_URL is not set.")
        sys.exit(1)
    try:
        return psycopg2.connect(settings.supabase_db_url)
    except psycopg2.Error as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        sys.exit(1)


def show_status(runner: MigrationRunner):
    table = Table(title="Migration Status")
    table.add_column("Migration", style="cyan")
    table.add_column("Status")
    table.add_column("Applied At")
    table.add_column("Checksum")

    for applied in runner.applied().values():
        when = applied.applied_at.strftime("%Y-%m-%d %H:%M:%S") if applied.applied_at else ""
        table.add_row(applied.name, "[green]Applied[/green]", when, applied.checksum)
    for migration in runner.pending():
        table.add_row(migration.name, "[yellow]Pending[/yellow]", "", migration.checksum)

    console.print(table)


def main():
    parser = argparse.ArgumentParser(description="Run database migrations for Supabase")
    parser.add_argument("--status", action="store_true", help="Show migration status")
    parser.add_argument("--dry-run", action="store_true", help="List pending migrations only")
    args = parser.parse_args()

    console.print("[bold]EcoChallenge Database Migrations[/bold]")

    conn = connect()
    runner = MigrationRunner(conn)
    try:
        runner.ensure_table()
        if args.status:
            show_status(runner)
            return

        migrations = runner.run(dry_run=args.dry_run)
        if not migrations:
            console.print("[green]All migrations are up to date![/green]")
            return
        verb = "Would run" if args.dry_run else "Applied"
        for migration in migrations:
            console.print(f"[cyan]{verb}:[/cyan] {migration.name}")
    except psycopg2.Error as e:
        console.print(f"[red]Migration failed:[/red] {e}")
        sys.exit(1)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
