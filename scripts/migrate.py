#!/usr/bin/env python3
"""
Database migration management script
"""

import argparse
from pathlib import Path

from alembic import command
from alembic.config import Config

from app.core.config import settings
from app.core.logging import log, setup_logging


def get_alembic_config() -> Config:
    """Alembic configuration pointed at the configured database"""
    config_path = Path(__file__).parent.parent / "alembic.ini"
    config = Config(str(config_path))
    config.set_main_option("script_location", str(config_path.parent / "alembic"))

    # Override database URL from settings ('%' must be escaped for configparser)
    config.set_main_option("sqlalchemy.url", settings.database_url.replace("%", "%%"))

    return config


def create_revision(message: str, autogenerate: bool = True):
    """Create a new migration"""
    command.revision(get_alembic_config(), message=message, autogenerate=autogenerate)
    log.info("Created new migration", message=message)


def upgrade_database(revision: str = "head"):
    command.upgrade(get_alembic_config(), revision)
    log.info("Database upgraded", revision=revision)


def downgrade_database(revision: str = "-1"):
    command.downgrade(get_alembic_config(), revision)
    log.info("Database downgraded", revision=revision)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Database migration management")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    revision_parser = subparsers.add_parser("revision", help="Create a new migration")
    revision_parser.add_argument("message", help="Migration message")
    revision_parser.add_argument("--empty", action="store_true", help="Skip autogenerate")

    upgrade_parser = subparsers.add_parser("upgrade", help="Upgrade database")
    upgrade_parser.add_argument("revision", nargs="?", default="head", help="Target revision (default: head)")

    downgrade_parser = subparsers.add_parser("downgrade", help="Downgrade database")
    downgrade_parser.add_argument("revision", nargs="?", default="-1", help="Target revision (default: -1)")

    subparsers.add_parser("current", help="Show current revision")
    subparsers.add_parser("history", help="Show migration history")

    return parser


def main(argv=None):
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging()

    if args.command == "revision":
        create_revision(args.message, autogenerate=not args.empty)
    elif args.command == "upgrade":
        upgrade_database(args.revision)
    elif args.command == "downgrade":
        downgrade_database(args.revision)
    elif args.command == "current":
        command.current(get_alembic_config())
    elif args.command == "history":
        command.history(get_alembic_config())
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
