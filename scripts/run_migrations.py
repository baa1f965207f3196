#!/usr/bin/env python3
"""Apply profile store migrations, reporting failures to Logfire.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3c1f9a7d2e41
    python scripts/run_migrations.py --sql      # print SQL instead of running it
"""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config

from dossier.config import Settings
from dossier.util.observability import configure_logfire


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("revision", nargs="?", default="head")
    parser.add_argument(
        "--sql", action="store_true", help="emit SQL without touching the database"
    )
    args = parser.parse_args(argv)

    configure_logfire(Settings())

    with logfire.span("run_migrations", revision=args.revision, offline=args.sql):
        try:
            command.upgrade(Config("alembic.ini"), args.revision, sql=args.sql)
        except Exception as e:
            logfire.error(
                "Profile store migration failed",
                revision=args.revision,
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise
        logfire.info("Profile store migrated", revision=args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
