import argparse
import logging
import sys

import config
from db import database
from db.migrations import revert_migration, run_migrations, show_migrations


def main() -> int:
    parser = argparse.ArgumentParser(description="Manage database migrations")
    parser.add_argument("command", choices=["run", "revert", "show"])
    args = parser.parse_args()

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s | %(levelname)s - %(message)s",
    )

    database.global_init(config.get_database_url())
    engine = database.get_engine()

    if args.command == "run":
        for name in run_migrations(engine):
            print(f"Applied {name}")
    elif args.command == "revert":
        name = revert_migration(engine)
        print(f"Reverted {name}" if name else "Nothing to revert")
    else:
        for name, applied in show_migrations(engine):
            print(f"[{'X' if applied else ' '}] {name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
