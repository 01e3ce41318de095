"""
Schema migrations for the API database.

Applied migrations are recorded in the "migrations" table (id, timestamp, name).
Every migration runs in its own transaction together with its bookkeeping row.

  python -m db.migrations run      # apply pending migrations
  python -m db.migrations revert   # undo the last applied one
  python -m db.migrations show     # list migrations and their state
"""

import logging
from typing import List, Optional, Tuple

import sqlalchemy as sa
from sqlalchemy.engine import Connection, Engine

from .base import Migration
from .create_user_table_1677483938843 import CreateUserTable1677483938843

MIGRATIONS: List[Migration] = sorted(
    [CreateUserTable1677483938843()], key=lambda m: m.timestamp
)

_metadata = sa.MetaData()

migrations_table = sa.Table(
    "migrations",
    _metadata,
    sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
    sa.Column("timestamp", sa.BigInteger, nullable=False),
    sa.Column("name", sa.String, nullable=False),
)


def _ensure_migrations_table(conn: Connection) -> None:
    _metadata.create_all(conn, checkfirst=True)


def _applied_names(conn: Connection) -> List[str]:
    rows = conn.execute(
        sa.select(migrations_table.c.name).order_by(
            migrations_table.c.timestamp, migrations_table.c.id
        )
    )
    return [row.name for row in rows]


def run_migrations(engine: Engine) -> List[str]:
    """Apply every pending migration in timestamp order, returns applied names"""
    with engine.begin() as conn:
        _ensure_migrations_table(conn)
        applied = set(_applied_names(conn))

    done = []
    for migration in MIGRATIONS:
        if migration.name in applied:
            continue

        logging.info(f"Running migration {migration.name}")
        with engine.begin() as conn:
            migration.up(conn)
            conn.execute(
                migrations_table.insert().values(
                    timestamp=migration.timestamp, name=migration.name
                )
            )
        done.append(migration.name)

    if not done:
        logging.info("No pending migrations")
    return done


def revert_migration(engine: Engine) -> Optional[str]:
    """Undo the most recently applied migration, returns its name"""
    by_name = {m.name: m for m in MIGRATIONS}

    with engine.begin() as conn:
        _ensure_migrations_table(conn)
        applied = _applied_names(conn)
        if not applied:
            logging.info("No migrations to revert")
            return None

        last = applied[-1]
        if last not in by_name:
            raise LookupError(f"Applied migration {last} is not known to this build")

        logging.info(f"Reverting migration {last}")
        by_name[last].down(conn)
        conn.execute(migrations_table.delete().where(migrations_table.c.name == last))
    return last


def show_migrations(engine: Engine) -> List[Tuple[str, bool]]:
    with engine.begin() as conn:
        _ensure_migrations_table(conn)
        applied = set(_applied_names(conn))
    return [(m.name, m.name in applied) for m in MIGRATIONS]
