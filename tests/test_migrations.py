import sqlalchemy as sa
import pytest

from db.migrations import revert_migration, run_migrations, show_migrations
from db.user import User

CREATE_USER = "CreateUserTable1677483938843"


@pytest.fixture
def engine(tmp_path):
    engine = sa.create_engine(f"sqlite:///{tmp_path / 'migrations.sqlite'}")
    yield engine
    engine.dispose()


def test_run_creates_user_table(engine):
    assert run_migrations(engine) == [CREATE_USER]

    inspector = sa.inspect(engine)
    columns = {c["name"]: c for c in inspector.get_columns("user")}

    assert set(columns) == {"id", "address", "chainId", "createdAt", "updatedAt"}
    assert not any(c["nullable"] for c in columns.values())
    assert inspector.get_pk_constraint("user")["constrained_columns"] == ["id"]

    with engine.connect() as conn:
        ddl = conn.execute(
            sa.text("SELECT sql FROM sqlite_master WHERE name = 'user'")
        ).scalar()
    assert "PK_cace4a159ff9f2512dd42373760" in ddl


def test_run_is_idempotent(engine):
    run_migrations(engine)
    assert run_migrations(engine) == []
    assert show_migrations(engine) == [(CREATE_USER, True)]


def test_migrations_are_recorded(engine):
    run_migrations(engine)

    with engine.connect() as conn:
        rows = conn.execute(sa.text("SELECT timestamp, name FROM migrations")).all()
    assert [tuple(row) for row in rows] == [(1677483938843, CREATE_USER)]


def test_revert_drops_user_table(engine):
    run_migrations(engine)

    assert revert_migration(engine) == CREATE_USER
    assert "user" not in sa.inspect(engine).get_table_names()
    assert show_migrations(engine) == [(CREATE_USER, False)]

    assert revert_migration(engine) is None


def test_schema_matches_model(db_sess):
    user = User(address="0xD056bA7d32c8C83a0404940245d4a89056Dfc699", chain_id=1)
    db_sess.add(user)
    db_sess.commit()
    db_sess.refresh(user)

    assert user.id == 1
    assert user.created_at is not None
    assert user.updated_at is not None
