import logging

import sqlalchemy as sa
from sqlalchemy import orm
from sqlalchemy.orm import Session

SqlAlchemyBase = orm.declarative_base()

__factory = None
__engine = None


def global_init(db_url: str) -> None:
    global __factory, __engine

    if __factory:
        return

    if not db_url or not db_url.strip():
        raise ValueError("Database url must be specified")

    logging.info(f"Connecting to database {db_url.split('@')[-1]}")

    connect_args = {}
    if db_url.startswith("sqlite"):
        # FastAPI serves sync routes from a thread pool
        connect_args["check_same_thread"] = False

    __engine = sa.create_engine(db_url, connect_args=connect_args)
    __factory = orm.sessionmaker(bind=__engine, autocommit=False, autoflush=False)


def global_init_sqlite(db_file: str) -> None:
    global_init(f"sqlite:///{db_file.strip()}")


def get_engine() -> sa.engine.Engine:
    if __engine is None:
        raise RuntimeError("Database is not initialised, call global_init first")
    return __engine


def create_session() -> Session:
    if __factory is None:
        raise RuntimeError("Database is not initialised, call global_init first")
    return __factory()


def get_db():
    db_sess = create_session()
    try:
        yield db_sess
    finally:
        db_sess.close()


def dispose() -> None:
    global __factory, __engine

    if __engine is not None:
        __engine.dispose()
    __engine = None
    __factory = None
