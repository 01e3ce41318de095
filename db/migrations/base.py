from sqlalchemy.engine import Connection


class Migration:
    """
    One schema change. Subclasses set name and timestamp and
    implement up/down against an open connection (inside a transaction)
    """

    name: str = ""
    timestamp: int = 0

    def up(self, conn: Connection) -> None:
        raise NotImplementedError

    def down(self, conn: Connection) -> None:
        raise NotImplementedError

    @staticmethod
    def is_sqlite(conn: Connection) -> bool:
        return conn.dialect.name == "sqlite"
