from sqlalchemy import text
from sqlalchemy.engine import Connection

from .base import Migration


class CreateUserTable1677483938843(Migration):
    name = "CreateUserTable1677483938843"
    timestamp = 1677483938843

    def up(self, conn: Connection) -> None:
        if self.is_sqlite(conn):
            ddl = (
                'CREATE TABLE "user" ('
                '"id" INTEGER NOT NULL, '
                '"address" VARCHAR NOT NULL, '
                '"chainId" INTEGER NOT NULL, '
                '"createdAt" DATETIME NOT NULL DEFAULT (CURRENT_TIMESTAMP), '
                '"updatedAt" DATETIME NOT NULL DEFAULT (CURRENT_TIMESTAMP), '
                'CONSTRAINT "PK_cace4a159ff9f2512dd42373760" PRIMARY KEY ("id"))'
            )
        else:
            ddl = (
                'CREATE TABLE "user" ('
                '"id" SERIAL NOT NULL, '
                '"address" character varying NOT NULL, '
                '"chainId" integer NOT NULL, '
                "\"createdAt\" TIMESTAMP NOT NULL DEFAULT ('now'::text)::timestamp(6) with time zone, "
                "\"updatedAt\" TIMESTAMP NOT NULL DEFAULT ('now'::text)::timestamp(6) with time zone, "
                'CONSTRAINT "PK_cace4a159ff9f2512dd42373760" PRIMARY KEY ("id"))'
            )
        conn.execute(text(ddl))

    def down(self, conn: Connection) -> None:
        conn.execute(text('DROP TABLE "user"'))
