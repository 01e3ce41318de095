import sqlalchemy as sa

from .database import SqlAlchemyBase


class User(SqlAlchemyBase):
    __tablename__ = "user"

    id = sa.Column(sa.Integer, primary_key=True, autoincrement=True)

    address = sa.Column(sa.String, nullable=False)
    chain_id = sa.Column("chainId", sa.Integer, nullable=False)

    created_at = sa.Column(
        "createdAt", sa.DateTime, nullable=False, server_default=sa.func.now()
    )
    updated_at = sa.Column(
        "updatedAt",
        sa.DateTime,
        nullable=False,
        server_default=sa.func.now(),
        onupdate=sa.func.now(),
    )

    def __repr__(self):
        return f"<User {self.id} {self.address} chain={self.chain_id}>"
