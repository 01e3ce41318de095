from typing import List, Optional

import sqlalchemy as sa
from sqlalchemy.orm import Session

from db.user import User


def create_user(db: Session, address: str, chain_id: int) -> User:
    user = User(address=address, chain_id=chain_id)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_address(db: Session, address: str, chain_id: int) -> Optional[User]:
    return (
        db.query(User)
        .filter(User.address == address)
        .filter(User.chain_id == chain_id)
        .first()
    )


def list_users(db: Session, chain_id: Optional[int] = None) -> List[User]:
    query = db.query(User)
    if chain_id is not None:
        query = query.filter(User.chain_id == chain_id)
    return query.order_by(User.id).all()


def touch_user(db: Session, user: User) -> User:
    user.updated_at = sa.func.now()
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
