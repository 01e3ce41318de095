import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from web3 import Web3

import crud
import schemas
from exceptions import BadRequestException
from db import get_db
from web3_service import Web3Service

router = APIRouter(prefix="/users", tags=["users"])

_web3_service = Web3Service()


def get_web3_service() -> Web3Service:
    return _web3_service


def checksum_address(address: str) -> str:
    try:
        return Web3.to_checksum_address(address)
    except ValueError:
        raise BadRequestException("Invalid address")


@router.post("", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def create_user(user_json: schemas.UserCreate, db: Session = Depends(get_db)):
    address = checksum_address(user_json.address)

    if crud.get_user_by_address(db, address, user_json.chain_id):
        raise BadRequestException("User already exists")

    user = crud.create_user(db, address, user_json.chain_id)
    logging.info(f"Created user {user.id} for {address} on chain {user.chain_id}")
    return user


@router.get("", response_model=List[schemas.User])
def list_users(chain_id: Optional[int] = None, db: Session = Depends(get_db)):
    return crud.list_users(db, chain_id)


@router.post("/login", response_model=schemas.User)
def login(
    json: schemas.LoginSigned,
    db: Session = Depends(get_db),
    web3_service: Web3Service = Depends(get_web3_service),
):
    address = checksum_address(json.address)

    # Raises 401 / 400 on a bad signature
    web3_service.validate_signature(address, json.signature, json.message)

    user = crud.get_user_by_address(db, address, json.chain_id)
    if user is None:
        user = crud.create_user(db, address, json.chain_id)
        logging.info(f"Created user {user.id} on login of {address}")
    else:
        user = crud.touch_user(db, user)
        logging.debug(f"User {user.id} logged in")
    return user


@router.get("/{user_id}", response_model=schemas.User)
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = crud.get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
