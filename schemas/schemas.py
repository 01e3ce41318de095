import datetime

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    address: str
    chain_id: int = Field(alias="chainId")

    class Config:
        populate_by_name = True


class User(BaseModel):
    id: int
    address: str
    chain_id: int = Field(alias="chainId")
    created_at: datetime.datetime = Field(alias="createdAt")
    updated_at: datetime.datetime = Field(alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class LoginSigned(BaseModel):
    address: str
    chain_id: int = Field(alias="chainId")
    message: str
    signature: str

    class Config:
        populate_by_name = True
