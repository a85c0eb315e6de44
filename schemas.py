from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = Field(None, alias="fullName")
    email: Optional[str] = Field(None, alias="userEmail")
    password: Optional[str] = Field(None, alias="userPassword")


class UserLogin(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = Field(None, alias="userEmail")
    password: Optional[str] = Field(None, alias="userPassword")


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    full_name: str = Field(serialization_alias="fullName")
    email: str
    created_at: datetime = Field(serialization_alias="createdAt")


class LinkCreate(BaseModel):
    Url: Optional[str] = None


class Identity(BaseModel):
    """Authenticated caller resolved from a session token."""

    user_id: int
