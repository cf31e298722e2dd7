from datetime import datetime
from typing import List, Optional, Union

from pydantic import AliasChoices, Field, field_validator

from ..models import DEFAULT_ROLE
from .entry import MAX_INT, CamelModel


def _zone_list(v: Union[str, List[str], None]) -> Optional[List[str]]:
    """Accept a single zone code or a list of them."""
    if v is None:
        return None
    if isinstance(v, str):
        return [v] if v else []
    return v


class UserCreate(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role: Optional[str] = None
    user_zone: Optional[List[str]] = None

    @field_validator('user_zone', mode='before')
    @classmethod
    def wrap_single_zone(cls, v):
        return _zone_list(v)


class UserUpdate(CamelModel):
    # Older clients send the row id as ``userId``
    id: int = Field(ge=1, le=MAX_INT, validation_alias=AliasChoices('id', 'userId'))
    username: Optional[str] = Field(None, min_length=1)
    password: Optional[str] = Field(None, min_length=1)
    role: Optional[str] = None
    user_zone: Optional[List[str]] = None

    @field_validator('user_zone', mode='before')
    @classmethod
    def wrap_single_zone(cls, v):
        return _zone_list(v)


class UserLogin(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class User(CamelModel):
    """Public view of an account. The password hash is never exposed."""
    id: str
    username: str
    role: str = DEFAULT_ROLE
    user_zone: Optional[List[str]] = None
    is_admin: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('id', mode='before')
    @classmethod
    def id_as_string(cls, v) -> str:
        return str(v)

    # Legacy rows predate the role and admin columns
    @field_validator('role', mode='before')
    @classmethod
    def default_role(cls, v):
        return v or DEFAULT_ROLE

    @field_validator('is_admin', mode='before')
    @classmethod
    def default_is_admin(cls, v):
        return bool(v)


class UserList(CamelModel):
    success: bool = True
    data: List[User]
    count: int
