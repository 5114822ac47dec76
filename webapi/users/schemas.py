"""
Wire representations of users and the field-copy functions between them
and ``UserEntity``.
"""
import uuid
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from webapi.users.models import UserEntity


class UserInfoDto(BaseModel):
    """Writable user fields as submitted by clients."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    login: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")


class UserDto(BaseModel):
    """Read representation of a user."""
    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID
    login: Optional[str] = None
    full_name: str = Field(alias="fullName")


class PatchOperation(BaseModel):
    """One JSON Patch operation."""
    model_config = ConfigDict(populate_by_name=True)

    op: str
    path: str
    value: Any = None
    from_: Optional[str] = Field(default=None, alias="from")


# ----------------------------
# Mapping
# ----------------------------
def to_user_dto(user: UserEntity) -> UserDto:
    return UserDto(
        id=user.id,
        login=user.login,
        full_name=f"{user.last_name or ''} {user.first_name or ''}",
    )


def to_user_info(user: UserEntity) -> UserInfoDto:
    return UserInfoDto(
        login=user.login,
        first_name=user.first_name,
        last_name=user.last_name,
    )


def to_entity(info: UserInfoDto, user_id: Optional[uuid.UUID] = None) -> UserEntity:
    return UserEntity(
        id=user_id,
        login=info.login,
        first_name=info.first_name,
        last_name=info.last_name,
    )
