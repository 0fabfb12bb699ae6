"""Pydantic request schemas for user administration."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.cp_common.enums import UserRole
from src.cp_common.sanitize import SanitizedStr
from src.cp_gateway.user.schemas import check_password_complexity


class CreateUserRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    first_name: SanitizedStr = Field(..., min_length=1, max_length=100)
    last_name: SanitizedStr = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.USER

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str) -> str:
        return check_password_complexity(v)


class UpdateUserRequest(BaseModel):
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=8, max_length=128)
    first_name: SanitizedStr | None = Field(None, min_length=1, max_length=100)
    last_name: SanitizedStr | None = Field(None, min_length=1, max_length=100)
    role: UserRole | None = None
    is_active: bool | None = None

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str | None) -> str | None:
        return check_password_complexity(v) if v is not None else v


class BrokerAccount(BaseModel):
    email: str
    created: bool
