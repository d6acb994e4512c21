from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from fintrack.domain.users.entities import User


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, validate_by_name=True)


class RegisterRequestDTO(_CamelModel):
    name: str = Field(min_length=3, max_length=128)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Name must be at least 3 characters")
        return value


class LoginRequestDTO(_CamelModel):
    # No format checks on login, bad input is just a failed login.
    email: str = Field(min_length=1, max_length=254)
    password: str = Field(min_length=1, max_length=128)
    remember_me: bool = False


class UserDTO(_CamelModel):
    id: int
    name: str
    email: str
    created_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> UserDTO:
        return cls(id=user.id, name=user.name, email=user.email, created_at=user.created_at)


class LoginResponseDTO(_CamelModel):
    user: UserDTO
    token: str


class TokenResponseDTO(_CamelModel):
    token: str
