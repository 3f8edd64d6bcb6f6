"""Authentication schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class RegisterRequest(BaseModel):
    """Registration request schema."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=1)
    age: int | None = None
    gender: str | None = Field(None, max_length=50)

    @field_validator("email", mode="after")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("age", mode="before")
    @classmethod
    def _coerce_age(cls, value: Any) -> int | None:
        """Keep only positive whole numbers; anything else is stored as null."""
        if value is None or isinstance(value, bool):
            return None
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
        if not number.is_integer() or number <= 0:
            return None
        return int(number)

    @field_validator("gender", mode="before")
    @classmethod
    def _blank_gender_is_null(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class RegisterResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    user_id: int = Field(..., alias="userId")


class LoginRequest(BaseModel):
    """Login request schema."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="after")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        """Match the stored form; an unparseable address simply finds no user."""
        return value.strip().lower()


class UserResponse(BaseModel):
    """User as returned to clients. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    age: int | None = None
    gender: str | None = None


class LoginResponse(BaseModel):
    """Login response schema."""

    success: bool = True
    user: UserResponse
