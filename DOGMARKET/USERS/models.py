from pydantic import BaseModel, EmailStr, constr, field_validator
from typing import Literal

from DOGMARKET.utils.sanitize import SanitizedModel


# ---------------------------
# AUTH MODELS
# ---------------------------
class RegisterInput(SanitizedModel):
    name: constr(min_length=1, max_length=100)
    email: EmailStr
    password: constr(min_length=6, max_length=128)
    role: Literal["buyer", "vendor", "vet"]

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower().strip() if isinstance(v, str) else v


class LoginInput(SanitizedModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower().strip() if isinstance(v, str) else v


class UserPublic(BaseModel):
    id: str
    name: str
    email: str
    role: str


class AuthResponse(BaseModel):
    token: str
    user: UserPublic
