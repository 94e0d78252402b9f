"""Account DTOs (Pydantic v2).

Input contracts for registration and login.  Field names are camelCase on
the wire (``zipCode``, ``isDefault``) and snake_case in Python.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from modules.accounts.models import AddressType


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class AddressDTO(_WireModel):
    type: AddressType = AddressType.HOME
    address: str = Field(min_length=5)
    city: str = Field(min_length=2)
    state: str = Field(min_length=2)
    zip_code: str = Field(pattern=r"^\d{5,6}$")
    is_default: bool = False


class RegisterUserDTO(_WireModel):
    name: str = Field(min_length=2)
    email: EmailStr
    password: str = Field(min_length=6)
    phone: str = Field(pattern=r"^\d{10}$")
    addresses: List[AddressDTO] = Field(default_factory=list)

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginDTO(_WireModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.strip().lower()
