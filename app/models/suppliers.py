# app/models/suppliers.py

from typing import Optional

from pydantic import BaseModel, field_validator
from pydantic.networks import validate_email


class SupplierBase(BaseModel):
    name: str
    iban: str = ""
    email: str = ""
    phone: str = ""
    notes: str = ""
    is_merchandise: bool = False

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("supplier name is required")
        return value

    @field_validator("iban", "email", "phone", "notes", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return "" if value is None else value


class SupplierIn(SupplierBase):
    """
    A supplier as submitted by the "new supplier" form, or a full record
    to overwrite when ``id`` is set. Name and email are normalised here;
    stored and imported records are kept as they are.
    """
    id: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip()

    @field_validator("email")
    @classmethod
    def email_valid_if_given(cls, value: str) -> str:
        value = value.strip()
        if value:
            _, value = validate_email(value)
        return value


class Supplier(SupplierBase):
    id: str

    class Config:
        from_attributes = True
