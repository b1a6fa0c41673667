# fintrack/schemas.py
# JSON bodies. Field names on the wire are camelCase where the API says so.
# Required-ness is checked in the routes so a missing field yields the
# uniform {"success": false, "message"} answer instead of a 422.

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fintrack.models import TransactionType


class RegisterIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    email: Optional[str] = None
    fax: Optional[str] = None
    password: Optional[str] = None


class LoginIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class PasswordIn(BaseModel):
    password: Optional[str] = None


class LanguageIn(BaseModel):
    language: Optional[str] = None


class TransactionIn(BaseModel):
    """Full record as sent by the client; `date` is never accepted."""

    description: Optional[str] = None
    amount: float = Field(allow_inf_nan=False)
    type: TransactionType
    category: Optional[str] = None
    account: Optional[str] = None
    currency: Optional[str] = None
    notes: Optional[str] = None
    recurring: bool = False


class BudgetIn(BaseModel):
    amount: Optional[float] = Field(default=None, allow_inf_nan=False)
