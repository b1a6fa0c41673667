# fintrack/models.py
from datetime import datetime  # timestamps assigned on insert
from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, func
from sqlmodel import Field, SQLModel, UniqueConstraint


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)  # DB assigns on insert
    first_name: str
    last_name: str
    email: str = Field(index=True)  # stored stripped + lower-cased
    fax: Optional[str] = None
    hashed_password: str  # never the plaintext
    language: str = Field(default="en")  # replaced by settings.default_language on signup

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    def to_profile(self) -> Dict[str, Any]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "fax": self.fax,
            "language": self.language,
        }


class TransactionType(str, Enum):
    income = "income"
    expense = "expense"


class Transaction(SQLModel, table=True):
    """
    One money movement owned by one user.
    The sign convention of `amount` is up to the client; `type` decides
    which side of the summary it lands on.
    """

    __tablename__ = "transactions"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)  # owner

    description: Optional[str] = None
    amount: float
    type: TransactionType = Field(index=True)  # income | expense
    category: Optional[str] = Field(default=None, index=True)
    account: Optional[str] = None
    currency: Optional[str] = None
    notes: Optional[str] = None
    recurring: bool = Field(default=False)

    # Naive server local time at insert; raw SQL inserts fall back to CURRENT_TIMESTAMP
    date: datetime = Field(
        default_factory=datetime.now,
        sa_type=DateTime(timezone=False),
        index=True,
        sa_column_kwargs={"server_default": func.current_timestamp()},
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "description": self.description,
            "amount": self.amount,
            "type": TransactionType(self.type).value,
            "category": self.category,
            "account": self.account,
            "currency": self.currency,
            "notes": self.notes,
            "recurring": bool(self.recurring),
            "date": self.date.isoformat() if self.date else None,
        }


class Budget(SQLModel, table=True):
    """Append-only: the row with the highest id is the current budget."""

    __tablename__ = "budgets"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    amount: float
