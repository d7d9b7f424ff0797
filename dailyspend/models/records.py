"""
Core Record Models for Daily Spends

These models define the two collections the store owns: categories and
expenses. They are designed to:
1. Keep amounts as exact base-10 strings (no float drift at rest)
2. Keep dates as canonical, zero-padded YYYY-MM-DD strings
3. Serialize to the flat camelCase records used by local persistence

DESIGN DECISION: Range filters compare date strings lexicographically.
That is only safe because every stored date is validated into the
fixed-width canonical form here.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dailyspend.utils.money import MAX_AMOUNT


def new_record_id() -> str:
    """Generate an opaque unique identifier for a new record."""
    return uuid4().hex


def utc_now() -> datetime:
    """Current timestamp (UTC) for created_at fields."""
    return datetime.now(timezone.utc)


def _canonical_date(value: str) -> str:
    """Check that value is a real calendar date in YYYY-MM-DD form."""
    parsed = date.fromisoformat(value)
    canonical = parsed.isoformat()
    if canonical != value:
        raise ValueError(f"Date must be in YYYY-MM-DD form: {value}")
    return canonical


def _ensure_aware(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so created_at values stay comparable."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# =============================================================================
# CATEGORY
# =============================================================================

class Category(BaseModel):
    """
    A named, colored tag an expense may be attached to.

    The color is used only for presentation.
    """
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, frozen=True)

    id: str = Field(
        default_factory=new_record_id,
        description="Unique category ID"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name"
    )
    color: str = Field(
        ...,
        min_length=1,
        max_length=32,
        description="Hex color code, e.g. #EF4444"
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        alias="createdAt",
        description="When the category was created"
    )

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: datetime) -> datetime:
        return _ensure_aware(v)


class CategoryCreate(BaseModel):
    """Input for creating a category. Emptiness is checked by the store."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = None
    color: Optional[str] = None


# =============================================================================
# EXPENSE
# =============================================================================

class Expense(BaseModel):
    """
    A single dated monetary record.

    `date` is the day the expense is attributed to and is independent of
    `created_at`, which is only used for same-day ordering.
    """
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, frozen=True)

    id: str = Field(
        default_factory=new_record_id,
        description="Unique expense ID"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="What the money was spent on"
    )
    amount: str = Field(
        ...,
        min_length=1,
        description="Exact decimal amount as a base-10 string"
    )
    details: Optional[str] = Field(
        default=None,
        max_length=1000,
        description="Optional free text"
    )
    category_id: Optional[str] = Field(
        default=None,
        alias="categoryId",
        description="Linked category; None means uncategorized"
    )
    date: str = Field(
        ...,
        description="Attributed calendar date (YYYY-MM-DD)"
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        alias="createdAt",
        description="When the expense was recorded"
    )

    @field_validator("amount")
    @classmethod
    def validate_amount_format(cls, v: str) -> str:
        """Amount must be a finite, positive decimal no larger than MAX_AMOUNT."""
        try:
            value = Decimal(v)
        except ArithmeticError:
            raise ValueError(f"Amount is not a decimal number: {v}")
        if not value.is_finite():
            raise ValueError(f"Amount must be a finite number: {v}")
        if value <= 0:
            raise ValueError(f"Amount must be greater than zero: {v}")
        if value > MAX_AMOUNT:
            raise ValueError(f"Amount must not exceed {MAX_AMOUNT:,}: {v}")
        return v

    @field_validator("date")
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        return _canonical_date(v)

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: datetime) -> datetime:
        return _ensure_aware(v)

    @field_validator("details", "category_id", mode="before")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ExpenseWithCategory(Expense):
    """An expense enriched with its resolved category (None if detached/unset)."""

    category: Optional[Category] = None


class ExpenseCreate(BaseModel):
    """
    Input for creating an expense.

    All fields are optional here so the store can report exactly which
    required field is missing.
    """
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: Optional[str] = None
    amount: Optional[str] = None
    details: Optional[str] = None
    category_id: Optional[str] = Field(default=None, alias="categoryId")
    date: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount_to_string(cls, v: Union[str, int, float, Decimal, None]) -> Optional[str]:
        """Accept numeric JSON amounts but keep them as exact strings."""
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, bool):
            raise ValueError("Amount must be a number or a decimal string")
        return str(v)
