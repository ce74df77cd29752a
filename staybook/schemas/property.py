"""
Pydantic schemas for property listings, search filters and reservation history.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import date
from decimal import Decimal
import math
import re

# Largest value of a PostgreSQL integer column
INT4_MAX = 2**31 - 1

LEADING_INTEGER = re.compile(r"\s*([+-]?\d{1,12})(?!\d)")


class PropertyCreate(BaseModel):
    """
    Sparse listing submission.

    Every field is optional; only the fields a caller sets with a truthy value
    are written, the rest fall back to the table defaults.
    """

    model_config = ConfigDict(extra="forbid")

    owner_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail_photo_url: Optional[str] = None
    cover_photo_url: Optional[str] = None
    cost_per_night: Optional[int] = Field(None, ge=0)
    parking_spaces: Optional[int] = Field(None, ge=0)
    number_of_bathrooms: Optional[int] = Field(None, ge=0)
    number_of_bedrooms: Optional[int] = Field(None, ge=0)
    country: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    post_code: Optional[str] = None
    active: Optional[bool] = None


class PropertyRecord(BaseModel):
    """
    A properties row, optionally with its computed average rating.

    Columns are optional because a full outer join against reviews can
    produce a group without a property.
    """

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    owner_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail_photo_url: Optional[str] = None
    cover_photo_url: Optional[str] = None
    cost_per_night: Optional[int] = None
    parking_spaces: Optional[int] = None
    number_of_bathrooms: Optional[int] = None
    number_of_bedrooms: Optional[int] = None
    country: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    post_code: Optional[str] = None
    active: Optional[bool] = None
    average_rating: Optional[Decimal] = None


class ReservationHistoryEntry(PropertyRecord):
    """A completed reservation together with the reserved property."""

    reservation_id: int
    start_date: date
    end_date: date


class PropertySearchFilters(BaseModel):
    """
    Search criteria for the property listing.

    Blank values are treated as absent; numeric criteria are coerced to
    integers.
    """

    model_config = ConfigDict(extra="ignore")

    city: Optional[str] = Field(None, description="Case-insensitive substring of the city name")
    owner_id: Optional[int] = Field(None, description="Only listings of this owner")
    minimum_price_per_night: Optional[int] = Field(None, ge=0)
    maximum_price_per_night: Optional[int] = Field(None, ge=0)
    minimum_rating: Optional[int] = Field(None, ge=0, le=5)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Treat empty form values as missing."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator(
        "minimum_price_per_night", "maximum_price_per_night", "minimum_rating",
        mode="before"
    )
    @classmethod
    def truncate_numbers(cls, v):
        """
        Keep the integer part of numeric input.

        Strings are read up to the first character that is not part of a
        leading integer, so "150.75" and "1e3" give 150 and 1.
        """
        if isinstance(v, str):
            if not v.strip():
                return None
            match = LEADING_INTEGER.match(v)
            if not match:
                raise ValueError(f"Not a number: {v!r}")
            v = int(match.group(1))
        elif isinstance(v, float) and not math.isfinite(v):
            raise ValueError(f"Not a finite number: {v!r}")
        elif isinstance(v, Decimal):
            if not v.is_finite():
                raise ValueError(f"Not a finite number: {v!r}")
            if v.adjusted() >= len(str(INT4_MAX)):
                raise ValueError(f"Number out of range: {v!r}")
        if isinstance(v, (float, Decimal)):
            v = int(v)
        if isinstance(v, int) and not isinstance(v, bool) and abs(v) > INT4_MAX:
            raise ValueError(f"Number out of range: {v!r}")
        return v

    @property
    def has_price_range(self) -> bool:
        """Both price bounds are required for the price predicate."""
        return bool(self.minimum_price_per_night and self.maximum_price_per_night)
