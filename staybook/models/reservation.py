"""
Reservation and review table definitions.
Both are read-only from the data-access layer; reviews feed the average rating aggregate.
"""

from sqlalchemy import Date, Integer, SmallInteger, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from staybook.database import Base
from datetime import date
from typing import Optional


class Reservation(Base):
    """A guest's stay at a property between two dates."""

    __tablename__ = "reservations"

    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    guest_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_reservations_dates"),
    )


class PropertyReview(Base):
    """A guest's rating of a property after a reservation."""

    __tablename__ = "property_reviews"

    guest_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    reservation_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("reservations.id", ondelete="CASCADE"),
        nullable=False
    )

    rating: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0, server_default="0")
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("rating BETWEEN 0 AND 5", name="ck_property_reviews_rating"),
    )
