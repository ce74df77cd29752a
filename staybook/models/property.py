"""
Property listing table definition.
Also the source of the column whitelist used when inserting sparse property records.
"""

from sqlalchemy import String, Text, Integer, Boolean, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from staybook.database import Base
from typing import FrozenSet, Optional


class Property(Base):
    """
    Rental listing owned by a user.
    Prices are whole currency units per night.
    """

    __tablename__ = "properties"

    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who owns this property"
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    thumbnail_photo_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    cover_photo_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    cost_per_night: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        index=True,
        comment="Nightly price"
    )

    # Room counts
    parking_spaces: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    number_of_bathrooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    number_of_bedrooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    # Address
    country: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    street: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    province: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    post_code: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default="true",
        comment="Whether the listing is shown to guests"
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title}, cost_per_night={self.cost_per_night})>"

    @classmethod
    def insertable_columns(cls) -> FrozenSet[str]:
        """Column names a caller may supply when creating a listing."""
        return frozenset(
            column.name
            for column in cls.__table__.columns
            if not column.primary_key
        )


# Search by city ordered by price
city_price_index = Index(
    "idx_properties_city_price",
    Property.city,
    Property.cost_per_night
)
