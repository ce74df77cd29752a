"""
Test configuration and fixtures for the booking data-access layer.
Provides a recording storage double, test data factories, and statement assertions.
"""

import os

# Cheap hashes and a known environment before the package reads its settings
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
import re
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from staybook.repositories.property import PropertyRepository
from staybook.repositories.reservation import ReservationRepository
from staybook.repositories.user import UserRepository
from staybook.services.booking import BookingService

INSERT_PATTERN = re.compile(r"^INSERT INTO \w+ \(([^)]*)\)")


class RecordingStorage:
    """
    Storage double that records every statement.

    Returns the canned rows, raises the configured error, or for INSERT
    statements without canned rows echoes the inserted columns back with a
    generated id, like ``RETURNING *`` would.
    """

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None, error: Optional[Exception] = None):
        self.rows = rows or []
        self.error = error
        self.calls: List[tuple] = []
        self._next_id = 1

    async def fetch(self, statement: str, params: Sequence[Any]) -> List[Dict[str, Any]]:
        self.calls.append((statement, list(params)))
        if self.error is not None:
            raise self.error

        match = INSERT_PATTERN.match(statement)
        if match and not self.rows:
            columns = [column.strip() for column in match.group(1).split(",")]
            row = dict(zip(columns, params))
            row["id"] = self._next_id
            self._next_id += 1
            return [row]

        return [dict(row) for row in self.rows]

    @property
    def last_statement(self) -> str:
        return self.calls[-1][0]

    @property
    def last_params(self) -> List[Any]:
        return self.calls[-1][1]


@pytest.fixture
def storage() -> RecordingStorage:
    """Create an empty recording storage."""
    return RecordingStorage()


# Repository fixtures
@pytest.fixture
def user_repository(storage: RecordingStorage) -> UserRepository:
    """Create a user repository instance."""
    return UserRepository(storage)


@pytest.fixture
def property_repository(storage: RecordingStorage) -> PropertyRepository:
    """Create a property repository instance."""
    return PropertyRepository(storage)


@pytest.fixture
def reservation_repository(storage: RecordingStorage) -> ReservationRepository:
    """Create a reservation repository instance."""
    return ReservationRepository(storage)


# Service fixtures
@pytest.fixture
def booking_service(storage: RecordingStorage) -> BookingService:
    """Create a booking service instance."""
    return BookingService(storage)


# Test data factories
class UserFactory:
    """Factory for user rows and registration data."""

    @staticmethod
    def create_user_data(
        name: str = "Devin Sanders",
        email: str = "devin@example.com",
        password: str = "password"
    ) -> dict:
        """Create user registration dictionary."""
        return {"name": name, "email": email, "password": password}

    @staticmethod
    def create_user_row(
        id: int = 1,
        name: str = "Devin Sanders",
        email: str = "devin@example.com",
        password: str = "$2b$04$abcdefghijklmnopqrstuu5Ys1q1xqG1eYkKfXrfr3bp8qOTDcOWi"
    ) -> dict:
        """Create a users row as the database returns it."""
        return {"id": id, "name": name, "email": email, "password": password}


class PropertyFactory:
    """Factory for property rows."""

    @staticmethod
    def create_property_row(
        id: int = 1,
        owner_id: int = 1,
        title: str = "Speed lamp",
        cost_per_night: int = 100,
        city: str = "Vancouver",
        average_rating: Optional[str] = "4.5",
        **extra
    ) -> dict:
        """Create a properties row with its average rating."""
        row = {
            "id": id,
            "owner_id": owner_id,
            "title": title,
            "description": "description",
            "thumbnail_photo_url": "https://example.com/thumb.jpg",
            "cover_photo_url": "https://example.com/cover.jpg",
            "cost_per_night": cost_per_night,
            "parking_spaces": 1,
            "number_of_bathrooms": 1,
            "number_of_bedrooms": 2,
            "country": "Canada",
            "street": "536 Namsub Highway",
            "city": city,
            "province": "British Columbia",
            "post_code": "V6B 1A1",
            "active": True,
            "average_rating": average_rating,
        }
        row.update(extra)
        return row

    @staticmethod
    def create_reservation_row(
        reservation_id: int = 10,
        start_date: date = date(2026, 3, 1),
        end_date: date = date(2026, 3, 5),
        **property_fields
    ) -> dict:
        """Create a reservation history row (property columns plus reservation columns)."""
        row = PropertyFactory.create_property_row(**property_fields)
        row.update({
            "reservation_id": reservation_id,
            "start_date": start_date,
            "end_date": end_date,
        })
        return row


# Utility functions for tests
PLACEHOLDER = re.compile(r"\$(\d+)")
KEYWORDS = ("WHERE", "AND", "GROUP BY", "HAVING", "ORDER BY", "LIMIT")


def assert_well_formed(statement: str, params: Sequence[Any]):
    """
    Assert that a statement has separated clauses and matching placeholders.

    Placeholders must be numbered 1..n in textual order, n must equal the
    parameter count, and no keyword or placeholder may be glued to a
    neighbouring token.
    """
    numbers = [int(n) for n in PLACEHOLDER.findall(statement)]
    assert numbers == list(range(1, len(params) + 1))

    assert not re.search(r"\$\d+[A-Za-z_(]", statement)
    for keyword in KEYWORDS:
        assert not re.search(rf"\S{keyword}\b", statement), f"{keyword} glued to previous token"
        assert not re.search(rf"\b{keyword}[^\s]", statement), f"{keyword} glued to next token"
    assert "  " not in statement
    assert "\n" not in statement
