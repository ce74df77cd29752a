"""
Reservation repository for a guest's completed stays.
"""

from staybook.database import Storage
from staybook.repositories.base import IDENTIFIER, LIMIT, BaseRepository
from staybook.schemas.property import ReservationHistoryEntry
from staybook.utils.query_builder import QueryBuilder
from datetime import date
from typing import Any, List, Optional
import logging

logger = logging.getLogger(__name__)

# reservations.id is aliased so it cannot shadow properties.id in the row mapping
RESERVATION_HISTORY_SELECT = """
    SELECT properties.*,
           reservations.id AS reservation_id,
           reservations.start_date,
           reservations.end_date,
           avg(reviews.rating) AS average_rating
    FROM properties
    JOIN property_reviews AS reviews ON reviews.property_id = properties.id
    JOIN reservations ON reservations.property_id = reviews.property_id
    JOIN users ON reviews.guest_id = users.id
"""


class ReservationRepository(BaseRepository[ReservationHistoryEntry]):
    """
    Repository for reservation history.
    """

    def __init__(self, storage: Storage):
        super().__init__(ReservationHistoryEntry, storage)

    def build_history_query(self, guest_id: Any, limit: int, as_of: date) -> QueryBuilder:
        return (
            QueryBuilder(RESERVATION_HISTORY_SELECT)
            .where("reservations.guest_id = {param}", guest_id)
            .where("reservations.end_date < {param}", as_of)
            .group_by("properties.id", "reservations.id")
            .order_by("reservations.start_date")
            .limit(limit)
        )

    async def get_all_reservations(
        self,
        guest_id: Any,
        limit: int = 10,
        as_of: Optional[date] = None
    ) -> List[ReservationHistoryEntry]:
        """
        Get completed reservations of a guest with the reserved properties.

        Only reservations that ended strictly before ``as_of`` are returned;
        upcoming and ongoing stays are excluded.

        Args:
            guest_id: ID of the guest
            limit: Maximum number of rows to return
            as_of: Cut-off date, defaults to today

        Returns:
            Reservations ordered by start date ascending

        Raises:
            InvalidRecordError: If guest_id or limit is not an integer
        """
        guest_id = self.coerce(IDENTIFIER, guest_id, "guest id")
        limit = self.coerce(LIMIT, limit, "limit")
        statement, params = self.build_history_query(guest_id, limit, as_of or date.today()).build()
        reservations = await self.fetch_all(statement, params)
        logger.debug(f"Retrieved {len(reservations)} past reservations for guest {guest_id}")
        return reservations
