"""
Property repository for listing search and listing creation.
Search assembles optional predicates with the clause-list builder; creation inserts only supplied columns.
"""

from staybook.database import Storage
from staybook.models.property import Property
from staybook.repositories.base import LIMIT, BaseRepository
from staybook.schemas.property import PropertyCreate, PropertyRecord, PropertySearchFilters
from staybook.utils.exceptions import InvalidRecordError
from staybook.utils.query_builder import QueryBuilder, build_insert
from typing import Any, List, Mapping, Optional, Tuple, Union
import logging

logger = logging.getLogger(__name__)

PROPERTY_SEARCH_SELECT = """
    SELECT properties.*, avg(property_reviews.rating) AS average_rating
    FROM properties
    FULL OUTER JOIN property_reviews ON properties.id = property_reviews.property_id
"""


class PropertyRepository(BaseRepository[PropertyRecord]):
    """
    Repository for property listings.
    """

    def __init__(self, storage: Storage):
        super().__init__(PropertyRecord, storage)

    def build_search_query(self, filters: PropertySearchFilters, limit: int) -> QueryBuilder:
        """
        Build the listing search statement.

        Row predicates go to WHERE, the rating threshold goes to HAVING since
        it applies to the aggregate. The price range is applied only when both
        bounds are given.
        """
        query = QueryBuilder(PROPERTY_SEARCH_SELECT)

        if filters.city:
            query.where("properties.city ILIKE {param}", f"%{filters.city}%")

        if filters.owner_id:
            query.where("properties.owner_id = {param}", filters.owner_id)

        if filters.has_price_range:
            query.where("properties.cost_per_night >= {param}", filters.minimum_price_per_night)
            query.where("properties.cost_per_night <= {param}", filters.maximum_price_per_night)

        query.group_by("properties.id")

        if filters.minimum_rating:
            query.having("avg(property_reviews.rating) >= {param}", filters.minimum_rating)

        return query.order_by("properties.cost_per_night").limit(limit)

    async def search_properties(
        self,
        filters: Union[PropertySearchFilters, Mapping[str, Any], None] = None,
        limit: int = 10
    ) -> List[PropertyRecord]:
        """
        Search listings with optional filters.

        Args:
            filters: Search criteria; missing keys are not applied
            limit: Maximum number of listings to return

        Returns:
            Listings with their average rating, cheapest first

        Raises:
            InvalidRecordError: If the filters or limit are malformed
        """
        filters = self.validate_input(PropertySearchFilters, filters or {})
        limit = self.coerce(LIMIT, limit, "limit")
        statement, params = self.build_search_query(filters, limit).build()
        properties = await self.fetch_all(statement, params)
        logger.debug(f"Property search returned {len(properties)} results")
        return properties

    @staticmethod
    def sparse_values(property_data: Union[PropertyCreate, Mapping[str, Any]]) -> List[Tuple[str, Any]]:
        """
        Ordered (column, value) pairs for every field with a truthy value.

        Mappings keep their key order; schema instances follow field order.

        Raises:
            InvalidRecordError: On unknown columns or invalid values
        """
        if isinstance(property_data, PropertyCreate):
            validated = property_data
            keys = list(property_data.model_fields_set)
            keys.sort(key=list(PropertyCreate.model_fields).index)
        else:
            validated = BaseRepository.validate_input(PropertyCreate, property_data)
            keys = list(property_data.keys())

        allowed = Property.insertable_columns()
        pairs = []
        for key in keys:
            if key not in allowed:
                raise InvalidRecordError(f"Unknown property column: {key}")
            value = getattr(validated, key)
            if value:
                pairs.append((key, value))
        return pairs

    async def create_property(
        self,
        property_data: Union[PropertyCreate, Mapping[str, Any]]
    ) -> Optional[PropertyRecord]:
        """
        Create a new listing from a sparse record.

        Args:
            property_data: Listing fields; falsy values are left out of the insert

        Returns:
            Created property record including its generated id

        Raises:
            InvalidRecordError: If no usable field is supplied or a column is unknown
            StorageError: If the statement fails
        """
        statement, params = build_insert("properties", self.sparse_values(property_data))
        created_property = await self.fetch_one(statement, params)
        if created_property:
            logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
        return created_property
