"""
Clause-list SQL builder for hand-written parameterized statements.
Numbers positional placeholders ($1, $2, ...) in the order values appear in the rendered text.
"""

from typing import Any, Iterable, List, Optional, Sequence, Tuple
import logging

from staybook.utils.exceptions import InvalidRecordError

logger = logging.getLogger(__name__)

PARAM = "{param}"


def _squash(fragment: str) -> str:
    """Collapse runs of whitespace (including newlines) to single spaces."""
    return " ".join(fragment.split())


class QueryBuilder:
    """
    Incrementally assembled SELECT statement.

    Optional predicates are kept as ordered (template, value) pairs. Each
    template contains exactly one ``{param}`` marker which is replaced by the
    next positional placeholder when the statement is rendered, so placeholder
    numbers always follow textual order and match the parameter list 1:1.

    Example:
        qb = QueryBuilder("SELECT * FROM properties")
        qb.where("city ILIKE {param}", "%Van%").where("owner_id = {param}", 3)
        qb.build()
        # ('SELECT * FROM properties WHERE city ILIKE $1 AND owner_id = $2', ['%Van%', 3])
    """

    def __init__(self, select: str):
        self.select = _squash(select)
        self._where: List[Tuple[str, Any]] = []
        self._group_by: List[str] = []
        self._having: List[Tuple[str, Any]] = []
        self._order_by: List[str] = []
        self._limit: Optional[Any] = None

    @staticmethod
    def _check_template(template: str) -> str:
        template = _squash(template)
        if template.count(PARAM) != 1:
            raise ValueError(f"Clause template must contain exactly one {PARAM} marker: {template!r}")
        return template

    def where(self, template: str, value: Any) -> "QueryBuilder":
        """Add a row-level predicate, joined to the others with AND."""
        self._where.append((self._check_template(template), value))
        return self

    def group_by(self, *columns: str) -> "QueryBuilder":
        self._group_by.extend(columns)
        return self

    def having(self, template: str, value: Any) -> "QueryBuilder":
        """Add a post-aggregation predicate, joined to the others with AND."""
        self._having.append((self._check_template(template), value))
        return self

    def order_by(self, *columns: str) -> "QueryBuilder":
        self._order_by.extend(columns)
        return self

    def limit(self, value: Any) -> "QueryBuilder":
        self._limit = value
        return self

    def build(self) -> Tuple[str, List[Any]]:
        """
        Render the statement and its positional parameter list.

        Returns:
            Tuple of (statement, params)
        """
        params: List[Any] = []

        def bind(value: Any) -> str:
            params.append(value)
            return f"${len(params)}"

        def render(clauses: Sequence[Tuple[str, Any]]) -> str:
            rendered = []
            for template, value in clauses:
                rendered.append(template.replace(PARAM, bind(value)))
            return " AND ".join(rendered)

        parts = [self.select]
        if self._where:
            parts.append("WHERE " + render(self._where))
        if self._group_by:
            parts.append("GROUP BY " + ", ".join(self._group_by))
        if self._having:
            parts.append("HAVING " + render(self._having))
        if self._order_by:
            parts.append("ORDER BY " + ", ".join(self._order_by))
        if self._limit is not None:
            parts.append("LIMIT " + bind(self._limit))

        statement = " ".join(parts)
        logger.debug(f"Built statement with {len(params)} parameters: {statement}")
        return statement, params


def build_insert(table: str, values: Iterable[Tuple[str, Any]]) -> Tuple[str, List[Any]]:
    """
    Render an INSERT ... RETURNING * statement from ordered (column, value) pairs.

    Column names and bound values are collected into parallel lists, so the
    column list and the placeholder list always have the same length.

    Args:
        table: Target table name
        values: Ordered (column, value) pairs to insert

    Returns:
        Tuple of (statement, params)

    Raises:
        InvalidRecordError: If there is nothing to insert
    """
    columns: List[str] = []
    params: List[Any] = []
    for column, value in values:
        columns.append(column)
        params.append(value)

    if not columns:
        raise InvalidRecordError(f"No values supplied for insert into {table}")

    placeholders = [f"${index}" for index in range(1, len(params) + 1)]
    statement = (
        f"INSERT INTO {table} ({', '.join(columns)}) "
        f"VALUES ({', '.join(placeholders)}) "
        f"RETURNING *"
    )
    return statement, params
