"""
repositories/property_query.py
------------------------------
Builds the property search statement from optional filter criteria.

The statement selects every property column plus the average review
rating, applies the row filters that are present, groups by property,
optionally filters on the average rating, orders by nightly cost and
caps the row count. Every filter value is bound as a parameter.
"""

from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from config import DEFAULT_RESULT_LIMIT
from utils.logger import get_logger

logger = get_logger(__name__)

PARAMSTYLES = ("format", "numeric")


@dataclass
class PropertyFilters:
    """
    Optional search criteria. A criterion applies only when its value is
    truthy, so None, "" and 0 all mean "no filter".

    Attributes:
        city: Case-insensitive substring of the property's city.
        owner_id: Exact owner id.
        minimum_price_per_night: Nightly price floor, in user-facing units.
        maximum_price_per_night: Nightly price ceiling, in user-facing units.
        minimum_rating: Lowest accepted average rating (inclusive).
    """
    city: Optional[str] = None
    owner_id: Optional[Any] = None
    minimum_price_per_night: Optional[Any] = None
    maximum_price_per_night: Optional[Any] = None
    minimum_rating: Optional[Any] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "PropertyFilters":
        """Pick the recognized keys out of `data`, ignoring everything else."""
        if not data:
            return cls()
        return cls(**{f.name: data.get(f.name) for f in fields(cls)})

    def present(self) -> list[str]:
        """Names of the criteria that will produce a clause."""
        return [f.name for f in fields(self) if getattr(self, f.name)]


def to_cents(price: Any) -> Decimal:
    """
    Convert a user-facing price to the minor units stored in
    `properties.cost_per_night`. The result is exact: 10.004 becomes 1000.4.

    Raises:
        ValueError: If `price` is not a finite number.
    """
    try:
        amount = Decimal(str(price)) * 100
        if not amount.is_finite():
            raise ValueError(f"Price must be finite, got {price!r}")
    except InvalidOperation as e:
        raise ValueError(f"Invalid price: {price!r}") from e
    return amount


class _Statement:
    """Ordered clause list plus the parameters bound so far."""

    def __init__(self, paramstyle: str):
        self.paramstyle = paramstyle
        self.clauses: list[str] = []
        self.params: list = []

    def bind(self, value: Any) -> str:
        """Record `value` as the next parameter and return its placeholder."""
        self.params.append(value)
        if self.paramstyle == "numeric":
            return f"${len(self.params)}"
        return "%s"

    def render(self) -> str:
        return "\n".join(self.clauses)


class PropertyQueryBuilder:
    """
    Assembles the property search statement.

    Args:
        paramstyle: "format" for psycopg2's ``%s`` placeholders, or
            "numeric" for ``$1, $2, ...`` numbered by parameter position.
        include_unreviewed: Use an outer join against reviews so properties
            without any review are listed with a null average rating.
    """

    def __init__(self, paramstyle: str = "format", include_unreviewed: bool = False):
        if paramstyle not in PARAMSTYLES:
            raise ValueError(f"Unsupported paramstyle: {paramstyle!r}")
        self.paramstyle = paramstyle
        self.include_unreviewed = include_unreviewed

    def build(
        self, filters: PropertyFilters, limit: int = DEFAULT_RESULT_LIMIT
    ) -> tuple[str, list]:
        """
        Build the statement for `filters`.

        Row filters are emitted in the order city, owner_id, minimum price,
        maximum price. The first one present opens the WHERE clause and the
        rest are joined with AND, so parameter positions follow that order.

        Returns:
            The SQL text and its parameter list. The list holds one value per
            present filter, followed by `limit`.

        Raises:
            ValueError: If `limit` is not a positive integer or a price is
                not a finite number.
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit!r}")

        stmt = _Statement(self.paramstyle)
        join = "LEFT JOIN" if self.include_unreviewed else "JOIN"
        stmt.clauses.append(
            "SELECT properties.*, avg(property_reviews.rating) AS average_rating\n"
            "FROM properties\n"
            f"{join} property_reviews ON properties.id = property_reviews.property_id"
        )

        predicates: list[str] = []
        if filters.city:
            predicates.append(f"city ILIKE {stmt.bind(f'%{filters.city}%')}")
        if filters.owner_id:
            predicates.append(f"owner_id = {stmt.bind(filters.owner_id)}")
        if filters.minimum_price_per_night:
            cents = to_cents(filters.minimum_price_per_night)
            predicates.append(f"cost_per_night > {stmt.bind(cents)}")
        if filters.maximum_price_per_night:
            cents = to_cents(filters.maximum_price_per_night)
            predicates.append(f"cost_per_night < {stmt.bind(cents)}")

        for i, predicate in enumerate(predicates):
            stmt.clauses.append(f"{'WHERE' if i == 0 else 'AND'} {predicate}")

        stmt.clauses.append("GROUP BY properties.id")

        if filters.minimum_rating:
            stmt.clauses.append(
                f"HAVING avg(property_reviews.rating) >= {stmt.bind(filters.minimum_rating)}"
            )

        stmt.clauses.append("ORDER BY cost_per_night")
        stmt.clauses.append(f"LIMIT {stmt.bind(limit)}")

        sql = stmt.render()
        logger.debug(f"Property search on {filters.present()}: {sql} | params={stmt.params}")
        return sql, stmt.params
