"""
models/property.py
------------------
Domain models for rental properties and property search results.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional


@dataclass
class Property:
    """
    Represents a property listed for rent.

    Attributes:
        owner_id: The owning user's id.
        title: Listing headline.
        thumbnail_photo_url: Small photo shown in search results.
        cover_photo_url: Large photo shown on the listing page.
        country, street, city, province, post_code: Address fields.
        cost_per_night: Nightly price in cents (user-facing price x100).
        description: Optional free text.
        parking_spaces, number_of_bathrooms, number_of_bedrooms: Counts.
        active: Whether the listing is live.
        id: Database primary key (None for new records).
    """
    owner_id: int
    title: str
    thumbnail_photo_url: str
    cover_photo_url: str
    country: str
    street: str
    city: str
    province: str
    post_code: str
    cost_per_night: int = 0
    description: Optional[str] = None
    parking_spaces: int = 0
    number_of_bathrooms: int = 0
    number_of_bedrooms: int = 0
    active: bool = True
    id: Optional[int] = None

    # Columns written by an insert, each bound from the attribute of the same name.
    INSERT_COLUMNS = (
        "title",
        "description",
        "number_of_bedrooms",
        "number_of_bathrooms",
        "parking_spaces",
        "cost_per_night",
        "thumbnail_photo_url",
        "cover_photo_url",
        "street",
        "country",
        "city",
        "province",
        "post_code",
        "owner_id",
    )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Property":
        """
        Build a Property from a mapping of column names to values.

        Keys are matched by name, so their order never matters. Unknown keys
        are ignored.

        Raises:
            ValueError: If a required field is missing.
        """
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        try:
            return cls(**values)
        except TypeError as e:
            raise ValueError(f"Invalid property fields: {e}") from e

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Property":
        """Build a Property from a dict row of the properties table."""
        return cls(**{f.name: row[f.name] for f in fields(cls) if f.name in row})

    def insert_params(self) -> tuple:
        """Parameter tuple for an insert, aligned with INSERT_COLUMNS."""
        return tuple(getattr(self, column) for column in self.INSERT_COLUMNS)

    @property
    def price_per_night(self) -> float:
        """User-facing nightly price."""
        return self.cost_per_night / 100

    def __str__(self) -> str:
        return f"#{self.id} {self.title} ({self.city}) - {self.price_per_night:.2f}/night"


@dataclass
class PropertyListing:
    """A property together with its average review rating."""
    property: Property
    average_rating: Optional[float] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PropertyListing":
        rating = row.get("average_rating")
        return cls(
            property=Property.from_row(row),
            average_rating=float(rating) if rating is not None else None,
        )

    def __str__(self) -> str:
        rating = f"{self.average_rating:.2f}" if self.average_rating is not None else "n/a"
        return f"{self.property} | rating {rating}"
