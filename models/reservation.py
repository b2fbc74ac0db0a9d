"""
models/reservation.py
---------------------
Domain models for reservations and a guest's reservation history.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from models.property import Property


@dataclass
class Reservation:
    """
    Represents a guest's stay at a property.

    Attributes:
        start_date: First night of the stay.
        end_date: Checkout date.
        property_id: The reserved property.
        guest_id: The user staying there.
        id: Database primary key.
    """
    start_date: date
    end_date: date
    property_id: int
    guest_id: int
    id: Optional[int] = None

    @property
    def nights(self) -> int:
        return (self.end_date - self.start_date).days


@dataclass
class ReservationListing:
    """A reservation joined with its property and the property's average rating."""
    reservation: Reservation
    property: Property
    average_rating: Optional[float] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ReservationListing":
        """
        Build from a row where reservation columns are prefixed with
        ``reservation_`` and property columns keep their own names.
        """
        rating = row.get("average_rating")
        return cls(
            reservation=Reservation(
                id=row["reservation_id"],
                start_date=row["start_date"],
                end_date=row["end_date"],
                property_id=row["id"],
                guest_id=row["guest_id"],
            ),
            property=Property.from_row(row),
            average_rating=float(rating) if rating is not None else None,
        )

    def __str__(self) -> str:
        r = self.reservation
        return f"{r.start_date} -> {r.end_date} ({r.nights} nights) | {self.property}"
