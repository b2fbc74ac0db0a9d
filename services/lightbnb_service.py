"""
services/lightbnb_service.py
-----------------------------
The operations the web layer calls: user lookups and sign-up, a guest's
reservations, property search and property creation.

Each operation is one statement against the database. Database errors are
logged here and returned as a failed QueryResult rather than raised.
"""

from typing import Any, Callable, Mapping, Optional, TypeVar, Union

import psycopg2

from config import DEFAULT_RESULT_LIMIT
from db.connection import Database
from models.property import Property, PropertyListing
from models.reservation import ReservationListing
from models.result import QueryResult
from models.user import User
from repositories.property_query import PropertyFilters, PropertyQueryBuilder
from repositories.property_repo import PropertyRepository
from repositories.reservation_repo import ReservationRepository
from repositories.user_repo import UserRepository
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class LightBnBService:
    """Facade over the user, property and reservation repositories."""

    def __init__(self, db: Database, query_builder: Optional[PropertyQueryBuilder] = None):
        self.user_repo = UserRepository(db)
        self.property_repo = PropertyRepository(db, query_builder)
        self.reservation_repo = ReservationRepository(db)

    # ── Users ─────────────────────────────────────────────

    def get_user_with_email(self, email: str) -> QueryResult[User]:
        """Look up a user by email. A miss is a success with value None."""
        return self._run(f"look up user by email {email}", lambda: self.user_repo.get_by_email(email))

    def get_user_with_id(self, user_id: int) -> QueryResult[User]:
        """Look up a user by id. A miss is a success with value None."""
        return self._run(f"look up user #{user_id}", lambda: self.user_repo.get_by_id(user_id))

    def add_user(self, user: Union[User, Mapping[str, Any]]) -> QueryResult[User]:
        """
        Insert a user from a User or a mapping with name, password and email.

        Raises:
            ValueError: If the mapping lacks one of those keys.
        """
        if not isinstance(user, User):
            try:
                user = User(name=user["name"], password=user["password"], email=user["email"])
            except KeyError as e:
                raise ValueError(f"Missing user field: {e.args[0]}") from e
        return self._run(f"add user {user.email}", lambda: self.user_repo.add(user))

    # ── Reservations ──────────────────────────────────────

    def get_all_reservations(
        self, guest_id: int, limit: int = DEFAULT_RESULT_LIMIT
    ) -> QueryResult[list[ReservationListing]]:
        """A guest's reservations, earliest first."""
        return self._run(
            f"list reservations for guest #{guest_id}",
            lambda: self.reservation_repo.get_for_guest(guest_id, limit),
        )

    # ── Properties ────────────────────────────────────────

    def get_all_properties(
        self,
        filters: Union[PropertyFilters, Mapping[str, Any], None] = None,
        limit: int = DEFAULT_RESULT_LIMIT,
    ) -> QueryResult[list[PropertyListing]]:
        """
        Search properties, cheapest first.

        Args:
            filters: PropertyFilters or a mapping with any of the keys
                city, owner_id, minimum_price_per_night,
                maximum_price_per_night, minimum_rating.
            limit: Maximum number of listings.
        """
        if not isinstance(filters, PropertyFilters):
            filters = PropertyFilters.from_mapping(filters)
        return self._run("search properties", lambda: self.property_repo.search(filters, limit))

    def add_property(
        self, prop: Union[Property, Mapping[str, Any]]
    ) -> QueryResult[list[Property]]:
        """
        Insert a property from a Property or a mapping keyed by column name.

        Raises:
            ValueError: If a required property field is missing.
        """
        if not isinstance(prop, Property):
            prop = Property.from_mapping(prop)
        return self._run(f"add property '{prop.title}'", lambda: self.property_repo.add(prop))

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _run(action: str, operation: Callable[[], T]) -> QueryResult[T]:
        try:
            return QueryResult.success(operation())
        except psycopg2.Error as e:
            logger.error(f"Failed to {action}: {e}")
            return QueryResult.failure(e)
