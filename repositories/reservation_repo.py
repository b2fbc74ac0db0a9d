"""
repositories/reservation_repo.py
---------------------------------
Data access layer for reservations. Read-only: reservations are created
elsewhere.
"""

from config import DEFAULT_RESULT_LIMIT
from db.connection import Database
from models.reservation import ReservationListing
from utils.logger import get_logger

logger = get_logger(__name__)


class ReservationRepository:
    """Repository for reading a guest's reservations."""

    def __init__(self, db: Database):
        self.db = db

    def get_for_guest(
        self, guest_id: int, limit: int = DEFAULT_RESULT_LIMIT
    ) -> list[ReservationListing]:
        """
        Fetch a guest's reservations with each property and its average rating.

        Args:
            guest_id: The guest's user id.
            limit: Maximum number of reservations.

        Returns:
            List of ReservationListing objects ordered by start date.
        """
        sql = """
            SELECT properties.*,
                   reservations.id AS reservation_id,
                   reservations.start_date,
                   reservations.end_date,
                   reservations.guest_id,
                   avg(property_reviews.rating) AS average_rating
            FROM reservations
                JOIN properties ON reservations.property_id = properties.id
                JOIN property_reviews ON properties.id = property_reviews.property_id
            WHERE reservations.guest_id = %s
            GROUP BY properties.id, reservations.id
            ORDER BY reservations.start_date
            LIMIT %s;
        """
        conn = self.db.get_connection()
        try:
            with self.db.dict_cursor(conn) as cur:
                cur.execute(sql, (guest_id, limit))
                listings = [ReservationListing.from_row(r) for r in cur.fetchall()]
            logger.debug(f"Fetched {len(listings)} reservations for guest #{guest_id}")
            return listings
        finally:
            self.db.release_connection(conn)
