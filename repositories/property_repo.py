"""
repositories/property_repo.py
------------------------------
Data access layer for properties.
All SQL queries related to the `properties` table live here.
"""

from typing import Optional

from config import DEFAULT_RESULT_LIMIT
from db.connection import Database
from models.property import Property, PropertyListing
from repositories.property_query import PropertyFilters, PropertyQueryBuilder
from utils.logger import get_logger

logger = get_logger(__name__)


class PropertyRepository:
    """Repository for searching and inserting properties."""

    def __init__(self, db: Database, query_builder: Optional[PropertyQueryBuilder] = None):
        self.db = db
        self.query_builder = query_builder or PropertyQueryBuilder()

    # ── CREATE ────────────────────────────────────────────

    def add(self, prop: Property) -> list[Property]:
        """
        Insert a new property. Each column is bound from the attribute of
        the same name (see `Property.INSERT_COLUMNS`).

        Returns:
            The inserted rows as Property objects.
        """
        columns = ", ".join(Property.INSERT_COLUMNS)
        placeholders = ", ".join(["%s"] * len(Property.INSERT_COLUMNS))
        sql = f"INSERT INTO properties ({columns}) VALUES ({placeholders}) RETURNING *;"

        conn = self.db.get_connection()
        try:
            with self.db.dict_cursor(conn) as cur:
                cur.execute(sql, prop.insert_params())
                rows = cur.fetchall()
            conn.commit()
            created = [Property.from_row(r) for r in rows]
            for p in created:
                logger.info(f"Added property {p} for owner {p.owner_id}")
            return created
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add property '{prop.title}': {e}")
            raise
        finally:
            self.db.release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def search(
        self, filters: PropertyFilters, limit: int = DEFAULT_RESULT_LIMIT
    ) -> list[PropertyListing]:
        """
        Search properties with their average rating, cheapest first.

        Args:
            filters: Optional criteria; absent ones are skipped.
            limit: Maximum number of listings.

        Returns:
            List of PropertyListing objects ordered by nightly cost.
        """
        sql, params = self.query_builder.build(filters, limit)
        conn = self.db.get_connection()
        try:
            with self.db.dict_cursor(conn) as cur:
                cur.execute(sql, params)
                return [PropertyListing.from_row(r) for r in cur.fetchall()]
        finally:
            self.db.release_connection(conn)
