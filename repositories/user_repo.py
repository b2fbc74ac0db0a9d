"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Optional

from db.connection import Database
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for lookups and inserts on the users table."""

    def __init__(self, db: Database):
        self.db = db

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Fetch a user by email.

        At most one user is returned even if the address is stored twice.

        Returns:
            User or None.
        """
        sql = "SELECT DISTINCT * FROM users WHERE email = %s LIMIT 1;"
        return self._fetch_one(sql, (email,))

    def get_by_id(self, user_id: int) -> Optional[User]:
        """
        Fetch a user by primary key.

        Returns:
            User or None.
        """
        sql = "SELECT DISTINCT * FROM users WHERE id = %s LIMIT 1;"
        return self._fetch_one(sql, (user_id,))

    def add(self, user: User) -> User:
        """
        Insert a new user. No uniqueness check is made, so adding the same
        user twice yields two rows with different ids.

        Returns:
            The inserted User, with its `id` populated.
        """
        sql = """
            INSERT INTO users (name, password, email)
            VALUES (%s, %s, %s)
            RETURNING *;
        """
        conn = self.db.get_connection()
        try:
            with self.db.dict_cursor(conn) as cur:
                cur.execute(sql, (user.name, user.password, user.email))
                row = cur.fetchone()
            conn.commit()
            created = User.from_row(row)
            logger.info(f"Added user {created}")
            return created
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add user {user.email}: {e}")
            raise
        finally:
            self.db.release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    def _fetch_one(self, sql: str, params: tuple) -> Optional[User]:
        conn = self.db.get_connection()
        try:
            with self.db.dict_cursor(conn) as cur:
                cur.execute(sql, params)
                row = cur.fetchone()
                return User.from_row(row) if row else None
        finally:
            self.db.release_connection(conn)
