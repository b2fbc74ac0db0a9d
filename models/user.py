"""
models/user.py
--------------
Domain model for LightBnB users (guests and property owners).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """
    Represents a single user account.

    Attributes:
        name: Display name.
        email: Login email, expected to be unique (not enforced here).
        password: Credential stored exactly as given; never hashed by this layer.
        id: Database primary key (None for new records).
    """
    name: str
    email: str
    password: str
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: dict) -> "User":
        """Build a User from a dict row of the users table."""
        return cls(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password=row["password"],
        )

    def __str__(self) -> str:
        return f"#{self.id} {self.name} <{self.email}>"
