"""
models/ - Domain Models
=======================
Dataclass records for users, properties, reservations and query outcomes.
"""
