"""
services/ - Service Layer
=========================
Operations called by the web layer. Services compose repositories and
turn database errors into QueryResult failures.
"""
