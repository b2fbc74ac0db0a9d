"""
db/init_db.py
-------------
Creates the LightBnB schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import Database
from utils.logger import get_logger

logger = get_logger(__name__)

# Creation order respects foreign keys: each table only references earlier ones.
TABLES = (
    ("users", """
        CREATE TABLE IF NOT EXISTS users (
            id              SERIAL PRIMARY KEY NOT NULL,
            name            VARCHAR(255) NOT NULL,
            email           VARCHAR(255) NOT NULL,
            password        VARCHAR(255) NOT NULL
        );
    """),
    # cost_per_night is stored in cents
    ("properties", """
        CREATE TABLE IF NOT EXISTS properties (
            id                  SERIAL PRIMARY KEY NOT NULL,
            owner_id            INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            title               VARCHAR(255) NOT NULL,
            description         TEXT,
            thumbnail_photo_url VARCHAR(255) NOT NULL,
            cover_photo_url     VARCHAR(255) NOT NULL,
            cost_per_night      INTEGER NOT NULL DEFAULT 0,
            parking_spaces      INTEGER NOT NULL DEFAULT 0,
            number_of_bathrooms INTEGER NOT NULL DEFAULT 0,
            number_of_bedrooms  INTEGER NOT NULL DEFAULT 0,
            country             VARCHAR(255) NOT NULL,
            street              VARCHAR(255) NOT NULL,
            city                VARCHAR(255) NOT NULL,
            province            VARCHAR(255) NOT NULL,
            post_code           VARCHAR(255) NOT NULL,
            active              BOOLEAN NOT NULL DEFAULT TRUE
        );
    """),
    ("reservations", """
        CREATE TABLE IF NOT EXISTS reservations (
            id              SERIAL PRIMARY KEY NOT NULL,
            start_date      DATE NOT NULL,
            end_date        DATE NOT NULL,
            property_id     INTEGER NOT NULL REFERENCES properties(id) ON DELETE CASCADE,
            guest_id        INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE
        );
    """),
    ("property_reviews", """
        CREATE TABLE IF NOT EXISTS property_reviews (
            id              SERIAL PRIMARY KEY NOT NULL,
            guest_id        INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            property_id     INTEGER NOT NULL REFERENCES properties(id) ON DELETE CASCADE,
            reservation_id  INTEGER NOT NULL REFERENCES reservations(id) ON DELETE CASCADE,
            rating          SMALLINT NOT NULL DEFAULT 0,
            message         TEXT
        );
    """),
)

INDEXES = (
    "CREATE INDEX IF NOT EXISTS idx_users_email ON users(email);",
    "CREATE INDEX IF NOT EXISTS idx_properties_city ON properties(city);",
    "CREATE INDEX IF NOT EXISTS idx_reservations_guest ON reservations(guest_id, start_date);",
    "CREATE INDEX IF NOT EXISTS idx_reviews_property ON property_reviews(property_id);",
)


def create_tables(db: Database) -> list[str]:
    """
    Create every LightBnB table and index that is missing, in one commit.
    Safe to call multiple times (uses IF NOT EXISTS).

    Returns:
        Table names in creation order.

    Raises:
        psycopg2.Error: On any DDL failure; nothing is committed.
    """
    created = []
    conn = db.get_connection()
    try:
        with conn.cursor() as cur:
            for name, ddl in TABLES:
                cur.execute(ddl)
                created.append(name)
                logger.debug(f"Ensured table {name}")
            for ddl in INDEXES:
                cur.execute(ddl)
        conn.commit()
    except Exception as e:
        conn.rollback()
        logger.error(f"Schema setup stopped after {created}: {e}")
        raise
    finally:
        db.release_connection(conn)
    logger.info(f"Schema ready: {len(created)} tables, {len(INDEXES)} indexes.")
    return created


if __name__ == "__main__":
    with Database() as database:
        tables = create_tables(database)
    print(f"Created or verified tables: {', '.join(tables)}")
