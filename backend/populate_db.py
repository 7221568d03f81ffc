"""Default accounts and locations for a fresh installation.

Run directly (`python populate_db.py`) or let the application seed on start-up
when SEED_DEFAULT_DATA is enabled.
"""
import logging

from sqlalchemy.orm import Session

# Database models and setup
from database import SessionLocal, init_db
from models.location import Location
from models.users import User
from utils.hashing import get_password_hash
from utils.permissions import Role

logger = logging.getLogger(__name__)

# Configuration
DEFAULT_USERS = [
    ("admin", "admin123", Role.ADMIN),
    ("bodeguero", "bodega123", Role.BODEGUERO),
    ("usuario", "user123", Role.USUARIO),
]

DEFAULT_LOCATIONS = [
    ("Almacén Principal", "Bodega principal de productos"),
    ("Estante A1", "Primera sección del almacén"),
    ("Zona de Recepción", "Área de entrada de mercancías"),
]
# End Configuration


def _create_default_users(db: Session) -> None:
    for username, password, role in DEFAULT_USERS:
        db.add(User(username=username, password_hash=get_password_hash(password), role=role))
    db.commit()
    logger.info("Default users created: %s", ", ".join(u for u, _, _ in DEFAULT_USERS))


def seed_default_data(db: Session) -> dict:
    """Create default users/locations only where the table is still empty."""
    created = {"users": 0, "locations": 0}

    existing_users = db.query(User).count()
    if existing_users == 0:
        _create_default_users(db)
        created["users"] = len(DEFAULT_USERS)
    else:
        logger.info("%s users already exist, skipping default users", existing_users)

    if db.query(Location).count() == 0:
        for name, description in DEFAULT_LOCATIONS:
            db.add(Location(name=name, description=description))
        db.commit()
        created["locations"] = len(DEFAULT_LOCATIONS)
        logger.info("Default locations created")

    return created


def reset_default_users(db: Session) -> None:
    """Drop every account and recreate the default ones."""
    logger.warning("Resetting users to defaults")
    # Delete and recreate commit together
    db.query(User).delete(synchronize_session=False)
    try:
        _create_default_users(db)
    except Exception:
        db.rollback()
        raise


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    session = SessionLocal()
    try:
        result = seed_default_data(session)
        print(f"Seed finished: {result}")
        for username, password, _ in DEFAULT_USERS:
            print(f"  {username} / {password}")
    finally:
        session.close()
