# Dependency injection (stores, database session)
from app.db.session import get_db
from app.services.user_store import UserStore, user_store


def get_user_store() -> UserStore:
    """Return the process-wide in-memory user store."""
    return user_store


__all__ = ["get_db", "get_user_store"]
