"""Database initialization script."""

from tables_service.core.services.database.db_session import DbSessionService
from tables_service.runtime.context import get_config


def init_db() -> None:
    """Create all database tables."""
    database_service = DbSessionService(get_config())
    try:
        database_service.create_all()
    finally:
        database_service.dispose()


if __name__ == "__main__":
    init_db()
