"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import Engine, text
from sqlmodel import Session, SQLModel, create_engine

from tables_service.runtime.config.config_data import ConfigData


class DbSessionService:
    def __init__(self, config: ConfigData, engine: Engine | None = None):
        """Initialize the shared database engine and session factory.

        Args:
            config: Application configuration
            engine: Pre-built engine; when omitted one is created from ``config.database``
        """
        self._config = config
        if engine is not None:
            self._engine = engine
            return

        db_config = config.database
        logger.info("Configuring database engine for environment: {}", config.app.environment)

        engine_kwargs: dict[str, Any] = {
            "pool_pre_ping": True,
            "echo": db_config.echo,
            "connect_args": self._get_connect_args(config),
        }
        if not db_config.is_sqlite:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                }
            )

        self._engine = create_engine(db_config.connection_string, **engine_kwargs)
        logger.info(
            "Database engine initialized",
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    def _get_connect_args(self, config: ConfigData) -> dict:
        """Get database-specific connection arguments."""
        connect_args = {}

        if "postgresql" in config.database.url:
            connect_args.update(
                {
                    "application_name": f"{config.app.environment}_tables",
                    "connect_timeout": 30,
                }
            )

        elif config.database.is_sqlite:
            connect_args.update(
                {
                    # Sessions are used from FastAPI's worker threads
                    "check_same_thread": False,
                    "timeout": 20,
                }
            )

            if config.app.environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )

        return connect_args

    def create_all(self) -> None:
        """Create all database tables."""
        from tables_service.entities.table import TableEntity  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Run the enclosed block in one transaction: commit, or roll back on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.bind(
                error_type=type(e).__name__,
                error_message=str(e),
            ).warning("Database transaction rolled back")
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.bind(
                error_type=type(e).__name__,
                error_message=str(e),
            ).error("Database health check failed")
            return False

    def dispose(self) -> None:
        self._engine.dispose()
