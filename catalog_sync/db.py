import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.orm import sessionmaker, scoped_session

from catalog_sync.config import config
from catalog_sync.exceptions import ConfigError

logger = logging.getLogger(__name__)

def _engine_options(url):
    """Engine keyword arguments from the DATABASE settings."""
    options = {'echo': config.get_boolean('DATABASE', 'echo', False)}

    # SQLite uses a single-connection pool, so pool sizing does not apply
    if url.get_backend_name() != 'sqlite':
        for key in ('pool_size', 'max_overflow', 'pool_timeout', 'pool_recycle'):
            options[key] = config.get_int('DATABASE', key)

    return options

class Database:
    """Catalog database: one engine and a thread-local session registry."""

    _instance = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Database, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._engine = None
        self._session = None
        self._initialized = True

    def initialize(self, connection_string=None):
        """Connect to the catalog database.

        Args:
            connection_string: Optional SQLAlchemy URL; the configured
                DATABASE settings are used when not given

        Raises:
            ConfigError: If the URL cannot be parsed
        """
        if connection_string is None:
            connection_string = config.get_db_url()

        try:
            url = make_url(connection_string)
        except ArgumentError as e:
            raise ConfigError(f"Invalid database URL: {str(e)}")

        if self._session is not None:
            self._session.remove()

        self._engine = create_engine(url, **_engine_options(url))
        self._session = scoped_session(sessionmaker(bind=self._engine))

        logger.info(f"Catalog database: {url.render_as_string(hide_password=True)}")

    def create_all_tables(self):
        """Create any catalog tables that do not exist yet."""
        from catalog_sync.models import Base
        Base.metadata.create_all(self.engine)

    @property
    def session(self):
        """Session registry, connecting on first use."""
        if self._session is None:
            self.initialize()
        return self._session

    @property
    def engine(self):
        if self._engine is None:
            self.initialize()
        return self._engine

    @contextmanager
    def session_scope(self):
        """Commit the session on success, roll it back on any error."""
        session = self.session()
        try:
            yield session
            session.commit()
        except Exception:
            logger.warning("Rolling back catalog session")
            session.rollback()
            raise
        finally:
            session.close()

# Global database instance
db = Database()

@contextmanager
def session_scope():
    """Session scope on the global database."""
    with db.session_scope() as session:
        yield session
