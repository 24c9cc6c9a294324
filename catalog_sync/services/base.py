# catalog_sync/services/base.py
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog_sync.exceptions import StorageError

logger = logging.getLogger(__name__)


class StorageService:
    """Common plumbing for services that read and write catalog tables."""

    def __init__(self, session: Session):
        """Initialize the service.

        Args:
            session: Database session
        """
        self.session = session

    def _write(self, statement, action: str) -> int:
        """Execute a single write inside its own savepoint.

        A failed statement rolls back only its savepoint, so writes made
        earlier in the same session stay in place.

        Args:
            statement: SQLAlchemy DML statement
            action: Short description used in error messages

        Returns:
            Number of rows matched by the statement

        Raises:
            StorageError: If the database rejects the statement
        """
        try:
            with self.session.begin_nested():
                result = self.session.execute(statement)
            return result.rowcount
        except SQLAlchemyError as e:
            logger.error(f"Error while trying to {action}: {str(e)}")
            raise StorageError(f"Error while trying to {action}: {str(e)}") from e

    def _read(self, query, action: str):
        """Run a read callable and wrap database failures.

        Args:
            query: Zero-argument callable performing the read
            action: Short description used in error messages

        Returns:
            Whatever the callable returns
        """
        try:
            return query()
        except SQLAlchemyError as e:
            logger.error(f"Error while trying to {action}: {str(e)}")
            raise StorageError(f"Error while trying to {action}: {str(e)}") from e
