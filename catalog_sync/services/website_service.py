# catalog_sync/services/website_service.py
import logging

from sqlalchemy import insert
from sqlalchemy.dialects import postgresql, sqlite

from catalog_sync.exceptions import StorageError
from catalog_sync.models import ProductWebsite
from catalog_sync.services.base import StorageService

logger = logging.getLogger(__name__)


class WebsiteService(StorageService):
    """Service for product to website assignments."""

    def _insert_ignore_statement(self, values: dict):
        """Build an insert that skips rows which already exist."""
        dialect = self.session.get_bind().dialect.name

        if dialect == 'postgresql':
            return postgresql.insert(ProductWebsite.__table__).values(**values).on_conflict_do_nothing()
        if dialect == 'sqlite':
            return sqlite.insert(ProductWebsite.__table__).values(**values).on_conflict_do_nothing()
        if dialect in ('mysql', 'mariadb'):
            return insert(ProductWebsite.__table__).values(**values).prefix_with('IGNORE')

        raise StorageError(f"Website assignment is not supported for database dialect {dialect}")

    def insert_ignore(self, product_id: int, website_id: int) -> bool:
        """Assign a product to a website; an existing assignment is left as is.

        Args:
            product_id: Entity id of the product
            website_id: Website id

        Returns:
            True if a new assignment was created
        """
        statement = self._insert_ignore_statement({'product_id': product_id, 'website_id': website_id})
        inserted = self._write(statement, f"assign product {product_id} to website {website_id}")

        if inserted == 0:
            logger.debug(f"Product {product_id} already assigned to website {website_id}")

        return inserted > 0
