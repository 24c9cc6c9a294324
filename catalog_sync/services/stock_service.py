# catalog_sync/services/stock_service.py
from decimal import Decimal
import logging

from sqlalchemy import func, update

from catalog_sync.models import StockItem, ProductSuperLink
from catalog_sync.services.base import StorageService

logger = logging.getLogger(__name__)


class StockService(StorageService):
    """Reads and writes stock items and their derived stock status."""

    def write_quantity_and_status(self, product_id: int, qty: Decimal, in_stock: bool) -> int:
        """Write a product's quantity together with its stock flag.

        Args:
            product_id: Entity id of the product
            qty: New quantity
            in_stock: Derived stock flag for the quantity

        Returns:
            Number of stock items updated
        """
        statement = (
            update(StockItem)
            .where(StockItem.product_id == product_id)
            .values(qty=qty, is_in_stock=in_stock)
        )
        updated = self._write(statement, f"update stock for product {product_id}")

        if updated == 0:
            logger.warning(f"No stock item exists for product {product_id}; quantity not stored")

        return updated

    def sum_child_quantity(self, parent_id: int) -> Decimal:
        """Get the total quantity of all children linked to a parent.

        Children without a stock item add nothing to the total.

        Args:
            parent_id: Entity id of the parent product

        Returns:
            Sum of child quantities (0 when there are none)
        """
        def query():
            return (
                self.session.query(func.coalesce(func.sum(StockItem.qty), 0))
                .select_from(ProductSuperLink)
                .outerjoin(StockItem, StockItem.product_id == ProductSuperLink.product_id)
                .filter(ProductSuperLink.parent_id == parent_id)
                .scalar()
            )

        total = self._read(query, f"sum child quantity for parent {parent_id}")
        return Decimal(str(total)) if total is not None else Decimal(0)

    def write_status(self, product_id: int, in_stock: bool) -> int:
        """Write only the stock flag of a product, leaving its quantity alone.

        Args:
            product_id: Entity id of the product
            in_stock: New stock flag

        Returns:
            Number of stock items updated
        """
        statement = (
            update(StockItem)
            .where(StockItem.product_id == product_id)
            .values(is_in_stock=in_stock)
        )
        updated = self._write(statement, f"update stock status for product {product_id}")

        if updated == 0:
            logger.warning(f"No stock item exists for product {product_id}; status not stored")

        return updated
