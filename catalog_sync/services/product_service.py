# catalog_sync/services/product_service.py
from typing import Optional

from catalog_sync.models import Product
from catalog_sync.services.base import StorageService


class ProductService(StorageService):
    """Resolves external product keys to internal entity ids."""

    def find_internal_id(self, sku: str) -> Optional[int]:
        """Get the entity id of a product by SKU.

        Args:
            sku: Product SKU

        Returns:
            Entity id or None if no product has this SKU
        """
        return self._read(
            lambda: self.session.query(Product.entity_id).filter(Product.sku == sku).scalar(),
            f"look up SKU {sku}"
        )
