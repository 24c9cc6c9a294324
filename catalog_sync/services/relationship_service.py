# catalog_sync/services/relationship_service.py
from typing import List

from catalog_sync.models import ProductSuperLink
from catalog_sync.services.base import StorageService


class RelationshipService(StorageService):
    """Service for parent/child product links."""

    def find_parent_ids(self, child_id: int) -> List[int]:
        """Get the ids of all parents a child product is linked to.

        Args:
            child_id: Entity id of the child product

        Returns:
            List of parent entity ids, empty if the product has no parents
        """
        rows = self._read(
            lambda: self.session.query(ProductSuperLink.parent_id)
            .filter(ProductSuperLink.product_id == child_id)
            .all(),
            f"load parents of product {child_id}"
        )
        return [row.parent_id for row in rows]
