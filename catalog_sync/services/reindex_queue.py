# catalog_sync/services/reindex_queue.py
from typing import List
import logging

logger = logging.getLogger(__name__)


class ReindexQueue:
    """Collects the ids of products touched during a batch.

    Ids keep the order they were first added in; adding an id twice is a
    no-op.
    """

    def __init__(self):
        self._product_ids = {}

    def add_product(self, product_id: int) -> None:
        """Mark a product as needing downstream reprocessing."""
        if product_id not in self._product_ids:
            logger.debug(f"Queued product {product_id} for reindex")
            self._product_ids[product_id] = True

    @property
    def product_ids(self) -> List[int]:
        return list(self._product_ids)

    def __contains__(self, product_id) -> bool:
        return product_id in self._product_ids

    def __len__(self) -> int:
        return len(self._product_ids)
