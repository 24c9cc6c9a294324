# catalog_sync/core/stock_propagator.py
from typing import Dict, Iterable, List
import logging

from catalog_sync.core.stock import is_in_stock
from catalog_sync.exceptions import CatalogSyncError, StorageError

logger = logging.getLogger(__name__)


class StockPropagator:
    """Recomputes the stock flag of parent products from their children.

    A parent is in stock when the summed quantity of all its children is
    positive. Only the parent's flag is written; its own quantity is left
    untouched.
    """

    def __init__(self, stock, reindex_queue, isolate_failures: bool = False):
        """Initialize the propagator.

        Args:
            stock: Stock store with sum_child_quantity and write_status
            reindex_queue: Queue that receives every updated parent
            isolate_failures: Keep going after a parent fails and report
                all failures together at the end
        """
        self.stock = stock
        self.reindex_queue = reindex_queue
        self.isolate_failures = isolate_failures

    def update_parent(self, parent_id: int) -> Dict:
        """Recompute and store the stock flag of one parent.

        Args:
            parent_id: Entity id of the parent product

        Returns:
            Dictionary with the parent's total child quantity and new flag
        """
        total_qty = self.stock.sum_child_quantity(parent_id)
        in_stock = is_in_stock(total_qty)

        self.stock.write_status(parent_id, in_stock)
        self.reindex_queue.add_product(parent_id)

        logger.debug(f"Parent {parent_id}: child qty {total_qty}, in_stock={in_stock}")

        return {
            'parent_id': parent_id,
            'total_qty': total_qty,
            'in_stock': in_stock
        }

    def propagate(self, parent_ids: Iterable[int]) -> List[Dict]:
        """Update the stock flag of each parent in turn.

        By default the first failure stops the loop and is raised as is;
        parents written before it keep their new flag.

        Args:
            parent_ids: Entity ids of the parents to update

        Returns:
            List with one result dictionary per updated parent

        Raises:
            StorageError: In isolated mode, if any parent failed
        """
        results = []
        failures = {}

        for parent_id in parent_ids:
            if not self.isolate_failures:
                results.append(self.update_parent(parent_id))
                continue

            try:
                results.append(self.update_parent(parent_id))
            except Exception as e:
                detail = e.message if isinstance(e, CatalogSyncError) else str(e)
                logger.error(
                    f"Error updating stock status of parent {parent_id}: {detail}",
                    exc_info=not isinstance(e, CatalogSyncError)
                )
                failures[parent_id] = detail

        if failures:
            failed = ', '.join(str(parent_id) for parent_id in failures)
            raise StorageError(
                f"Stock status not updated for parent(s) {failed}: {'; '.join(failures.values())}",
                details={'failed_parents': failures, 'updated_parents': [r['parent_id'] for r in results]}
            )

        return results
