# catalog_sync/core/product_handle.py
from typing import Any, Dict, List
import logging

from catalog_sync.core.context import CatalogContext
from catalog_sync.core.stock import normalize_quantity, is_in_stock, is_website_id
from catalog_sync.core.stock_propagator import StockPropagator
from catalog_sync.exceptions import CatalogSyncError, InvalidValueError, NotFoundError

logger = logging.getLogger(__name__)

# Error code carried by NotFoundError for an unknown SKU
SKU_NOT_FOUND = 101

QTY_FIELD = 'qty'
WEBSITE_FIELD = 'website_id'


class ProductHandle:
    """One catalog product, resolved by SKU, receiving a batch of field updates.

    Creating the handle resolves the SKU and fails with NotFoundError when
    no product has it. After that, every update_field call is independent:
    a failing field is reported to the context's error collector and never
    stops the fields after it.
    """

    def __init__(self, sku: str, context: CatalogContext):
        """Resolve the SKU and register the product for reindexing.

        Args:
            sku: Product SKU
            context: Collaborators to read from and write to

        Raises:
            NotFoundError: If no product has this SKU
            StorageError: If the lookup itself fails
        """
        self.context = context

        entity_id = context.products.find_internal_id(sku)
        if entity_id is None:
            raise NotFoundError(f"SKU {sku} skipped: Product not found", code=SKU_NOT_FOUND, sku=sku)

        self.sku = sku
        self.entity_id = entity_id
        self._parent_ids = None
        self.propagator = StockPropagator(
            context.stock,
            context.reindex_queue,
            isolate_failures=context.isolate_parent_failures
        )

        context.reindex_queue.add_product(entity_id)

    def update_field(self, code: str, value: Any) -> Dict:
        """Apply one field update, choosing the update action by field code.

        Args:
            code: Field code
            value: Field value

        Returns:
            Dictionary with the outcome of the update
        """
        try:
            if code == QTY_FIELD:
                self.update_stock(value)
            elif code == WEBSITE_FIELD:
                self.update_website_ids(value)
            else:
                attribute = self.context.attributes.resolve_attribute(code)
                attribute.update_value(self.entity_id, value)
        except Exception as e:
            if isinstance(e, CatalogSyncError):
                detail = e.message
            else:
                logger.error(f"Unexpected error updating {code} for SKU {self.sku}", exc_info=True)
                detail = str(e)

            message = f'SKU {self.sku}: field "{code}" skipped: {detail}'
            self.context.errors.add_error(message)

            return {
                'field': code,
                'success': False,
                'error': message,
                'error_type': e.__class__.__name__
            }

        return {
            'field': code,
            'success': True,
            'error': None,
            'error_type': None
        }

    def update_stock(self, qty: Any) -> List[Dict]:
        """Update quantity and stock status, then the status of any parents.

        Args:
            qty: New quantity; negative values are stored as zero

        Returns:
            List with one result per parent updated

        Raises:
            InvalidValueError: If the quantity is not numeric
        """
        qty = normalize_quantity(qty)

        self.context.stock.write_quantity_and_status(self.entity_id, qty, is_in_stock(qty))

        if not self.has_parents():
            return []

        return self.propagator.propagate(self.parent_ids)

    def update_website_ids(self, value: Any) -> None:
        """Assign the product to each website in the list.

        Website ids before an invalid entry stay assigned.

        Args:
            value: List of integer website ids

        Raises:
            InvalidValueError: If the value is not a list of integers
        """
        if not isinstance(value, (list, tuple)):
            raise InvalidValueError("website_id value must be an array")

        if not value:
            raise InvalidValueError("website_id value must not be empty")

        for website_id in value:
            if not is_website_id(website_id):
                raise InvalidValueError("website_id values must be integers")

            self.context.websites.insert_ignore(self.entity_id, website_id)

    def has_parents(self) -> bool:
        """Whether the product is linked to at least one parent."""
        return bool(self.parent_ids)

    @property
    def parent_ids(self) -> List[int]:
        """Entity ids of the product's parents, loaded once per handle."""
        if self._parent_ids is None:
            self._parent_ids = list(self.context.relationships.find_parent_ids(self.entity_id))
        return self._parent_ids
