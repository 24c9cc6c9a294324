# catalog_sync/core/context.py
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.orm import Session

from catalog_sync.services import (
    ProductService, AttributeService, StockService, RelationshipService,
    WebsiteService, ReindexQueue, ErrorCollector
)


@dataclass
class CatalogContext:
    """Collaborators a product handle reads from and writes to.

    Attributes:
        products: Resolves SKUs to entity ids
        attributes: Resolves field codes to writable attributes
        stock: Stock item reads and writes
        relationships: Parent/child link lookups
        websites: Website assignment writes
        reindex_queue: Products touched by the batch
        errors: Skipped-item report
        isolate_parent_failures: Attempt every parent even after one fails
    """
    products: ProductService
    attributes: AttributeService
    stock: StockService
    relationships: RelationshipService
    websites: WebsiteService
    reindex_queue: ReindexQueue = field(default_factory=ReindexQueue)
    errors: ErrorCollector = field(default_factory=ErrorCollector)
    isolate_parent_failures: bool = False

    @classmethod
    def from_session(
        cls,
        session: Session,
        store_id: int = 0,
        isolate_parent_failures: bool = False,
        reindex_queue: Optional[ReindexQueue] = None,
        errors: Optional[ErrorCollector] = None
    ) -> 'CatalogContext':
        """Build a context backed by database services on one session.

        Args:
            session: Database session
            store_id: Store scope for attribute values
            isolate_parent_failures: Whether parent writes are isolated
            reindex_queue: Optional queue to share between contexts
            errors: Optional collector to share between contexts

        Returns:
            CatalogContext instance
        """
        return cls(
            products=ProductService(session),
            attributes=AttributeService(session, store_id=store_id),
            stock=StockService(session),
            relationships=RelationshipService(session),
            websites=WebsiteService(session),
            reindex_queue=reindex_queue if reindex_queue is not None else ReindexQueue(),
            errors=errors if errors is not None else ErrorCollector(),
            isolate_parent_failures=isolate_parent_failures
        )
