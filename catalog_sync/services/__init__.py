from .product_service import ProductService
from .attribute_service import AttributeService, ProductAttribute
from .stock_service import StockService
from .relationship_service import RelationshipService
from .website_service import WebsiteService
from .reindex_queue import ReindexQueue
from .error_collector import ErrorCollector

__all__ = [
    'ProductService',
    'AttributeService',
    'ProductAttribute',
    'StockService',
    'RelationshipService',
    'WebsiteService',
    'ReindexQueue',
    'ErrorCollector'
]
