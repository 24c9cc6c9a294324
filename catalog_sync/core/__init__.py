from .stock import normalize_quantity, is_in_stock, is_website_id
from .stock_propagator import StockPropagator
from .context import CatalogContext
from .product_handle import ProductHandle

__all__ = [
    'normalize_quantity',
    'is_in_stock',
    'is_website_id',
    'StockPropagator',
    'CatalogContext',
    'ProductHandle'
]
