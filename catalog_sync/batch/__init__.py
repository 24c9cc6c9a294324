# catalog_sync/batch/__init__.py
from .update_job import run_update_job, apply_product_updates, load_updates

__all__ = [
    'run_update_job',
    'apply_product_updates',
    'load_updates'
]
