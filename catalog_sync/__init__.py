from .config import config
from .db import db, session_scope
from .logging_setup import log_manager, get_logger
from .exceptions import (
    CatalogSyncError, NotFoundError, InvalidValueError, StorageError, BatchProcessError
)

__all__ = [
    'config',
    'db',
    'session_scope',
    'log_manager',
    'get_logger',
    'CatalogSyncError',
    'NotFoundError',
    'InvalidValueError',
    'StorageError',
    'BatchProcessError'
]
