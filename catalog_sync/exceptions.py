class CatalogSyncError(Exception):
    """Base exception for catalog update errors.

    Subclasses only change ``default_message``, which is used when an
    error is raised without a message.
    """

    default_message = "An error occurred while updating the catalog"

    def __init__(self, message=None, code=None, details=None):
        """Initialize the exception.

        Args:
            message: Error message, reported as is for skipped items
            code: Numeric error code (e.g. 101 for an unknown SKU)
            details: Additional error details
        """
        self.message = message or self.default_message
        self.code = code
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def to_dict(self):
        """Convert the exception to a dictionary."""
        error_dict = {'error': type(self).__name__, 'message': self.message}

        if self.code:
            error_dict['code'] = self.code
        if self.details:
            error_dict['details'] = self.details

        return error_dict


class ConfigError(CatalogSyncError):
    """Settings or database URL cannot be used."""
    default_message = "Configuration error"


class DatabaseError(CatalogSyncError):
    default_message = "Database error"


class StorageError(DatabaseError):
    """A catalog read or write failed."""
    default_message = "Storage error"


class ValidationError(CatalogSyncError):
    default_message = "Validation error"


class InvalidValueError(ValidationError):
    """A field value cannot be applied to a product."""
    default_message = "Invalid field value"


class NotFoundError(CatalogSyncError):
    """A SKU or attribute code does not exist in the catalog."""

    default_message = "Resource not found"

    def __init__(self, message=None, code=None, details=None, sku=None):
        self.sku = sku
        super().__init__(message, code, details)


class BatchProcessError(CatalogSyncError):
    """An update batch cannot be loaded or run."""
    default_message = "Batch process error"
