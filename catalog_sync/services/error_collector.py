# catalog_sync/services/error_collector.py
from typing import List
import logging

logger = logging.getLogger(__name__)


class ErrorCollector:
    """Accumulates skipped-item messages for the end-of-batch report."""

    def __init__(self):
        self._errors: List[str] = []

    def add_error(self, message: str) -> None:
        """Record a failure report.

        Args:
            message: Human readable description of what was skipped
        """
        self._errors.append(str(message))
        logger.warning(message)

    @property
    def errors(self) -> List[str]:
        return list(self._errors)

    @property
    def has_errors(self) -> bool:
        return bool(self._errors)

    def __len__(self) -> int:
        return len(self._errors)
