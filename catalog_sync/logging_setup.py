"""
Logging for catalog updates.

Library modules log through ``logging.getLogger(__name__)`` and end up in
the ``catalog_sync`` package log. Update jobs and the command line runner
get a log file of their own through ``get_logger``.
"""
import logging
import logging.handlers
from datetime import datetime
from pathlib import Path

from catalog_sync.config import config

PACKAGE_LOGGER = 'catalog_sync'
JOB_LOGGER = 'catalog_jobs'

class Logger:
    """Log manager for the catalog update system."""

    _instance = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Logger, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        settings = config.log_config
        self._level = getattr(logging, settings['level'].upper(), logging.INFO)
        self._formatter = logging.Formatter(settings['format'])
        self._directory = Path(settings['directory'])
        self._max_bytes = settings['max_size_mb'] * 1024 * 1024
        self._backup_count = settings['backup_count']
        self._console = settings['console_output']
        self._loggers = {}

        self._directory.mkdir(parents=True, exist_ok=True)
        self._attach(logging.getLogger(PACKAGE_LOGGER))

        self._initialized = True

    def _attach(self, target):
        """Give a logger its rotating log file and optional console output."""
        target.setLevel(self._level)

        for handler in target.handlers[:]:
            target.removeHandler(handler)
            handler.close()

        handlers = [logging.handlers.RotatingFileHandler(
            self._directory / f"{target.name}.log",
            maxBytes=self._max_bytes,
            backupCount=self._backup_count
        )]
        if self._console:
            handlers.append(logging.StreamHandler())

        for handler in handlers:
            handler.setFormatter(self._formatter)
            target.addHandler(handler)

        target.propagate = False
        self._loggers[target.name] = target
        return target

    def get_logger(self, name):
        """Get a logger writing to ``<directory>/<name>.log``.

        Args:
            name: Name of the logger

        Returns:
            Configured logger instance
        """
        if name in self._loggers:
            return self._loggers[name]
        return self._attach(logging.getLogger(name))

    def log_exception(self, logger_name, exception, message=None):
        """Log an exception with its traceback.

        Catalog errors are logged with their code and details.

        Args:
            logger_name: Logger name
            exception: Exception object
            message: Optional message to put in front
        """
        text = str(exception)
        if message:
            text = f"{message}: {text}"

        details = getattr(exception, 'details', None)
        if details:
            text = f"{text} {details}"

        self.get_logger(logger_name).error(text, exc_info=exception)

    def batch_start_log(self, job_name, updates):
        """Log the start of an update job.

        Args:
            job_name: Name of the job
            updates: SKU to field updates the job is about to apply

        Returns:
            Dictionary passed back to batch_end_log
        """
        log_info = {
            'job_name': job_name,
            'start_time': datetime.now(),
            'sku_count': len(updates),
            'field_count': sum(len(fields) for fields in updates.values())
        }

        self.get_logger(JOB_LOGGER).info(
            f"Starting {job_name}: {log_info['sku_count']} SKU(s), "
            f"{log_info['field_count']} field update(s)"
        )

        return log_info

    def batch_end_log(self, log_info, results):
        """Log the outcome of an update job.

        Args:
            log_info: Dictionary returned by batch_start_log
            results: Results dictionary of the job
        """
        job_logger = self.get_logger(JOB_LOGGER)
        job_name = log_info['job_name']
        duration = results.get('duration') or datetime.now() - log_info['start_time']

        if not results.get('success'):
            job_logger.error(f"{job_name} failed after {duration}: {results.get('error', 'unknown error')}")
            return

        job_logger.info(
            f"Completed {job_name} in {duration}: "
            f"{results['products_processed']} of {log_info['sku_count']} product(s) processed, "
            f"{results['fields_updated']} of {log_info['field_count']} field(s) updated, "
            f"{len(results['reindex_product_ids'])} product(s) queued for reindex"
        )

        if results['errors']:
            job_logger.warning(f"{job_name} skipped {len(results['errors'])} item(s)")

# Global log manager instance
log_manager = Logger()

def get_logger(name):
    """Get a logger with its own log file."""
    return log_manager.get_logger(name)

def log_exception(logger_name, exception, message=None):
    """Log an exception with its traceback."""
    log_manager.log_exception(logger_name, exception, message)
