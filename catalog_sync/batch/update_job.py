# catalog_sync/batch/update_job.py
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from sqlalchemy.orm import Session

from catalog_sync.config import config
from catalog_sync.db import session_scope
from catalog_sync.core.context import CatalogContext
from catalog_sync.core.product_handle import ProductHandle
from catalog_sync.exceptions import BatchProcessError, CatalogSyncError
from catalog_sync.logging_setup import get_logger, log_exception, log_manager

# Initialize logger
logger = get_logger('catalog_update')
logger.setLevel(logging.INFO)

def load_updates(path: Union[str, Path]) -> Dict[str, Dict[str, Any]]:
    """Load a batch of updates from a JSON file.

    The file holds one object keyed by SKU, each value being an object of
    field codes to values.

    Args:
        path: Path of the JSON file

    Returns:
        Dictionary of SKU to field updates

    Raises:
        BatchProcessError: If the file cannot be read or has the wrong shape
    """
    try:
        with open(path) as updates_file:
            updates = json.load(updates_file)
    except (OSError, json.JSONDecodeError) as e:
        raise BatchProcessError(f"Could not read updates from {path}: {str(e)}")

    if not isinstance(updates, dict):
        raise BatchProcessError(f"Updates in {path} must be an object keyed by SKU")

    for sku, fields in updates.items():
        if not isinstance(fields, dict):
            raise BatchProcessError(f"Updates for SKU {sku} must be an object of field codes to values")

    return updates

def apply_product_updates(context: CatalogContext, sku: str, fields: Mapping[str, Any]) -> Dict:
    """Apply all field updates for one SKU.

    A SKU that cannot be resolved is reported and skipped as a whole.

    Args:
        context: Collaborators for the batch
        sku: Product SKU
        fields: Field codes to values, applied in order

    Returns:
        Dictionary with the results for this SKU
    """
    try:
        handle = ProductHandle(sku, context)
    except CatalogSyncError as e:
        context.errors.add_error(e.message)
        return {
            'sku': sku,
            'success': False,
            'entity_id': None,
            'fields_updated': 0,
            'fields_skipped': len(fields),
            'error': e.message
        }

    fields_updated = 0
    fields_skipped = 0

    for code, value in fields.items():
        result = handle.update_field(code, value)
        if result['success']:
            fields_updated += 1
        else:
            fields_skipped += 1

    logger.debug(f"SKU {sku} (product {handle.entity_id}): {fields_updated} updated, {fields_skipped} skipped")

    return {
        'sku': sku,
        'success': True,
        'entity_id': handle.entity_id,
        'fields_updated': fields_updated,
        'fields_skipped': fields_skipped,
        'error': None
    }

def _apply_all(session: Session, updates: Mapping[str, Mapping[str, Any]], isolate_parent_failures: bool) -> Dict:
    context = CatalogContext.from_session(
        session,
        store_id=config.update_config['store_id'],
        isolate_parent_failures=isolate_parent_failures
    )

    results = {
        'products_processed': 0,
        'products_skipped': 0,
        'fields_updated': 0,
        'fields_skipped': 0,
    }

    for sku, fields in updates.items():
        product_result = apply_product_updates(context, sku, fields)

        if product_result['success']:
            results['products_processed'] += 1
        else:
            results['products_skipped'] += 1

        results['fields_updated'] += product_result['fields_updated']
        results['fields_skipped'] += product_result['fields_skipped']

    results['errors'] = context.errors.errors
    results['reindex_product_ids'] = context.reindex_queue.product_ids
    return results

def run_update_job(
    updates: Mapping[str, Mapping[str, Any]],
    session: Optional[Session] = None,
    isolate_parent_failures: Optional[bool] = None
) -> Dict:
    """Run a catalog update batch.

    Args:
        updates: SKU to field updates
        session: Optional session to use; a new session scope is opened
            (and committed) when not given
        isolate_parent_failures: Override of the configured parent failure
            handling

    Returns:
        Dictionary with job results
    """
    log_info = log_manager.batch_start_log('catalog_update', updates)
    start_time = log_info['start_time']

    results = {
        'start_time': start_time,
        'end_time': None,
        'duration': None,
    }

    try:
        if isolate_parent_failures is None:
            isolate_parent_failures = config.update_config['isolate_parent_failures']

        if session is not None:
            results.update(_apply_all(session, updates, isolate_parent_failures))
        else:
            with session_scope() as scoped_session:
                results.update(_apply_all(scoped_session, updates, isolate_parent_failures))

        results['success'] = True

    except Exception as e:
        log_exception('catalog_update', e, "Error during catalog update")
        results['success'] = False
        results['error'] = str(e)

    results['end_time'] = datetime.now()
    results['duration'] = results['end_time'] - start_time

    log_manager.batch_end_log(log_info, results)

    return results
