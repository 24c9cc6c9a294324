"""
Command line interface for catalog updates.

Reads a JSON file of SKU to field updates, applies it to the catalog and
prints what was skipped.
"""
import argparse
import logging
import sys

from tabulate import tabulate

from catalog_sync.batch.update_job import load_updates, run_update_job
from catalog_sync.db import db
from catalog_sync.exceptions import BatchProcessError, ConfigError
from catalog_sync.logging_setup import get_logger

logger = get_logger('catalog_update_runner')

def print_results(results):
    """Print a summary of a finished job."""
    summary = [
        ['Products processed', results.get('products_processed', 0)],
        ['Products skipped', results.get('products_skipped', 0)],
        ['Fields updated', results.get('fields_updated', 0)],
        ['Fields skipped', results.get('fields_skipped', 0)],
        ['Products to reindex', len(results.get('reindex_product_ids', []))],
        ['Duration', results.get('duration')],
    ]
    print(tabulate(summary, tablefmt='simple'))

    errors = results.get('errors', [])
    if errors:
        print()
        print(tabulate([[i, error] for i, error in enumerate(errors, 1)],
                       headers=['#', 'Skipped'], tablefmt='grid'))

    reindex_ids = results.get('reindex_product_ids', [])
    if reindex_ids:
        print()
        print(f"Reindex: {', '.join(str(product_id) for product_id in reindex_ids)}")

def main(argv=None):
    """Run a catalog update from the command line."""
    parser = argparse.ArgumentParser(description='Apply field updates to catalog products')
    parser.add_argument('updates_file', help='JSON file of {sku: {field: value}} updates')
    parser.add_argument('--database-url', help='SQLAlchemy database URL (overrides settings.ini)')
    parser.add_argument('--create-tables', action='store_true', help='Create missing tables before updating')
    parser.add_argument('--isolate-parent-failures', action='store_true',
                        help='Keep updating other parents when one parent stock status fails')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')

    args = parser.parse_args(argv)

    if args.verbose:
        logger.setLevel(logging.DEBUG)
        logging.getLogger('catalog_sync').setLevel(logging.DEBUG)

    try:
        updates = load_updates(args.updates_file)
    except BatchProcessError as e:
        logger.error(e.message)
        return 1

    try:
        if args.database_url:
            db.initialize(args.database_url)

        if args.create_tables:
            db.create_all_tables()
    except ConfigError as e:
        logger.error(e.message)
        return 1

    logger.info(f"Applying updates for {len(updates)} SKU(s) from {args.updates_file}")

    results = run_update_job(
        updates,
        isolate_parent_failures=True if args.isolate_parent_failures else None
    )

    if not results.get('success', False):
        logger.error(f"Catalog update failed: {results.get('error', 'Unknown error')}")
        return 1

    print_results(results)
    return 0

if __name__ == "__main__":
    sys.exit(main())
