"""
Tests for the catalog update command line interface.
"""
import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from datetime import timedelta
from unittest.mock import patch

from catalog_sync.cli import update_cli


class TestUpdateCli(unittest.TestCase):

    def setUp(self):
        handle, self.path = tempfile.mkstemp(suffix='.json')
        with os.fdopen(handle, 'w') as json_file:
            json.dump({'ABC123': {'qty': 4}, 'MISSING': {'qty': 1}}, json_file)
        self.addCleanup(os.remove, self.path)

    @patch('catalog_sync.cli.update_cli.run_update_job')
    def test_prints_skipped_items(self, mock_run):
        mock_run.return_value = {
            'success': True,
            'products_processed': 1,
            'products_skipped': 1,
            'fields_updated': 1,
            'fields_skipped': 1,
            'duration': timedelta(seconds=1),
            'errors': ['SKU MISSING skipped: Product not found'],
            'reindex_product_ids': [7, 50, 51],
        }

        output = io.StringIO()
        with redirect_stdout(output):
            exit_code = update_cli.main([self.path, '--isolate-parent-failures'])

        self.assertEqual(exit_code, 0)
        mock_run.assert_called_once_with(
            {'ABC123': {'qty': 4}, 'MISSING': {'qty': 1}},
            isolate_parent_failures=True
        )
        self.assertIn('SKU MISSING skipped: Product not found', output.getvalue())
        self.assertIn('Reindex: 7, 50, 51', output.getvalue())

    @patch('catalog_sync.cli.update_cli.run_update_job')
    def test_failed_job_exits_non_zero(self, mock_run):
        mock_run.return_value = {'success': False, 'error': 'no db'}

        self.assertEqual(update_cli.main([self.path]), 1)
        mock_run.assert_called_once_with(
            {'ABC123': {'qty': 4}, 'MISSING': {'qty': 1}},
            isolate_parent_failures=None
        )

    @patch('catalog_sync.cli.update_cli.run_update_job')
    def test_unreadable_file_exits_non_zero(self, mock_run):
        self.assertEqual(update_cli.main(['/nonexistent/updates.json']), 1)
        mock_run.assert_not_called()


if __name__ == '__main__':
    unittest.main()
