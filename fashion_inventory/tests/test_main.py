"""
Tests for the command-line interface.
"""
import io
import json
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from fashion_inventory.main import main


class TestCommandLine(unittest.TestCase):
    """Test cases for CLI commands against a temporary database file."""

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.db_url = 'sqlite:///' + os.path.join(self.tmp_dir, 'inventory.db')

    def tearDown(self):
        from fashion_inventory.db import db
        db.engine.dispose()
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def run_cli(self, *argv):
        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            code = main(['--db-url', self.db_url] + list(argv))
        output = stdout.getvalue()
        return code, (json.loads(output) if output.strip() else None)

    def add_product(self, stock='10'):
        code, product = self.run_cli(
            'add-product', '--sku', 'KEM-001', '--name', 'Kemeja Putih M',
            '--category', 'kemeja', '--price', '150000', '--stock', stock
        )
        self.assertEqual(code, 0)
        return product

    def test_add_and_list_products(self):
        product = self.add_product()

        code, products = self.run_cli('list')

        self.assertEqual(code, 0)
        self.assertEqual([p['id'] for p in products], [product['id']])
        self.assertEqual(products[0]['lead_time'], 7.0)
        self.assertNotIn('sales_history', products[0])

    def test_add_product_validation_failure(self):
        code, result = self.run_cli(
            'add-product', '--sku', 'KEM-001', '--name', 'Kemeja',
            '--category', 'kemeja', '--price', '0', '--stock', '1'
        )

        self.assertEqual(code, 1)
        self.assertIn('price', result['details'])

    def test_record_sale_and_history(self):
        product = self.add_product(stock='10')

        code, sale = self.run_cli('record-sale', product['id'], '--quantity', '4', '--date', '2025-08-06')
        self.assertEqual(code, 0)
        self.assertEqual(sale['date'], '2025-08-06T00:00:00')

        code, metrics = self.run_cli('metrics', product['id'])
        self.assertEqual(metrics['current_stock'], 6)
        self.assertEqual(metrics['weekly_sales'], [4])

        code, history = self.run_cli('history', product['id'])
        self.assertEqual([s['quantity'] for s in history], [4])

    def test_record_sale_rejects_insufficient_stock(self):
        product = self.add_product(stock='3')

        code, result = self.run_cli('record-sale', product['id'], '--quantity', '5')

        self.assertEqual(code, 1)
        self.assertIn('quantity', result['details'])

        code, metrics = self.run_cli('metrics', product['id'])
        self.assertEqual(metrics['current_stock'], 3)

    def test_record_sale_rejects_invalid_date(self):
        product = self.add_product(stock='10')

        code, result = self.run_cli('record-sale', product['id'], '--quantity', '1', '--date', 'yesterday')

        self.assertEqual(code, 1)
        self.assertEqual(result['error'], 'ValidationError')
        self.assertIn('date', result['details'])

        code, history = self.run_cli('history', product['id'])
        self.assertEqual(history, [])

    def test_update_and_delete_product(self):
        product = self.add_product()

        code, updated = self.run_cli('update-product', product['id'], '--name', 'Kemeja Biru L')
        self.assertEqual(updated['name'], 'Kemeja Biru L')

        code, result = self.run_cli('delete-product', product['id'])
        self.assertEqual(result, {'deleted': True})

        code, result = self.run_cli('delete-product', product['id'])
        self.assertEqual(result, {'deleted': False})

    def test_metrics_for_unknown_product(self):
        self.run_cli('init-db')

        code, result = self.run_cli('metrics', 'missing')

        self.assertEqual(code, 1)
        self.assertEqual(result['error'], 'NotFoundError')

    def test_seed_and_dashboard(self):
        code, result = self.run_cli('seed', '--seed', '5')
        self.assertEqual(result, {'products': 6, 'sales': 144})

        code, stats = self.run_cli('dashboard')
        self.assertEqual(stats['total_products'], 6)
        self.assertEqual(stats['total_transactions'], 144)

        code, low_stock = self.run_cli('low-stock')
        self.assertEqual(code, 0)
        self.assertTrue(all(p['status'] in ('warning', 'critical') for p in low_stock))

        code, summary = self.run_cli('sales-summary')
        self.assertEqual(len(summary), 6)
        self.assertTrue(all(s['total_sold'] >= 24 * 5 for s in summary))

    def test_export_csv(self):
        self.add_product()

        with patch('sys.stdout', new_callable=io.StringIO) as stdout:
            code = main(['--db-url', self.db_url, 'export-csv'])

        lines = stdout.getvalue().splitlines()
        self.assertEqual(code, 0)
        self.assertTrue(lines[0].startswith('id,sku,name,category'))
        self.assertEqual(len(lines), 2)


if __name__ == '__main__':
    unittest.main()
