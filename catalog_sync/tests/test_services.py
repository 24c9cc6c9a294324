"""
Tests for the database-backed catalog services.
"""
import unittest
from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from catalog_sync.exceptions import InvalidValueError, NotFoundError, StorageError
from catalog_sync.models import (
    StockItem, ProductWebsite, ProductEntityVarchar, ProductEntityText,
    ProductEntityDecimal, ProductEntityInt, ProductEntityDatetime
)
from catalog_sync.services import (
    ProductService, AttributeService, StockService, RelationshipService,
    WebsiteService, ReindexQueue, ErrorCollector
)
from catalog_sync.tests.db_helpers import create_test_session, seed_catalog, add_product, link


class DatabaseTestCase(unittest.TestCase):

    def setUp(self):
        self.session = create_test_session()
        seed_catalog(self.session)

    def tearDown(self):
        self.session.close()

    def stock_item(self, product_id):
        self.session.expire_all()
        return self.session.query(StockItem).filter(StockItem.product_id == product_id).one()


class TestProductService(DatabaseTestCase):

    def test_find_internal_id(self):
        service = ProductService(self.session)

        self.assertEqual(service.find_internal_id('ABC123'), 7)
        self.assertIsNone(service.find_internal_id('NOPE'))

    def test_database_failure_becomes_storage_error(self):
        session = MagicMock()
        session.query.side_effect = OperationalError('SELECT', {}, Exception('server gone'))

        with self.assertRaises(StorageError):
            ProductService(session).find_internal_id('ABC123')


class TestStockService(DatabaseTestCase):

    def test_write_quantity_and_status(self):
        service = StockService(self.session)

        updated = service.write_quantity_and_status(7, Decimal('4'), True)

        self.assertEqual(updated, 1)
        item = self.stock_item(7)
        self.assertEqual(item.qty, Decimal('4'))
        self.assertTrue(item.is_in_stock)

    def test_write_quantity_without_stock_item_is_a_no_op(self):
        add_product(self.session, 12, 'NO-STOCK', stock_item=False)
        service = StockService(self.session)

        self.assertEqual(service.write_quantity_and_status(12, Decimal('1'), True), 0)

    def test_sum_child_quantity(self):
        service = StockService(self.session)

        self.assertEqual(service.sum_child_quantity(50), Decimal('2'))
        self.assertEqual(service.sum_child_quantity(51), Decimal('2'))

    def test_sum_child_quantity_without_children_is_zero(self):
        service = StockService(self.session)

        self.assertEqual(service.sum_child_quantity(9), Decimal(0))

    def test_child_without_stock_item_counts_as_zero(self):
        add_product(self.session, 13, 'NO-STOCK-CHILD', stock_item=False)
        link(self.session, 13, 50)
        service = StockService(self.session)

        self.assertEqual(service.sum_child_quantity(50), Decimal('2'))

    def test_write_status_leaves_quantity_alone(self):
        service = StockService(self.session)
        service.write_quantity_and_status(50, Decimal('9'), False)

        service.write_status(50, True)

        item = self.stock_item(50)
        self.assertTrue(item.is_in_stock)
        self.assertEqual(item.qty, Decimal('9'))


class TestRelationshipService(DatabaseTestCase):

    def test_find_parent_ids(self):
        service = RelationshipService(self.session)

        self.assertEqual(sorted(service.find_parent_ids(7)), [50, 51])
        self.assertEqual(service.find_parent_ids(8), [50])

    def test_product_without_parents(self):
        self.assertEqual(RelationshipService(self.session).find_parent_ids(9), [])


class TestWebsiteService(DatabaseTestCase):

    def test_insert_ignore_is_idempotent(self):
        service = WebsiteService(self.session)

        self.assertTrue(service.insert_ignore(7, 1))
        self.assertFalse(service.insert_ignore(7, 1))

        rows = self.session.query(ProductWebsite).filter(ProductWebsite.product_id == 7).all()
        self.assertEqual([(row.product_id, row.website_id) for row in rows], [(7, 1)])

    def test_unsupported_dialect(self):
        session = MagicMock()
        session.get_bind.return_value.dialect.name = 'oracle'

        with self.assertRaises(StorageError) as ctx:
            WebsiteService(session).insert_ignore(7, 1)

        self.assertIn('oracle', ctx.exception.message)
        session.execute.assert_not_called()


class TestAttributeService(DatabaseTestCase):

    def value_of(self, model, entity_id, attribute_id):
        self.session.expire_all()
        rows = self.session.query(model).filter(
            model.entity_id == entity_id,
            model.attribute_id == attribute_id
        ).all()
        self.assertLessEqual(len(rows), 1)
        return rows[0].value if rows else None

    def test_varchar_insert_then_update(self):
        service = AttributeService(self.session)
        attribute = service.resolve_attribute('name')

        attribute.update_value(7, 'Blue Shirt')
        self.assertEqual(self.value_of(ProductEntityVarchar, 7, 71), 'Blue Shirt')

        attribute.update_value(7, 'Red Shirt')
        self.assertEqual(self.value_of(ProductEntityVarchar, 7, 71), 'Red Shirt')

    def test_typed_values(self):
        service = AttributeService(self.session)

        service.resolve_attribute('description').update_value(7, 'Long text')
        service.resolve_attribute('price').update_value(7, '19.99')
        service.resolve_attribute('status').update_value(7, '1')
        service.resolve_attribute('news_from_date').update_value(7, '2024-03-01T10:00:00')

        self.assertEqual(self.value_of(ProductEntityText, 7, 72), 'Long text')
        self.assertEqual(self.value_of(ProductEntityDecimal, 7, 75), Decimal('19.99'))
        self.assertEqual(self.value_of(ProductEntityInt, 7, 96), 1)
        self.assertEqual(self.value_of(ProductEntityDatetime, 7, 93), datetime(2024, 3, 1, 10, 0))

    def test_invalid_value_is_rejected(self):
        service = AttributeService(self.session)

        with self.assertRaises(InvalidValueError):
            service.resolve_attribute('status').update_value(7, 'enabled')
        with self.assertRaises(InvalidValueError):
            service.resolve_attribute('price').update_value(7, 'cheap')

        self.assertIsNone(self.value_of(ProductEntityInt, 7, 96))

    def test_static_attribute_cannot_be_updated(self):
        attribute = AttributeService(self.session).resolve_attribute('type_id')

        with self.assertRaises(InvalidValueError):
            attribute.update_value(7, 'bundle')

    def test_unknown_attribute(self):
        with self.assertRaises(NotFoundError):
            AttributeService(self.session).resolve_attribute('colour')

    def test_resolved_attributes_are_cached(self):
        service = AttributeService(self.session)

        self.assertIs(service.resolve_attribute('name'), service.resolve_attribute('name'))

    def test_store_scope(self):
        AttributeService(self.session, store_id=1).resolve_attribute('name').update_value(7, 'Store name')

        self.session.expire_all()
        row = self.session.query(ProductEntityVarchar).filter(ProductEntityVarchar.entity_id == 7).one()
        self.assertEqual(row.store_id, 1)


class TestReindexQueue(unittest.TestCase):

    def test_ids_are_unique_and_ordered(self):
        queue = ReindexQueue()

        for product_id in (7, 50, 7, 51, 50):
            queue.add_product(product_id)

        self.assertEqual(queue.product_ids, [7, 50, 51])
        self.assertEqual(len(queue), 3)
        self.assertIn(51, queue)


class TestErrorCollector(unittest.TestCase):

    def test_collects_messages(self):
        errors = ErrorCollector()
        self.assertFalse(errors.has_errors)

        errors.add_error('SKU A: field "qty" skipped: bad')
        errors.add_error('SKU B skipped: Product not found')

        self.assertTrue(errors.has_errors)
        self.assertEqual(len(errors), 2)
        self.assertEqual(errors.errors[1], 'SKU B skipped: Product not found')


if __name__ == '__main__':
    unittest.main()
