"""
Tests for the stock quantity rules.
"""
import unittest
from decimal import Decimal

from catalog_sync.core.stock import normalize_quantity, is_in_stock, is_website_id
from catalog_sync.exceptions import InvalidValueError


class TestNormalizeQuantity(unittest.TestCase):

    def test_positive_quantities_are_kept(self):
        self.assertEqual(normalize_quantity(5), Decimal('5'))
        self.assertEqual(normalize_quantity(2.5), Decimal('2.5'))
        self.assertEqual(normalize_quantity(Decimal('0.0001')), Decimal('0.0001'))

    def test_zero_and_negative_become_zero(self):
        for value in (0, 0.0, -1, -3.5, '-12'):
            with self.subTest(value=value):
                self.assertEqual(normalize_quantity(value), Decimal(0))

    def test_numeric_strings_are_accepted(self):
        self.assertEqual(normalize_quantity('10'), Decimal('10'))
        self.assertEqual(normalize_quantity(' 4.25 '), Decimal('4.25'))
        self.assertEqual(normalize_quantity('1e2'), Decimal('100'))

    def test_rounded_to_storage_scale(self):
        self.assertEqual(normalize_quantity('1.23456'), Decimal('1.2346'))
        self.assertEqual(normalize_quantity(2.00004), Decimal('2.0000'))

    def test_quantity_below_storage_scale_is_zero(self):
        qty = normalize_quantity('0.00001')

        self.assertEqual(qty, Decimal(0))
        self.assertFalse(is_in_stock(qty))

    def test_smallest_storable_quantity_is_in_stock(self):
        qty = normalize_quantity('0.00005')

        self.assertEqual(qty, Decimal('0.0001'))
        self.assertTrue(is_in_stock(qty))

    def test_out_of_range_quantity_is_rejected(self):
        with self.assertRaises(InvalidValueError):
            normalize_quantity('1e30')

    def test_non_numeric_values_are_rejected(self):
        for value in ('abc', '', None, True, [1], {'qty': 1}, 'nan', float('inf')):
            with self.subTest(value=value):
                with self.assertRaises(InvalidValueError) as ctx:
                    normalize_quantity(value)
                self.assertIn('Stock quantity cannot be set to non-numeric value', ctx.exception.message)


class TestIsInStock(unittest.TestCase):

    def test_strictly_positive_is_in_stock(self):
        self.assertTrue(is_in_stock(Decimal('0.5')))
        self.assertTrue(is_in_stock(3))

    def test_zero_is_out_of_stock(self):
        self.assertFalse(is_in_stock(0))
        self.assertFalse(is_in_stock(Decimal(0)))


class TestIsWebsiteId(unittest.TestCase):

    def test_integers(self):
        self.assertTrue(is_website_id(1))
        self.assertTrue(is_website_id(0))

    def test_non_integers(self):
        for value in ('1', 1.0, True, None):
            with self.subTest(value=value):
                self.assertFalse(is_website_id(value))


if __name__ == '__main__':
    unittest.main()
