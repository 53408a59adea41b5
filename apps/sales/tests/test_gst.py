"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Unit tests for the GST calculator and GSTIN helpers
-------------------------------------------------------------------------
"""
from decimal import Decimal

from django.test import SimpleTestCase

from apps.sales.services_gst import (
    GSTCalculator,
    state_from_gstin,
    validate_gstin,
)


class GSTCalculatorTest(SimpleTestCase):

    def test_intra_state_split(self):
        result = GSTCalculator.calculate_gst(Decimal('1000'), 18, is_igst=False)
        self.assertEqual(result['cgst'], Decimal('90.00'))
        self.assertEqual(result['sgst'], Decimal('90.00'))
        self.assertEqual(result['igst'], Decimal('0.00'))
        self.assertEqual(result['totalAmount'], Decimal('1180.00'))
        self.assertEqual(result['gstType'], 'CGST+SGST')

    def test_inter_state_uses_igst(self):
        result = GSTCalculator.calculate_gst('1000', '12', is_igst=True)
        self.assertEqual(result['igst'], Decimal('120.00'))
        self.assertEqual(result['cgst'], Decimal('0.00'))
        self.assertEqual(result['gstType'], 'IGST')

    def test_odd_paisa_goes_to_sgst(self):
        result = GSTCalculator.calculate_gst('0.10', 5)
        # 0.005 rounds up to 0.01; halves must still add up
        self.assertEqual(result['cgst'] + result['sgst'], result['totalGST'])

    def test_inter_state_requires_both_states(self):
        self.assertTrue(GSTCalculator.is_inter_state('Karnataka', 'Maharashtra'))
        self.assertFalse(GSTCalculator.is_inter_state('maharashtra', 'Maharashtra'))
        self.assertFalse(GSTCalculator.is_inter_state('', 'Maharashtra'))

    def test_allowed_rates(self):
        self.assertTrue(GSTCalculator.is_valid_rate(28))
        self.assertFalse(GSTCalculator.is_valid_rate(10))


class GSTINTest(SimpleTestCase):

    def test_validate_gstin(self):
        self.assertTrue(validate_gstin('27aapfu0939f1zv'))
        self.assertTrue(validate_gstin(''))
        self.assertFalse(validate_gstin('27AAPFU0939F1XV'))

    def test_state_from_gstin(self):
        self.assertEqual(state_from_gstin('29AAPFU0939F1ZV'), 'Karnataka')
        self.assertIsNone(state_from_gstin('99AAPFU0939F1ZV'))
