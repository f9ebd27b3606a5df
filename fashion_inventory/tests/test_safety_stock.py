"""
Unit tests for safety stock, reorder point and stock status classification.
"""
import unittest

from fashion_inventory.core.safety_stock import (
    calculate_demand_stats,
    calculate_safety_stock,
    calculate_reorder_point
)
from fashion_inventory.core.stock_status import StockStatus, classify_stock_status
from fashion_inventory.exceptions import CalculationError
from fashion_inventory.utils.math_utils import round_half_up, weighted_average


class TestSafetyStock(unittest.TestCase):
    """Test cases for safety stock and reorder point calculation."""

    def test_empty_series(self):
        safety_stock = calculate_safety_stock([], 1.0)
        self.assertEqual(safety_stock, 0)
        self.assertEqual(calculate_reorder_point([], 1.0, safety_stock), 0)

    def test_empty_series_reorder_point_equals_safety_stock(self):
        self.assertEqual(calculate_reorder_point([], 2.0, 4), 4)

    def test_worked_example(self):
        weekly = [10, 12, 14, 20]
        lead_time_weeks = 7 / 7

        stats = calculate_demand_stats(weekly)
        self.assertEqual(stats['d_max'], 20.0)
        self.assertEqual(stats['d_avg'], 14.0)

        safety_stock = calculate_safety_stock(weekly, lead_time_weeks)
        self.assertEqual(safety_stock, 6)
        self.assertEqual(calculate_reorder_point(weekly, lead_time_weeks, safety_stock), 20)

    def test_fractional_results_rounded_up(self):
        weekly = [10, 11]
        lead_time_weeks = 3.5 / 7

        # (11 - 10.5) * 0.5 = 0.25
        safety_stock = calculate_safety_stock(weekly, lead_time_weeks)
        self.assertEqual(safety_stock, 1)
        # 10.5 * 0.5 + 1 = 6.25
        self.assertEqual(calculate_reorder_point(weekly, lead_time_weeks, safety_stock), 7)

    def test_constant_demand_has_no_safety_stock(self):
        self.assertEqual(calculate_safety_stock([9, 9, 9], 2.0), 0)

    def test_zero_lead_time(self):
        self.assertEqual(calculate_safety_stock([5, 25], 0.0), 0)
        self.assertEqual(calculate_reorder_point([5, 25], 0.0, 0), 0)

    def test_results_are_integers(self):
        self.assertIsInstance(calculate_safety_stock([3, 8, 4], 1.5), int)
        self.assertIsInstance(calculate_reorder_point([3, 8, 4], 1.5, 5), int)


class TestStockStatus(unittest.TestCase):
    """Test cases for stock status thresholds."""

    def test_at_reorder_point_is_critical(self):
        self.assertEqual(classify_stock_status(20, 20, 6), StockStatus.CRITICAL)

    def test_below_reorder_point_is_critical(self):
        self.assertEqual(classify_stock_status(0, 20, 6), StockStatus.CRITICAL)

    def test_at_buffer_limit_is_warning(self):
        self.assertEqual(classify_stock_status(26, 20, 6), StockStatus.WARNING)
        self.assertEqual(classify_stock_status(21, 20, 6), StockStatus.WARNING)

    def test_above_buffer_is_safe(self):
        self.assertEqual(classify_stock_status(27, 20, 6), StockStatus.SAFE)

    def test_no_history_thresholds(self):
        self.assertEqual(classify_stock_status(0, 0, 0), StockStatus.CRITICAL)
        self.assertEqual(classify_stock_status(1, 0, 0), StockStatus.SAFE)

    def test_status_string_value(self):
        self.assertEqual(str(StockStatus.WARNING), 'warning')


class TestMathUtils(unittest.TestCase):
    """Test cases for rounding and averaging helpers."""

    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.675, 2), 2.68)
        self.assertEqual(round_half_up(0.125, 2), 0.13)
        self.assertEqual(round_half_up(11.666666, 2), 11.67)

    def test_weighted_average_length_mismatch(self):
        with self.assertRaises(CalculationError):
            weighted_average([1, 2], [1, 2, 3])

    def test_weighted_average_zero_weights(self):
        self.assertEqual(weighted_average([2, 4], [0, 0]), 3.0)


if __name__ == '__main__':
    unittest.main()
