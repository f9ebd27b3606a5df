"""
Unit tests for weekly bucketing, the WMA forecaster and MAPE back-testing.
"""
import unittest
from datetime import date, datetime

from fashion_inventory.core.demand_forecast import (
    group_sales_by_week,
    weekly_demand_series,
    calculate_wma,
    calculate_mape,
    backtest_wma,
    calculate_backtest_mape,
    rate_mape,
    forecast_by_week
)
from fashion_inventory.core.metrics import SaleRecord
from fashion_inventory.utils.date_utils import get_week_start


def make_sale(day, quantity, sale_id='s'):
    return SaleRecord(id=sale_id, product_id='p1', quantity=quantity, date=day, unit_price=100.0)


class TestWeekBucketing(unittest.TestCase):
    """Test cases for grouping sales into calendar weeks."""

    def test_week_start_is_monday(self):
        self.assertEqual(get_week_start(date(2025, 8, 4)), date(2025, 8, 4))
        self.assertEqual(get_week_start(date(2025, 8, 7)), date(2025, 8, 4))

    def test_sunday_belongs_to_previous_monday(self):
        """A Sunday is six days after the Monday that starts its week."""
        self.assertEqual(get_week_start(date(2025, 8, 10)), date(2025, 8, 4))
        self.assertEqual(get_week_start(datetime(2026, 1, 4, 23, 30)), date(2025, 12, 29))

    def test_quantities_summed_per_week(self):
        sales = [
            make_sale(datetime(2025, 8, 4, 9), 3),
            make_sale(datetime(2025, 8, 10, 18), 4),
            make_sale(datetime(2025, 8, 11, 10), 5),
        ]

        self.assertEqual(
            group_sales_by_week(sales),
            [(date(2025, 8, 4), 7), (date(2025, 8, 11), 5)]
        )

    def test_weeks_ordered_earliest_first(self):
        sales = [
            make_sale(datetime(2025, 8, 25), 1),
            make_sale(datetime(2025, 8, 4), 2),
            make_sale(datetime(2025, 8, 18), 3),
        ]

        self.assertEqual(weekly_demand_series(sales), [2, 3, 1])

    def test_empty_weeks_not_filled(self):
        """Gaps between weeks with sales do not produce zero entries."""
        sales = [
            make_sale(datetime(2025, 8, 4), 6),
            make_sale(datetime(2025, 9, 1), 9),
        ]

        self.assertEqual(weekly_demand_series(sales), [6, 9])

    def test_no_sales(self):
        self.assertEqual(weekly_demand_series([]), [])


class TestWMAForecast(unittest.TestCase):
    """Test cases for the weighted moving average forecast."""

    def test_short_history_falls_back_to_latest_value(self):
        self.assertEqual(calculate_wma([]), 0.0)
        self.assertEqual(calculate_wma([7]), 7.0)
        self.assertEqual(calculate_wma([4, 9]), 9.0)

    def test_weights_favor_most_recent_week(self):
        # (5*1 + 10*2 + 15*3) / 6
        self.assertEqual(calculate_wma([5, 10, 15]), 11.67)

    def test_only_trailing_window_used(self):
        self.assertEqual(calculate_wma([1, 5, 10, 15]), 11.67)
        self.assertEqual(calculate_wma([100, 5, 10, 15]), 11.67)

    def test_result_rounded_to_cents(self):
        # (1 + 2 + 3*2) / 6 = 1.5
        self.assertEqual(calculate_wma([1, 1, 2]), 1.5)
        # (10 + 24 + 42) / 6 = 12.666...
        self.assertEqual(calculate_wma([10, 12, 14]), 12.67)

    def test_constant_series(self):
        self.assertEqual(calculate_wma([8, 8, 8, 8]), 8.0)


class TestMAPECalculation(unittest.TestCase):
    """Test cases for MAPE calculation and back-testing."""

    def test_zero_actuals_excluded(self):
        self.assertEqual(calculate_mape([0, 10], [5, 8]), 20.0)

    def test_basic_mape(self):
        actuals = [100, 120, 90, 110]
        forecasts = [100, 100, 100, 100]

        # (0 + 20/120 + 10/90 + 10/110) / 4 * 100
        self.assertAlmostEqual(calculate_mape(actuals, forecasts), 9.22, places=2)

    def test_no_valid_periods(self):
        self.assertEqual(calculate_mape([], []), 0.0)
        self.assertEqual(calculate_mape([0, 0], [3, 4]), 0.0)

    def test_perfect_forecast(self):
        self.assertEqual(calculate_mape([5, 6, 7], [5, 6, 7]), 0.0)

    def test_backtest_alignment(self):
        actual, forecast = backtest_wma([10, 12, 14, 20, 18])

        self.assertEqual(actual, [20, 18])
        self.assertEqual(forecast, [calculate_wma([10, 12, 14]), calculate_wma([12, 14, 20])])

    def test_backtest_mape_requires_four_weeks(self):
        self.assertIsNone(calculate_backtest_mape([]))
        self.assertIsNone(calculate_backtest_mape([10, 12, 14]))

    def test_backtest_mape(self):
        # forecast 12.67 against actual 20
        self.assertAlmostEqual(calculate_backtest_mape([10, 12, 14, 20]), 36.65, places=2)

    def test_backtest_mape_with_zero_actual(self):
        self.assertEqual(calculate_backtest_mape([10, 12, 14, 0]), 0.0)


class TestForecastReporting(unittest.TestCase):
    """Test cases for MAPE ratings and the per-week forecast table."""

    def test_rate_mape(self):
        self.assertIsNone(rate_mape(None))
        self.assertEqual(rate_mape(0.0), 'excellent')
        self.assertEqual(rate_mape(9.99), 'excellent')
        self.assertEqual(rate_mape(10.0), 'good')
        self.assertEqual(rate_mape(25.0), 'fair')
        self.assertEqual(rate_mape(50.0), 'poor')

    def test_forecast_by_week(self):
        weeks = [
            (date(2025, 8, 4), 10),
            (date(2025, 8, 11), 12),
            (date(2025, 8, 18), 14),
            (date(2025, 8, 25), 20),
            (date(2025, 9, 1), 16),
        ]

        rows = forecast_by_week(weeks)

        self.assertEqual([r[2] for r in rows[:3]], [None, None, None])
        self.assertEqual(rows[3], (date(2025, 8, 25), 20, 12.67))
        self.assertEqual(rows[4][2], calculate_wma([10, 12, 14, 20]))


if __name__ == '__main__':
    unittest.main()
