# fashion_inventory/core/demand_forecast.py
from collections import defaultdict
from datetime import date
from typing import Iterable, List, Optional, Tuple

from fashion_inventory.utils.date_utils import get_week_start
from fashion_inventory.utils.math_utils import round_half_up, weighted_average

# Oldest to newest week of the trailing window
WMA_WEIGHTS = (1, 2, 3)

MAPE_RATINGS = (
    (10.0, 'excellent'),
    (20.0, 'good'),
    (50.0, 'fair'),
)

def group_sales_by_week(transactions: Iterable) -> List[Tuple[date, int]]:
    """Group sales transactions into calendar weeks.

    Args:
        transactions: Objects with ``date`` and ``quantity`` attributes

    Returns:
        List of (week start, total quantity) tuples, earliest week first.
        Weeks without sales are not included.
    """
    grouped = defaultdict(int)
    for sale in transactions:
        grouped[get_week_start(sale.date)] += sale.quantity

    return sorted(grouped.items())

def weekly_demand_series(transactions: Iterable) -> List[int]:
    """Get the ordered weekly quantity series for a set of transactions.

    Args:
        transactions: Objects with ``date`` and ``quantity`` attributes

    Returns:
        List of weekly totals, earliest week first
    """
    return [quantity for _, quantity in group_sales_by_week(transactions)]

def calculate_wma(weekly_sales: List[float]) -> float:
    """Calculate the one-step-ahead weighted moving average forecast.

    With fewer weeks than weights the forecast is the latest week's value
    (0.0 for no history). Otherwise the trailing window is weighted 1, 2, 3
    from oldest to newest.

    Args:
        weekly_sales: Weekly demand values, earliest first

    Returns:
        Forecast for next week, rounded to 2 decimal places
    """
    window = len(WMA_WEIGHTS)

    if len(weekly_sales) < window:
        return float(weekly_sales[-1]) if weekly_sales else 0.0

    recent = list(weekly_sales[-window:])
    return round_half_up(weighted_average(recent, WMA_WEIGHTS), 2)

def calculate_mape(actual: List[float], forecast: List[float]) -> float:
    """Calculate Mean Absolute Percentage Error.

    Periods with zero actual demand are left out of both the error sum and
    the period count.

    Args:
        actual: Actual demand values
        forecast: Forecast values aligned with ``actual``

    Returns:
        MAPE as a percentage rounded to 2 decimal places, 0.0 when no
        period has positive demand
    """
    if not actual or not forecast:
        return 0.0

    total_error = 0.0
    count = 0

    for actual_value, forecast_value in zip(actual, forecast):
        if actual_value > 0:
            total_error += abs((actual_value - forecast_value) / actual_value)
            count += 1

    if count == 0:
        return 0.0

    return round_half_up(total_error / count * 100.0, 2)

def backtest_wma(weekly_sales: List[float]) -> Tuple[List[float], List[float]]:
    """Back-test the WMA forecaster against history.

    Each week from the fourth onwards is forecast from the three weeks
    immediately before it.

    Args:
        weekly_sales: Weekly demand values, earliest first

    Returns:
        Tuple of (actual values, forecast values), aligned by index
    """
    window = len(WMA_WEIGHTS)
    actual = list(weekly_sales[window:])
    forecast = [
        calculate_wma(weekly_sales[i - window:i])
        for i in range(window, len(weekly_sales))
    ]
    return actual, forecast

def calculate_backtest_mape(weekly_sales: List[float], min_weeks: int = 4) -> Optional[float]:
    """Calculate MAPE of the WMA forecaster over a weekly series.

    Args:
        weekly_sales: Weekly demand values, earliest first
        min_weeks: Minimum number of weeks required

    Returns:
        MAPE as a percentage, or None if there is not enough history
    """
    if len(weekly_sales) < max(min_weeks, len(WMA_WEIGHTS) + 1):
        return None

    actual, forecast = backtest_wma(weekly_sales)
    return calculate_mape(actual, forecast)

def rate_mape(mape: Optional[float]) -> Optional[str]:
    """Classify forecast accuracy.

    Args:
        mape: MAPE as a percentage, or None

    Returns:
        'excellent', 'good', 'fair' or 'poor', or None if MAPE is undefined
    """
    if mape is None:
        return None

    for limit, rating in MAPE_RATINGS:
        if mape < limit:
            return rating

    return 'poor'

def forecast_by_week(weekly_sales: List[Tuple[date, int]]) -> List[Tuple[date, int, Optional[float]]]:
    """Pair every week with the forecast made from all weeks before it.

    Args:
        weekly_sales: (week start, quantity) tuples, earliest first

    Returns:
        List of (week start, actual, forecast) tuples; forecast is None
        until enough earlier weeks exist
    """
    rows = []
    history = []

    for week_start, quantity in weekly_sales:
        forecast = calculate_wma(history) if len(history) >= len(WMA_WEIGHTS) else None
        rows.append((week_start, quantity, forecast))
        history.append(quantity)

    return rows
