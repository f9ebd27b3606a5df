from .demand_forecast import (
    WMA_WEIGHTS, group_sales_by_week, weekly_demand_series,
    calculate_wma, calculate_mape, backtest_wma, calculate_backtest_mape,
    rate_mape, forecast_by_week
)
from .safety_stock import calculate_demand_stats, calculate_safety_stock, calculate_reorder_point
from .stock_status import StockStatus, classify_stock_status

__all__ = [
    'WMA_WEIGHTS',
    'group_sales_by_week',
    'weekly_demand_series',
    'calculate_wma',
    'calculate_mape',
    'backtest_wma',
    'calculate_backtest_mape',
    'rate_mape',
    'forecast_by_week',
    'calculate_demand_stats',
    'calculate_safety_stock',
    'calculate_reorder_point',
    'StockStatus',
    'classify_stock_status'
]
