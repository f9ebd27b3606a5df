# fashion_inventory/core/safety_stock.py
from typing import Dict, List

from fashion_inventory.utils.math_utils import ceil_int, max_value, mean_value

def calculate_demand_stats(weekly_sales: List[float]) -> Dict[str, float]:
    """Get maximum and average weekly demand.

    Args:
        weekly_sales: Weekly demand values

    Returns:
        Dictionary with 'd_max' and 'd_avg', both 0.0 for an empty series
    """
    return {
        'd_max': max_value(weekly_sales),
        'd_avg': mean_value(weekly_sales)
    }

def calculate_safety_stock(weekly_sales: List[float], lead_time_weeks: float) -> int:
    """Calculate safety stock.

    SS = ceil((D_max - D_avg) * LT)

    Args:
        weekly_sales: Weekly demand values
        lead_time_weeks: Lead time in weeks

    Returns:
        Safety stock in units
    """
    if not weekly_sales:
        return 0

    stats = calculate_demand_stats(weekly_sales)
    return ceil_int((stats['d_max'] - stats['d_avg']) * lead_time_weeks)

def calculate_reorder_point(
    weekly_sales: List[float],
    lead_time_weeks: float,
    safety_stock: int
) -> int:
    """Calculate the reorder point.

    ROP = ceil(D_avg * LT + SS)

    Args:
        weekly_sales: Weekly demand values
        lead_time_weeks: Lead time in weeks
        safety_stock: Safety stock in units

    Returns:
        Reorder point in units; equal to the safety stock for an empty series
    """
    if not weekly_sales:
        return safety_stock

    d_avg = mean_value(weekly_sales)
    return ceil_int(d_avg * lead_time_weeks + safety_stock)
