import enum

class StockStatus(enum.Enum):
    """Stock level relative to the reorder point and safety stock."""
    SAFE = 'safe'
    WARNING = 'warning'
    CRITICAL = 'critical'

    def __str__(self):
        return self.value

def classify_stock_status(current_stock: int, reorder_point: int, safety_stock: int) -> StockStatus:
    """Classify current stock.

    Args:
        current_stock: Units on hand
        reorder_point: Reorder point in units
        safety_stock: Safety stock in units

    Returns:
        CRITICAL at or below the reorder point, WARNING at or below the
        reorder point plus safety stock, SAFE otherwise
    """
    if current_stock <= reorder_point:
        return StockStatus.CRITICAL
    if current_stock <= reorder_point + safety_stock:
        return StockStatus.WARNING
    return StockStatus.SAFE
