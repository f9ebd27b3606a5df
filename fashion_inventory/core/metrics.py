# fashion_inventory/core/metrics.py
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from fashion_inventory.core.demand_forecast import rate_mape
from fashion_inventory.core.stock_status import StockStatus
from fashion_inventory.models import ProductCategory
from fashion_inventory.utils.date_utils import format_iso


@dataclass(frozen=True)
class SaleRecord:
    """Detached snapshot of a sales transaction."""
    id: str
    product_id: str
    quantity: int
    date: datetime
    unit_price: float

    @classmethod
    def from_model(cls, sale) -> 'SaleRecord':
        return cls(
            id=sale.id,
            product_id=sale.product_id,
            quantity=sale.quantity,
            date=sale.date,
            unit_price=sale.unit_price
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'product_id': self.product_id,
            'quantity': self.quantity,
            'date': format_iso(self.date),
            'unit_price': self.unit_price
        }


@dataclass
class ProductWithMetrics:
    """A product together with its derived forecasting and stock metrics."""
    id: str
    sku: str
    name: str
    category: ProductCategory
    price: float
    current_stock: int
    lead_time: float
    created_at: datetime
    sales_history: List[SaleRecord] = field(default_factory=list)
    weekly_sales: List[int] = field(default_factory=list)
    wma_forecast: float = 0.0
    safety_stock: int = 0
    reorder_point: int = 0
    mape: Optional[float] = None
    status: StockStatus = StockStatus.SAFE
    d_max: float = 0.0
    d_avg: float = 0.0
    lead_time_weeks: float = 0.0

    @property
    def mape_rating(self) -> Optional[str]:
        return rate_mape(self.mape)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'sku': self.sku,
            'name': self.name,
            'category': self.category.value,
            'price': self.price,
            'current_stock': self.current_stock,
            'lead_time': self.lead_time,
            'created_at': format_iso(self.created_at),
            'sales_history': [sale.to_dict() for sale in self.sales_history],
            'weekly_sales': list(self.weekly_sales),
            'wma_forecast': self.wma_forecast,
            'safety_stock': self.safety_stock,
            'reorder_point': self.reorder_point,
            'mape': self.mape,
            'mape_rating': self.mape_rating,
            'status': self.status.value,
            'd_max': self.d_max,
            'd_avg': self.d_avg,
            'lead_time_weeks': self.lead_time_weeks
        }


@dataclass
class DashboardStats:
    """Fleet-wide aggregate over all products with metrics."""
    total_products: int = 0
    total_skus: int = 0
    low_stock_count: int = 0
    critical_stock_count: int = 0
    total_transactions: int = 0
    average_mape: float = 0.0

    def to_dict(self) -> dict:
        return {
            'total_products': self.total_products,
            'total_skus': self.total_skus,
            'low_stock_count': self.low_stock_count,
            'critical_stock_count': self.critical_stock_count,
            'total_transactions': self.total_transactions,
            'average_mape': self.average_mape
        }


@dataclass(frozen=True)
class WeeklyForecastRow:
    week_start: date
    actual: int
    forecast: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            'week_start': format_iso(self.week_start),
            'actual': self.actual,
            'forecast': self.forecast
        }


@dataclass(frozen=True)
class ProductSalesSummary:
    product_id: str
    sku: str
    name: str
    total_sold: int
    total_revenue: float

    def to_dict(self) -> dict:
        return {
            'product_id': self.product_id,
            'sku': self.sku,
            'name': self.name,
            'total_sold': self.total_sold,
            'total_revenue': self.total_revenue
        }
