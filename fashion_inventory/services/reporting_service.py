# fashion_inventory/services/reporting_service.py
from typing import List, Dict, Optional
import csv
import io
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from fashion_inventory.models import Product, SalesTransaction
from fashion_inventory.core.demand_forecast import group_sales_by_week, forecast_by_week
from fashion_inventory.core.metrics import WeeklyForecastRow, ProductSalesSummary
from fashion_inventory.core.stock_status import StockStatus
from fashion_inventory.exceptions import ReportingError
from fashion_inventory.services.inventory_store import InventoryStore

logger = logging.getLogger(__name__)

class ReportingService:
    """Service for generating reports over the inventory store."""

    def __init__(self, session: Session, store: Optional[InventoryStore] = None):
        """Initialize the reporting service.

        Args:
            session: Database session
            store: Inventory store sharing the session, created if not given
        """
        self.session = session
        self.store = store or InventoryStore(session)

    def weekly_forecast_table(self, product_id: str) -> List[WeeklyForecastRow]:
        """Weekly actual demand next to the forecast made before each week.

        Args:
            product_id: Product ID

        Returns:
            One row per week with sales, earliest first
        """
        if self.session.get(Product, product_id) is None:
            raise ReportingError(f"Product with ID {product_id} not found")

        sales = (
            self.session.query(SalesTransaction)
            .filter(SalesTransaction.product_id == product_id)
            .all()
        )

        return [
            WeeklyForecastRow(week_start=week_start, actual=actual, forecast=forecast)
            for week_start, actual, forecast in forecast_by_week(group_sales_by_week(sales))
        ]

    def sales_summary(self) -> List[ProductSalesSummary]:
        """Total units sold and revenue per product.

        Revenue uses the unit price captured on each transaction.
        """
        totals = dict(
            (row.product_id, (row.total_sold, row.total_revenue))
            for row in self.session.query(
                SalesTransaction.product_id,
                func.sum(SalesTransaction.quantity).label('total_sold'),
                func.sum(SalesTransaction.quantity * SalesTransaction.unit_price).label('total_revenue')
            ).group_by(SalesTransaction.product_id)
        )

        summaries = []
        for product in self.store.list_products():
            total_sold, total_revenue = totals.get(product.id, (0, 0.0))
            summaries.append(ProductSalesSummary(
                product_id=product.id,
                sku=product.sku,
                name=product.name,
                total_sold=int(total_sold or 0),
                total_revenue=float(total_revenue or 0.0)
            ))

        return summaries

    def notification_report(self) -> Dict:
        """Group products by stock status for restock notifications.

        Returns:
            Dictionary with critical and warning product lists and the
            number of safe products
        """
        metrics = self.store.get_products_with_metrics()

        critical = [m for m in metrics if m.status == StockStatus.CRITICAL]
        warning = [m for m in metrics if m.status == StockStatus.WARNING]
        safe_count = sum(1 for m in metrics if m.status == StockStatus.SAFE)

        if critical:
            logger.info(f"{len(critical)} products at or below reorder point")

        return {
            'critical': [self._notification_entry(m) for m in critical],
            'warning': [self._notification_entry(m) for m in warning],
            'safe_count': safe_count
        }

    def export_products_csv(self) -> str:
        """Export products with metrics as CSV text."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow([
            'id', 'sku', 'name', 'category', 'current_stock', 'lead_time',
            'wma_forecast', 'safety_stock', 'reorder_point', 'mape', 'status'
        ])

        for m in self.store.get_products_with_metrics():
            writer.writerow([
                m.id, m.sku, m.name, m.category.value, m.current_stock, m.lead_time,
                m.wma_forecast, m.safety_stock, m.reorder_point,
                '' if m.mape is None else m.mape, m.status.value
            ])

        return output.getvalue()

    @staticmethod
    def _notification_entry(metrics) -> Dict:
        return {
            'id': metrics.id,
            'sku': metrics.sku,
            'name': metrics.name,
            'current_stock': metrics.current_stock,
            'reorder_point': metrics.reorder_point,
            'safety_stock': metrics.safety_stock,
            'wma_forecast': metrics.wma_forecast,
            'status': metrics.status.value
        }
