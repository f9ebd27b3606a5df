# fashion_inventory/services/inventory_store.py
from collections import defaultdict
from datetime import date, datetime
from typing import List, Optional, Union, Any
import logging

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fashion_inventory.config import config
from fashion_inventory.models import Product, SalesTransaction, ProductCategory
from fashion_inventory.core.demand_forecast import (
    weekly_demand_series, calculate_wma, calculate_backtest_mape
)
from fashion_inventory.core.safety_stock import (
    calculate_demand_stats, calculate_safety_stock, calculate_reorder_point
)
from fashion_inventory.core.stock_status import StockStatus, classify_stock_status
from fashion_inventory.core.metrics import ProductWithMetrics, DashboardStats, SaleRecord
from fashion_inventory.exceptions import DatabaseError, NotFoundError, ProductError, ValidationError
from fashion_inventory.utils.date_utils import convert_to_datetime, days_to_weeks
from fashion_inventory.utils.math_utils import round_half_up

logger = logging.getLogger(__name__)

ProductRef = Union[Product, str]

class InventoryStore:
    """Owns products and sales transactions and derives their metrics.

    Metrics are recomputed from the session on every read, so each read
    reflects the most recently committed mutation.
    """

    UPDATABLE_FIELDS = ('sku', 'name', 'category', 'price', 'current_stock', 'lead_time')

    def __init__(
        self,
        session: Session,
        days_per_week: Optional[int] = None,
        mape_min_weeks: Optional[int] = None
    ):
        """Initialize the inventory store.

        Args:
            session: Database session
            days_per_week: Days per demand bucket, defaults to configuration
            mape_min_weeks: Weeks of history needed for MAPE, defaults to configuration
        """
        self.session = session
        rules = config.business_rules
        self.days_per_week = days_per_week or rules['days_per_week']
        self.mape_min_weeks = mape_min_weeks or rules['mape_min_weeks']
        self.default_lead_time = rules['default_lead_time']

    def _commit(self, action: str):
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error while trying to {action}: {str(e)}")
            raise DatabaseError(f"Failed to {action}", details={'error': str(e)})

    # Mutations

    def add_product(
        self,
        sku: str,
        name: str,
        category: Union[ProductCategory, str],
        price: float,
        current_stock: int,
        lead_time: Optional[float] = None
    ) -> Product:
        """Add a new product.

        SKUs are not checked for uniqueness.

        Args:
            sku: Stock keeping unit code
            name: Display name
            category: Product category or its string value
            price: Unit price
            current_stock: Units on hand
            lead_time: Replenishment lead time in days

        Returns:
            The created product
        """
        product = Product(
            sku=sku,
            name=name,
            category=self._coerce_category(category),
            price=price,
            current_stock=current_stock,
            lead_time=self.default_lead_time if lead_time is None else lead_time,
            created_at=datetime.now()
        )
        self.session.add(product)
        self._commit(f"add product {sku}")

        logger.info(f"Added product {product.sku} ({product.id}) with stock {product.current_stock}")
        return product

    def update_product(self, product_id: str, **changes: Any) -> Optional[Product]:
        """Merge a partial set of field changes into a product.

        Args:
            product_id: Product ID
            **changes: New values keyed by field name

        Returns:
            The updated product, or None if no product has this ID
        """
        product = self.session.get(Product, product_id)
        if product is None:
            logger.debug(f"Update ignored, product {product_id} not found")
            return None

        invalid = [key for key in changes if key not in self.UPDATABLE_FIELDS]
        if invalid:
            raise ValidationError(
                f"Cannot update product fields: {', '.join(sorted(invalid))}",
                details={'allowed': list(self.UPDATABLE_FIELDS)}
            )

        if 'category' in changes:
            changes['category'] = self._coerce_category(changes['category'])

        for key, value in changes.items():
            setattr(product, key, value)

        self._commit(f"update product {product_id}")

        logger.info(f"Updated product {product_id}: {', '.join(sorted(changes))}")
        return product

    def delete_product(self, product_id: str) -> bool:
        """Delete a product together with all of its sales transactions.

        Args:
            product_id: Product ID

        Returns:
            True if a product was deleted, False if no product has this ID
        """
        product = self.session.get(Product, product_id)
        if product is None:
            logger.debug(f"Delete ignored, product {product_id} not found")
            return False

        transaction_count = len(product.transactions)
        self.session.delete(product)
        self._commit(f"delete product {product_id}")

        logger.info(f"Deleted product {product_id} and {transaction_count} transactions")
        return True

    def record_sale(
        self,
        product_id: str,
        quantity: int,
        sale_date: Optional[Union[str, date, datetime]] = None,
        unit_price: Optional[float] = None
    ) -> SalesTransaction:
        """Record a sale and decrement the product's stock.

        Stock is floored at zero. Quantity and stock sufficiency are not
        validated here; see ``utils.validation.validate_sale``.

        Args:
            product_id: Product ID
            quantity: Units sold
            sale_date: Date of the sale, defaults to now
            unit_price: Price per unit at the time of sale, defaults to the
                product's current price

        Returns:
            The created sales transaction
        """
        product = self.session.get(Product, product_id)
        if product is None:
            raise ProductError(f"Product with ID {product_id} not found")

        sale = SalesTransaction(
            product_id=product.id,
            quantity=quantity,
            date=convert_to_datetime(sale_date) if sale_date is not None else datetime.now(),
            unit_price=product.price if unit_price is None else unit_price
        )
        self.session.add(sale)

        new_stock = max(0, product.current_stock - quantity)
        if product.current_stock - quantity < 0:
            logger.warning(
                f"Sale of {quantity} exceeds stock {product.current_stock} "
                f"for product {product.sku}, stock set to 0"
            )
        product.current_stock = new_stock

        self._commit(f"record sale for product {product_id}")

        logger.info(f"Recorded sale {sale.id}: {quantity} x {product.sku}, stock now {product.current_stock}")
        return sale

    # Reads

    def get_product(self, product_id: str) -> Optional[Product]:
        return self.session.get(Product, product_id)

    def list_products(self) -> List[Product]:
        return self.session.query(Product).order_by(Product.created_at, Product.id).all()

    def get_sales_history(self, product_id: str) -> List[SaleRecord]:
        """Get all sales for a product, newest first."""
        sales = (
            self.session.query(SalesTransaction)
            .filter(SalesTransaction.product_id == product_id)
            .all()
        )
        return self._newest_first(sales)

    def get_all_sales(self) -> List[SaleRecord]:
        """Get all sales across products, newest first."""
        return self._newest_first(self.session.query(SalesTransaction).all())

    def get_product_metrics(self, product: ProductRef) -> ProductWithMetrics:
        """Calculate metrics for a single product.

        Args:
            product: Product or product ID

        Returns:
            Product with its derived metrics
        """
        product = self._resolve(product)
        sales = (
            self.session.query(SalesTransaction)
            .filter(SalesTransaction.product_id == product.id)
            .all()
        )
        return self._build_metrics(product, sales)

    def get_products_with_metrics(self) -> List[ProductWithMetrics]:
        """Calculate metrics for every product."""
        sales_by_product = defaultdict(list)
        for sale in self.session.query(SalesTransaction).all():
            sales_by_product[sale.product_id].append(sale)

        return [
            self._build_metrics(product, sales_by_product.get(product.id, []))
            for product in self.list_products()
        ]

    def get_dashboard_stats(self) -> DashboardStats:
        """Aggregate metrics across all products."""
        metrics = self.get_products_with_metrics()
        mape_values = [m.mape for m in metrics if m.mape is not None]
        total_transactions = self.session.query(func.count(SalesTransaction.id)).scalar() or 0

        average_mape = 0.0
        if mape_values:
            average_mape = round_half_up(sum(mape_values) / len(mape_values), 2)

        return DashboardStats(
            total_products=len(metrics),
            total_skus=len({m.sku for m in metrics}),
            low_stock_count=sum(1 for m in metrics if m.status == StockStatus.WARNING),
            critical_stock_count=sum(1 for m in metrics if m.status == StockStatus.CRITICAL),
            total_transactions=total_transactions,
            average_mape=average_mape
        )

    def get_low_stock_products(self) -> List[ProductWithMetrics]:
        """Get products whose status is warning or critical."""
        return [
            m for m in self.get_products_with_metrics()
            if m.status in (StockStatus.WARNING, StockStatus.CRITICAL)
        ]

    def get_products_by_category(self, category: Union[ProductCategory, str]) -> List[ProductWithMetrics]:
        category = self._coerce_category(category)
        return [m for m in self.get_products_with_metrics() if m.category == category]

    def search_products(self, query: str) -> List[ProductWithMetrics]:
        """Find products whose name or SKU contains the query, ignoring case."""
        needle = query.lower()
        matches = {
            product.id for product in
            self.session.query(Product).filter(
                or_(
                    func.lower(Product.name).contains(needle, autoescape=True),
                    func.lower(Product.sku).contains(needle, autoescape=True)
                )
            )
        }
        return [m for m in self.get_products_with_metrics() if m.id in matches]

    # Helpers

    def _resolve(self, product: ProductRef) -> Product:
        if isinstance(product, Product):
            return product
        resolved = self.session.get(Product, product)
        if resolved is None:
            raise NotFoundError(f"Product with ID {product} not found")
        return resolved

    @staticmethod
    def _coerce_category(category) -> ProductCategory:
        try:
            return ProductCategory.from_string(category)
        except ValueError as e:
            raise ValidationError(str(e))

    @staticmethod
    def _newest_first(sales) -> List[SaleRecord]:
        records = [SaleRecord.from_model(sale) for sale in sales]
        return sorted(records, key=lambda s: (s.date, s.id), reverse=True)

    def _build_metrics(self, product: Product, sales) -> ProductWithMetrics:
        weekly_sales = weekly_demand_series(sales)
        lead_time_weeks = days_to_weeks(product.lead_time, self.days_per_week)

        safety_stock = calculate_safety_stock(weekly_sales, lead_time_weeks)
        reorder_point = calculate_reorder_point(weekly_sales, lead_time_weeks, safety_stock)
        stats = calculate_demand_stats(weekly_sales)

        logger.debug(
            f"Metrics for {product.sku}: {len(weekly_sales)} weeks, "
            f"SS={safety_stock}, ROP={reorder_point}"
        )

        return ProductWithMetrics(
            id=product.id,
            sku=product.sku,
            name=product.name,
            category=product.category,
            price=product.price,
            current_stock=product.current_stock,
            lead_time=product.lead_time,
            created_at=product.created_at,
            sales_history=self._newest_first(sales),
            weekly_sales=weekly_sales,
            wma_forecast=calculate_wma(weekly_sales),
            safety_stock=safety_stock,
            reorder_point=reorder_point,
            mape=calculate_backtest_mape(weekly_sales, self.mape_min_weeks),
            status=classify_stock_status(product.current_stock, reorder_point, safety_stock),
            d_max=stats['d_max'],
            d_avg=stats['d_avg'],
            lead_time_weeks=lead_time_weeks
        )
