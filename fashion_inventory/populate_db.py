#!/usr/bin/env python
# populate_db.py - Script to populate the inventory database with sample data

import argparse
import math
import random
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from fashion_inventory.config import config
from fashion_inventory.db import db, session_scope
from fashion_inventory.logging_setup import get_logger
from fashion_inventory.models import Product, SalesTransaction, ProductCategory
from fashion_inventory.utils.date_utils import convert_to_date

app_logger = get_logger('populate_db')

# sku, name, category, price, current stock
SAMPLE_PRODUCTS = [
    ('KEM-001', 'Kemeja Putih M', ProductCategory.SHIRT, 150000, 35),
    ('KEM-002', 'Kemeja Biru L', ProductCategory.SHIRT, 160000, 28),
    ('CEL-001', 'Celana Panjang Hitam L', ProductCategory.PANTS, 200000, 42),
    ('CEL-002', 'Celana Pendek Putih M', ProductCategory.PANTS, 120000, 18),
    ('GAM-001', 'Gamis Batik M', ProductCategory.ROBE, 250000, 22),
    ('GAM-002', 'Gamis Polos L', ProductCategory.ROBE, 220000, 15),
]
SAMPLE_LEAD_TIME = 7

BASE_WEEKLY_QUANTITY = {
    ProductCategory.SHIRT: 18,
    ProductCategory.PANTS: 15,
    ProductCategory.ROBE: 12,
}
MIN_WEEKLY_QUANTITY = 5
QUANTITY_SPREAD = 10
MAX_DAY_OFFSET = 4

def create_products(session: Session, created_at: datetime) -> List[Product]:
    """Create the sample product records."""
    app_logger.info("Creating sample products...")

    products = []
    for sku, name, category, price, stock in SAMPLE_PRODUCTS:
        product = Product(
            sku=sku,
            name=name,
            category=category,
            price=price,
            current_stock=stock,
            lead_time=SAMPLE_LEAD_TIME,
            created_at=created_at
        )
        session.add(product)
        products.append(product)

    session.flush()
    app_logger.info(f"Created {len(products)} products.")
    return products

def generate_sample_sales(
    products: List[Product],
    start_date: datetime,
    weeks: int,
    rng: Optional[random.Random] = None
) -> List[SalesTransaction]:
    """Generate one sale per product per week.

    Args:
        products: Products to generate sales for
        start_date: Date of the first week
        weeks: Number of weeks
        rng: Random number generator

    Returns:
        List of unsaved sales transactions
    """
    rng = rng or random.Random()
    sales = []

    for product in products:
        base_quantity = BASE_WEEKLY_QUANTITY.get(product.category, 15)

        for week in range(weeks):
            sale_date = start_date + timedelta(days=week * 7 + rng.randint(0, MAX_DAY_OFFSET))
            quantity = max(
                MIN_WEEKLY_QUANTITY,
                math.floor(base_quantity + (rng.random() - 0.5) * QUANTITY_SPREAD)
            )

            sales.append(SalesTransaction(
                product_id=product.id,
                quantity=quantity,
                date=sale_date,
                unit_price=product.price
            ))

    return sales

def populate(session: Session, seed: Optional[int] = None) -> Dict[str, int]:
    """Populate an empty database with sample products and sales.

    Args:
        session: Database session
        seed: Optional random seed for reproducible sales

    Returns:
        Dictionary with counts of created records
    """
    if session.query(Product).first() is not None:
        app_logger.info("Products already exist, skipping sample data.")
        return {'products': 0, 'sales': 0}

    sample_config = config.sample_data_config
    start = convert_to_date(sample_config['start_date'])
    start_date = datetime(start.year, start.month, start.day)

    products = create_products(session, created_at=start_date)

    rng = random.Random(seed if seed is not None else sample_config['seed'])
    sales = generate_sample_sales(products, start_date, sample_config['weeks'], rng)
    session.add_all(sales)
    session.flush()

    app_logger.info(f"Created {len(sales)} sales transactions.")
    return {'products': len(products), 'sales': len(sales)}

def main():
    """Populate the database with sample data."""
    parser = argparse.ArgumentParser(description='Populate the inventory database with sample data')
    parser.add_argument('--seed', type=int, help='Random seed for reproducible sales')

    args = parser.parse_args()

    db.initialize()
    db.create_all_tables()

    with session_scope() as session:
        result = populate(session, seed=args.seed)

    app_logger.info(f"Sample data complete: {result}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
