import argparse
import json
import sys

from fashion_inventory.config import config
from fashion_inventory.db import db, session_scope
from fashion_inventory.exceptions import InventoryError
from fashion_inventory.logging_setup import logger, get_logger
from fashion_inventory.models import ProductCategory
from fashion_inventory.services.inventory_store import InventoryStore
from fashion_inventory.services.reporting_service import ReportingService
from fashion_inventory.utils.validation import validate_product_data, validate_sale

def init_application(db_url=None):
    """Initialize application components."""
    db.initialize(db_url)
    db.create_all_tables()

    log = get_logger('app')
    log.info("Fashion Inventory System initialized")
    log.info(f"Using database: {db_url or config.get_db_url()}")

    return True

def _print_json(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))

def _validation_failed(errors):
    _print_json({'error': 'ValidationError', 'details': errors})
    return 1

def setup_db(args):
    if args.drop:
        db.drop_all_tables()
    db.create_all_tables()
    get_logger('app').info("Database tables created")
    return 0

def seed(args):
    from fashion_inventory.populate_db import populate

    with session_scope() as session:
        _print_json(populate(session, seed=args.seed))
    return 0

def add_product(args):
    data = {
        'sku': args.sku,
        'name': args.name,
        'category': args.category,
        'price': args.price,
        'current_stock': args.stock,
        'lead_time': args.lead_time,
    }
    errors = validate_product_data(data)
    if errors:
        return _validation_failed(errors)

    with session_scope() as session:
        product = InventoryStore(session).add_product(**data)
        _print_json(product.to_dict())
    return 0

def update_product(args):
    changes = {
        key: value for key, value in (
            ('sku', args.sku),
            ('name', args.name),
            ('category', args.category),
            ('price', args.price),
            ('current_stock', args.stock),
            ('lead_time', args.lead_time),
        ) if value is not None
    }
    errors = validate_product_data(changes, partial=True)
    if errors:
        return _validation_failed(errors)

    with session_scope() as session:
        product = InventoryStore(session).update_product(args.product_id, **changes)
        _print_json(product.to_dict() if product else {'updated': False})
    return 0

def delete_product(args):
    with session_scope() as session:
        deleted = InventoryStore(session).delete_product(args.product_id)
        _print_json({'deleted': deleted})
    return 0

def record_sale(args):
    with session_scope() as session:
        store = InventoryStore(session)
        product = store.get_product(args.product_id)

        errors = validate_sale(product, args.quantity, args.date)
        if errors:
            return _validation_failed(errors)

        sale = store.record_sale(args.product_id, args.quantity, args.date, args.unit_price)
        _print_json(sale.to_dict())
    return 0

def list_products(args):
    with session_scope() as session:
        store = InventoryStore(session)
        if args.category:
            metrics = store.get_products_by_category(args.category)
        elif args.search:
            metrics = store.search_products(args.search)
        else:
            metrics = store.get_products_with_metrics()

        _print_json([_summary(m) for m in metrics])
    return 0

def product_metrics(args):
    with session_scope() as session:
        _print_json(InventoryStore(session).get_product_metrics(args.product_id).to_dict())
    return 0

def dashboard(args):
    with session_scope() as session:
        _print_json(InventoryStore(session).get_dashboard_stats().to_dict())
    return 0

def low_stock(args):
    with session_scope() as session:
        _print_json([_summary(m) for m in InventoryStore(session).get_low_stock_products()])
    return 0

def history(args):
    with session_scope() as session:
        _print_json([sale.to_dict() for sale in InventoryStore(session).get_sales_history(args.product_id)])
    return 0

def forecast_table(args):
    with session_scope() as session:
        rows = ReportingService(session).weekly_forecast_table(args.product_id)
        _print_json([row.to_dict() for row in rows])
    return 0

def notifications(args):
    with session_scope() as session:
        _print_json(ReportingService(session).notification_report())
    return 0

def sales_summary(args):
    with session_scope() as session:
        _print_json([s.to_dict() for s in ReportingService(session).sales_summary()])
    return 0

def export_csv(args):
    with session_scope() as session:
        print(ReportingService(session).export_products_csv(), end="")
    return 0

def _summary(metrics):
    data = metrics.to_dict()
    data.pop('sales_history')
    return data

def build_parser():
    parser = argparse.ArgumentParser(description='Fashion Inventory System')
    parser.add_argument('--db-url', type=str, help='SQLAlchemy database URL')

    subparsers = parser.add_subparsers(dest='command', help='Commands')
    categories = [c.value for c in ProductCategory]

    p = subparsers.add_parser('init-db', help='Create the database schema')
    p.add_argument('--drop', action='store_true', help='Drop existing tables first')
    p.set_defaults(func=setup_db)

    p = subparsers.add_parser('seed', help='Load sample products and sales')
    p.add_argument('--seed', type=int, help='Random seed')
    p.set_defaults(func=seed)

    p = subparsers.add_parser('add-product', help='Add a product')
    p.add_argument('--sku', required=True)
    p.add_argument('--name', required=True)
    p.add_argument('--category', required=True, choices=categories)
    p.add_argument('--price', type=float, required=True)
    p.add_argument('--stock', type=int, required=True)
    p.add_argument('--lead-time', type=float, default=config.business_rules['default_lead_time'],
                   help='Lead time in days')
    p.set_defaults(func=add_product)

    p = subparsers.add_parser('update-product', help='Update product fields')
    p.add_argument('product_id')
    p.add_argument('--sku')
    p.add_argument('--name')
    p.add_argument('--category', choices=categories)
    p.add_argument('--price', type=float)
    p.add_argument('--stock', type=int)
    p.add_argument('--lead-time', type=float)
    p.set_defaults(func=update_product)

    p = subparsers.add_parser('delete-product', help='Delete a product and its sales')
    p.add_argument('product_id')
    p.set_defaults(func=delete_product)

    p = subparsers.add_parser('record-sale', help='Record a sale')
    p.add_argument('product_id')
    p.add_argument('--quantity', type=int, required=True)
    p.add_argument('--date', type=str, help='ISO-8601 sale date, defaults to now')
    p.add_argument('--unit-price', type=float, help='Defaults to the current product price')
    p.set_defaults(func=record_sale)

    p = subparsers.add_parser('list', help='List products with metrics')
    p.add_argument('--category', choices=categories)
    p.add_argument('--search', type=str, help='Match name or SKU')
    p.set_defaults(func=list_products)

    p = subparsers.add_parser('metrics', help='Show metrics for a product')
    p.add_argument('product_id')
    p.set_defaults(func=product_metrics)

    p = subparsers.add_parser('dashboard', help='Show dashboard statistics')
    p.set_defaults(func=dashboard)

    p = subparsers.add_parser('low-stock', help='List warning and critical products')
    p.set_defaults(func=low_stock)

    p = subparsers.add_parser('history', help='Show sales history for a product')
    p.add_argument('product_id')
    p.set_defaults(func=history)

    p = subparsers.add_parser('forecast-table', help='Show weekly actuals against forecasts')
    p.add_argument('product_id')
    p.set_defaults(func=forecast_table)

    p = subparsers.add_parser('notifications', help='Show restock notifications')
    p.set_defaults(func=notifications)

    p = subparsers.add_parser('sales-summary', help='Show units sold and revenue per product')
    p.set_defaults(func=sales_summary)

    p = subparsers.add_parser('export-csv', help='Export products with metrics as CSV')
    p.set_defaults(func=export_csv)

    return parser

def main(argv=None):
    """Main application entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    init_application(args.db_url)

    log = get_logger('cli')
    try:
        with logger.command_log(args.command, log):
            return args.func(args)
    except InventoryError as e:
        logger.log_exception(log, e, f"Command {args.command} failed")
        _print_json(e.to_dict())
        return 1

if __name__ == "__main__":
    sys.exit(main())
