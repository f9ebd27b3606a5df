from typing import Dict, Optional, Any

from fashion_inventory.exceptions import ValidationError
from fashion_inventory.models import Product, ProductCategory
from fashion_inventory.utils.date_utils import convert_to_datetime

def validate_product_data(data: Dict[str, Any], partial: bool = False) -> Dict[str, str]:
    """Validate product form data before it reaches the inventory store.

    Args:
        data: Product fields keyed by attribute name
        partial: If True, only validate the fields that are present

    Returns:
        Dictionary with validation errors
    """
    errors = {}

    def present(key):
        return key in data or not partial

    if present('sku') and not data.get('sku'):
        errors['sku'] = 'SKU is required'

    if present('name') and not data.get('name'):
        errors['name'] = 'Product name is required'

    if present('category'):
        try:
            ProductCategory.from_string(data.get('category'))
        except ValueError as e:
            errors['category'] = str(e)

    if present('price'):
        price = data.get('price')
        if price is None or price <= 0:
            errors['price'] = 'Price must be greater than zero'

    if present('current_stock'):
        stock = data.get('current_stock')
        if stock is None or stock < 0 or int(stock) != stock:
            errors['current_stock'] = 'Current stock must be a non-negative whole number'

    if 'lead_time' in data:
        lead_time = data.get('lead_time')
        if lead_time is None or lead_time < 0:
            errors['lead_time'] = 'Lead time must not be negative'

    return errors

def validate_sale(product: Optional[Product], quantity, sale_date=None) -> Dict[str, str]:
    """Validate a sale before it is recorded.

    Args:
        product: Product being sold, or None if it was not found
        quantity: Quantity to sell
        sale_date: Optional sale date as an ISO-8601 string, date or datetime

    Returns:
        Dictionary with validation errors
    """
    errors = {}

    if product is None:
        errors['product_id'] = 'Product not found'

    if quantity is None or quantity <= 0 or int(quantity) != quantity:
        errors['quantity'] = 'Quantity must be a positive whole number'
    elif product is not None and quantity > product.current_stock:
        errors['quantity'] = f'Insufficient stock. Available stock: {product.current_stock}'

    if sale_date is not None:
        try:
            convert_to_datetime(sale_date)
        except ValidationError as e:
            errors['date'] = e.details['date']

    return errors
