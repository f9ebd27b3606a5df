from .date_utils import get_week_start, convert_to_date, convert_to_datetime, format_iso
from .math_utils import round_half_up, weighted_average, mean_value, max_value
from .validation import validate_product_data, validate_sale

__all__ = [
    'get_week_start',
    'convert_to_date',
    'convert_to_datetime',
    'format_iso',
    'round_half_up',
    'weighted_average',
    'mean_value',
    'max_value',
    'validate_product_data',
    'validate_sale'
]
