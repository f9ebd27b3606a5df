from .inventory_store import InventoryStore
from .reporting_service import ReportingService

__all__ = [
    'InventoryStore',
    'ReportingService'
]
