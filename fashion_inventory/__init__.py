from .config import config
from .db import db, session_scope
from .logging_setup import logger, get_logger
from .exceptions import InventoryError, ValidationError, ProductError, NotFoundError, DatabaseError

__all__ = [
    'config',
    'db',
    'session_scope',
    'logger',
    'get_logger',
    'InventoryError',
    'ValidationError',
    'ProductError',
    'NotFoundError',
    'DatabaseError'
]
