"""warehouse - food and electronics inventory tracker with expiration monitoring"""

__version__ = "0.1.0"

from warehouse.errors import InvalidInputError, PersistenceError, WarehouseError
from warehouse.inventory.monitor import ExpirationMonitor
from warehouse.inventory.store import Store

__all__ = [
    "ExpirationMonitor",
    "InvalidInputError",
    "PersistenceError",
    "Store",
    "WarehouseError",
]
