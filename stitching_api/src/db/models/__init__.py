"""
Record models for every workbook-backed table.

Importing this package exposes `ALL_MODELS`, the list of tables that are created
(header row only) when the data directory is initialised.
"""

from .production import ProductionUnit  # noqa: F401
from .finance import Expense, Revenue  # noqa: F401
from .inventory import InventoryItem  # noqa: F401
from .sales import Customer, Order  # noqa: F401
from .payroll import SalaryPayment  # noqa: F401
from .maintenance import MaintenanceRecord  # noqa: F401
from .reports import Report  # noqa: F401
from .security import User  # noqa: F401

ALL_MODELS = [
    ProductionUnit,
    Expense,
    Revenue,
    InventoryItem,
    Customer,
    Order,
    SalaryPayment,
    MaintenanceRecord,
    Report,
    User,
]
