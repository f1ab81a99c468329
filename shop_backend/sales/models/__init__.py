# sales/models/__init__.py

"""
SALES MODELS PACKAGE EXPORTS
"""

from .sale_record import SaleRecord
from .sales_order import SalesOrder, SalesOrderLine

__all__ = [
    "SaleRecord",
    "SalesOrder",
    "SalesOrderLine",
]
