from .order import RecordSalesOrderInputSerializer, SalesOrderSerializer
from .sale import RecordSaleInputSerializer, SaleRecordSerializer

__all__ = [
    "SaleRecordSerializer",
    "RecordSaleInputSerializer",
    "SalesOrderSerializer",
    "RecordSalesOrderInputSerializer",
]
