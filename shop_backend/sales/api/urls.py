# sales/api/urls.py

"""
SALES API URLS

    GET  /api/sales/              sales history (filterable)
    POST /api/sales/              record a sale
    GET  /api/sales/orders/       sales orders (filterable)
    POST /api/sales/orders/       check out a multi-line cart
    GET  /api/sales/orders/<id>/  one order with its lines
"""

from django.urls import path

from sales.views.order import SalesOrderDetailView, SalesOrderListCreateView
from sales.views.sale import SaleRecordListCreateView

urlpatterns = [
    path("", SaleRecordListCreateView.as_view(), name="sales"),
    path("orders/", SalesOrderListCreateView.as_view(), name="sales-orders"),
    path("orders/<int:pk>/", SalesOrderDetailView.as_view(), name="sales-order-detail"),
]
