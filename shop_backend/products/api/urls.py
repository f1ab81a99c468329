# products/api/urls.py

from django.urls import path

from products.api.views import ItemQuoteView, PhoneIntakeView, ProductIntakeView

urlpatterns = [
    path("receive/", ProductIntakeView.as_view(), name="product-intake"),
    path("phones/receive/", PhoneIntakeView.as_view(), name="phone-intake"),
    path("quote/<str:item_kind>/<int:item_id>/", ItemQuoteView.as_view(), name="item-quote"),
]
