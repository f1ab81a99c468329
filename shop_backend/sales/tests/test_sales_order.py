# sales/tests/test_sales_order.py

from datetime import date
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from accounting.models import LedgerEntry
from accounting.services.party_service import register_customer
from common import notifications
from common.exceptions import (
    CommerceValidationError,
    InvalidDiscount,
    ItemNotAvailable,
    ItemNotFound,
    StorageError,
)
from products.models import Phone, Product, Service
from sales.models import SalesOrder, SalesOrderLine
from sales.services.sale_service import OrderLine, record_sales_order

User = get_user_model()

SALE_DAY = date(2024, 6, 1)


class RecordSalesOrderTests(TestCase):
    """
    GUARANTEES:
    - One header, one line per cart item, one customer debit of grand_total
    - A failing line rolls back every earlier line of the same cart
    """

    def setUp(self):
        notifications.outbox.clear()
        self.user = User.objects.create_user(username="cashier", password="pass")
        self.customer = register_customer(display_name="Reza Karimi", phone_number="09121234567")
        self.phone = Phone.objects.create(
            model="Galaxy S23",
            imei="350000000000101",
            purchase_price="30000000",
            sale_price="35000000",
        )
        self.cable = Product.objects.create(
            name="Lightning cable",
            purchase_price="50000",
            selling_price="120000",
            stock_quantity=10,
        )
        self.service = Service.objects.create(name="Screen protector fitting", price="100000")

    def _cart(self):
        return [
            OrderLine(item_kind="product", item_id=self.cable.pk, quantity=2, discount=Decimal("40000")),
            OrderLine(item_kind="phone", item_id=self.phone.pk),
            {"item_kind": "service", "item_id": self.service.pk, "unit_price": "80000"},
        ]

    def _assert_nothing_recorded(self):
        self.assertEqual(SalesOrder.objects.count(), 0)
        self.assertEqual(SalesOrderLine.objects.count(), 0)
        self.assertEqual(LedgerEntry.objects.count(), 0)
        self.cable.refresh_from_db()
        self.assertEqual(self.cable.stock_quantity, 10)
        self.assertEqual(self.cable.sale_count, 0)

    # =====================================================
    # HAPPY PATHS
    # =====================================================

    def test_credit_order_posts_one_debit_of_grand_total(self):
        with self.captureOnCommitCallbacks(execute=True):
            order = record_sales_order(
                items=self._cart(),
                customer=self.customer.pk,
                discount="60000",
                payment_method="credit",
                transaction_date=SALE_DAY,
                user=self.user,
            )

        # 2 * 120000 + 35000000 + 80000
        self.assertEqual(order.subtotal, Decimal("35320000.00"))
        self.assertEqual(order.items_discount, Decimal("40000.00"))
        self.assertEqual(order.grand_total, Decimal("35220000.00"))

        lines = list(order.lines.all())
        self.assertEqual([line.item_kind for line in lines], ["product", "phone", "service"])
        self.assertEqual(lines[0].line_total, Decimal("200000.00"))
        self.assertEqual(lines[1].item_name, "Galaxy S23 (IMEI: 350000000000101)")
        self.assertEqual(lines[2].unit_price, Decimal("80000.00"))

        self.cable.refresh_from_db()
        self.phone.refresh_from_db()
        self.assertEqual(self.cable.stock_quantity, 8)
        self.assertEqual(self.phone.status, Phone.Status.SOLD)
        self.assertEqual(self.phone.sale_date, SALE_DAY)

        entry = LedgerEntry.objects.get(account=self.customer)
        self.assertEqual(entry.debit, Decimal("35220000.00"))
        self.assertEqual(entry.reference_type, "sales_order")
        self.assertEqual(entry.reference_id, str(order.pk))
        self.assertEqual(notifications.outbox, [("sales_order_recorded", order.pk)])

    def test_cash_order_has_no_ledger_entry(self):
        record_sales_order(
            items=self._cart(),
            customer=self.customer,
            payment_method="cash",
            transaction_date=SALE_DAY,
        )
        self.assertEqual(SalesOrder.objects.count(), 1)
        self.assertEqual(LedgerEntry.objects.count(), 0)

    # =====================================================
    # ROLLBACK WHEN A LATER LINE FAILS
    # =====================================================

    def test_sold_phone_on_second_line_rolls_back_first_line(self):
        Phone.objects.filter(pk=self.phone.pk).update(status=Phone.Status.SOLD_INSTALLMENT)

        with self.captureOnCommitCallbacks(execute=True):
            with self.assertRaises(ItemNotAvailable):
                record_sales_order(
                    items=self._cart(),
                    customer=self.customer.pk,
                    payment_method="credit",
                    transaction_date=SALE_DAY,
                )

        self._assert_nothing_recorded()
        self.assertEqual(notifications.outbox, [])

    def test_short_stock_on_second_line_rolls_back(self):
        cart = [
            OrderLine(item_kind="phone", item_id=self.phone.pk),
            OrderLine(item_kind="product", item_id=self.cable.pk, quantity=11),
        ]

        with self.assertRaises(ItemNotAvailable):
            record_sales_order(items=cart, payment_method="cash", transaction_date=SALE_DAY)

        self._assert_nothing_recorded()
        self.phone.refresh_from_db()
        self.assertEqual(self.phone.status, Phone.Status.IN_STOCK)
        self.assertIsNone(self.phone.sale_date)

    def test_same_phone_twice_in_one_cart(self):
        cart = [
            OrderLine(item_kind="phone", item_id=self.phone.pk),
            OrderLine(item_kind="phone", item_id=self.phone.pk),
        ]

        with self.assertRaises(ItemNotAvailable):
            record_sales_order(items=cart, payment_method="cash", transaction_date=SALE_DAY)

        self.phone.refresh_from_db()
        self.assertEqual(self.phone.status, Phone.Status.IN_STOCK)
        self.assertFalse(SalesOrder.objects.exists())

    def test_unknown_item_on_second_line(self):
        cart = [
            OrderLine(item_kind="product", item_id=self.cable.pk, quantity=1),
            OrderLine(item_kind="service", item_id=999999),
        ]

        with self.assertRaises(ItemNotFound):
            record_sales_order(items=cart, payment_method="cash", transaction_date=SALE_DAY)

        self._assert_nothing_recorded()

    def test_order_discount_above_total_rolls_back(self):
        with self.assertRaises(InvalidDiscount):
            record_sales_order(
                items=[OrderLine(item_kind="product", item_id=self.cable.pk, quantity=1)],
                discount="120001",
                payment_method="cash",
                transaction_date=SALE_DAY,
            )

        self._assert_nothing_recorded()

    def test_ledger_failure_rolls_back_every_line(self):
        with mock.patch("sales.services.sale_service.post_entry", side_effect=DatabaseError("disk I/O error")):
            with self.assertRaises(StorageError):
                record_sales_order(
                    items=self._cart(),
                    customer=self.customer.pk,
                    payment_method="credit",
                    transaction_date=SALE_DAY,
                )

        self._assert_nothing_recorded()
        self.phone.refresh_from_db()
        self.assertEqual(self.phone.status, Phone.Status.IN_STOCK)

    def test_invalid_carts(self):
        cases = {
            "empty cart": {"items": []},
            "bad kind": {"items": [{"item_kind": "tablet", "item_id": 1}]},
            "zero quantity": {"items": [{"item_kind": "product", "item_id": self.cable.pk, "quantity": 0}]},
            "negative line discount": {
                "items": [{"item_kind": "product", "item_id": self.cable.pk, "discount": "-1"}]
            },
            "bad payment method": {"payment_method": "barter"},
        }
        for label, overrides in cases.items():
            kwargs = {
                "items": [OrderLine(item_kind="product", item_id=self.cable.pk)],
                "payment_method": "cash",
                "transaction_date": SALE_DAY,
            }
            kwargs.update(overrides)
            with self.subTest(label):
                with self.assertRaises(CommerceValidationError):
                    record_sales_order(**kwargs)

        self._assert_nothing_recorded()

    def test_order_is_immutable(self):
        order = record_sales_order(
            items=[OrderLine(item_kind="service", item_id=self.service.pk)],
            payment_method="cash",
            transaction_date=SALE_DAY,
        )

        with self.assertRaises(ValidationError):
            order.save()
        with self.assertRaises(ValidationError):
            order.delete()
        with self.assertRaises(ValidationError):
            order.lines.get().delete()


class SalesOrderApiTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="cashier", password="pass")
        self.client.force_authenticate(user=self.user)
        self.customer = register_customer(display_name="Sara Ahmadi")
        self.phone = Phone.objects.create(
            model="iPhone 15",
            imei="350000000000109",
            purchase_price="60000000",
            sale_price="68000000",
        )
        self.case = Product.objects.create(
            name="MagSafe case",
            purchase_price="400000",
            selling_price="900000",
            stock_quantity=3,
        )

    def _payload(self, **overrides):
        payload = {
            "items": [
                {"item_kind": "phone", "item_id": self.phone.pk},
                {"item_kind": "product", "item_id": self.case.pk, "quantity": 1, "discount": "100000"},
            ],
            "payment_method": "credit",
            "customer": self.customer.pk,
            "transaction_date": "2024-06-01",
        }
        payload.update(overrides)
        return payload

    def test_check_out_cart(self):
        res = self.client.post("/api/sales/orders/", self._payload(), format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(res.data["grand_total"]), Decimal("68800000"))
        self.assertEqual(len(res.data["lines"]), 2)
        self.assertEqual(res.data["customer_name"], "Sara Ahmadi")

        res = self.client.get(f"/api/sales/orders/{res.data['id']}/")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["lines"][1]["item_name"], "MagSafe case")

        res = self.client.get("/api/sales/orders/?payment_method=credit")
        self.assertEqual(len(res.data["results"]), 1)

    def test_second_line_short_stock_is_409_and_nothing_sticks(self):
        payload = self._payload()
        payload["items"][1]["quantity"] = 4

        res = self.client.post("/api/sales/orders/", payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(res.data["error"]["code"], "item_not_available")
        self.phone.refresh_from_db()
        self.assertEqual(self.phone.status, Phone.Status.IN_STOCK)
        self.assertFalse(SalesOrder.objects.exists())
        self.assertFalse(LedgerEntry.objects.exists())

    def test_empty_cart_is_400(self):
        res = self.client.post("/api/sales/orders/", self._payload(items=[]), format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
