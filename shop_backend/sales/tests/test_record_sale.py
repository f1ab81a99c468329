# sales/tests/test_record_sale.py

from datetime import date
from decimal import Decimal
from unittest import mock

import jdatetime
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from accounting.models import LedgerEntry
from accounting.services.party_service import register_customer, register_partner
from common import notifications
from common.exceptions import (
    CommerceValidationError,
    InvalidDiscount,
    ItemNotAvailable,
    PriceNotConfigured,
    StorageError,
)
from products.models import Phone, Product, Service
from sales.models import SaleRecord
from sales.services.sale_service import record_sale

User = get_user_model()

SALE_DAY = date(2024, 6, 1)


class RecordSaleTests(TestCase):
    """
    GUARANTEES:
    - Inventory mutation, SaleRecord and customer debit commit together
    - Any failure leaves no partial state behind
    """

    def setUp(self):
        notifications.outbox.clear()
        self.user = User.objects.create_user(username="cashier", password="pass")
        self.customer = register_customer(display_name="Reza Karimi", phone_number="09121234567")
        self.phone = Phone.objects.create(
            model="Galaxy S23",
            imei="350000000000001",
            purchase_price="30000000",
            sale_price="35000000",
        )
        self.cable = Product.objects.create(
            name="Lightning cable",
            purchase_price="50000",
            selling_price="120000",
            stock_quantity=10,
        )
        self.service = Service.objects.create(name="Software update", price="300000")

    # =====================================================
    # HAPPY PATHS
    # =====================================================

    def test_cash_sale_of_product_decrements_stock(self):
        sale = record_sale(
            item_kind="product",
            item_id=self.cable.pk,
            quantity=3,
            discount="10000",
            payment_method="cash",
            transaction_date=SALE_DAY,
            user=self.user,
        )

        self.assertEqual(sale.unit_price, Decimal("120000.00"))
        self.assertEqual(sale.net_total, Decimal("350000.00"))
        self.assertEqual(sale.item_name, "Lightning cable")

        self.cable.refresh_from_db()
        self.assertEqual(self.cable.stock_quantity, 7)
        self.assertEqual(self.cable.sale_count, 3)
        self.assertEqual(LedgerEntry.objects.count(), 0)

    def test_credit_sale_debits_customer(self):
        sale = record_sale(
            item_kind="phone",
            item_id=self.phone.pk,
            customer=self.customer.pk,
            payment_method="credit",
            transaction_date=SALE_DAY,
        )

        self.phone.refresh_from_db()
        self.assertEqual(self.phone.status, Phone.Status.SOLD)
        self.assertEqual(self.phone.sale_date, SALE_DAY)

        entry = LedgerEntry.objects.get(account=self.customer)
        self.assertEqual(entry.debit, Decimal("35000000.00"))
        self.assertEqual(entry.reference_type, "sale")
        self.assertEqual(entry.reference_id, str(sale.pk))

        self.customer.refresh_from_db()
        self.assertEqual(self.customer.current_balance, Decimal("35000000.00"))

    def test_cash_sale_with_customer_has_no_ledger_entry(self):
        record_sale(
            item_kind="service",
            item_id=self.service.pk,
            customer=self.customer,
            payment_method="cash",
            transaction_date=SALE_DAY,
        )
        self.assertEqual(LedgerEntry.objects.count(), 0)

    def test_price_override_wins_over_catalog(self):
        sale = record_sale(
            item_kind="phone",
            item_id=self.phone.pk,
            unit_price_override="34000000",
            payment_method="cash",
            transaction_date=SALE_DAY,
        )
        self.assertEqual(sale.net_total, Decimal("34000000.00"))

    def test_long_phone_model_name_fits_the_snapshot(self):
        long_model = Phone.objects.create(
            model="X" * 250,
            imei="350000000000003",
            purchase_price="20000000",
            sale_price="25000000",
        )

        sale = record_sale(
            item_kind="phone",
            item_id=long_model.pk,
            customer=self.customer.pk,
            payment_method="credit",
            transaction_date=SALE_DAY,
        )

        self.assertLessEqual(len(sale.item_name), 255)
        self.assertTrue(sale.item_name.endswith("(IMEI: 350000000000003)"))
        self.assertTrue(sale.item_name.startswith("XXXX"))
        self.assertEqual(LedgerEntry.objects.get(account=self.customer).debit, Decimal("25000000.00"))

    def test_notification_after_commit(self):
        with self.captureOnCommitCallbacks(execute=True):
            sale = record_sale(
                item_kind="service",
                item_id=self.service.pk,
                payment_method="cash",
                transaction_date=SALE_DAY,
            )

        self.assertEqual(notifications.outbox, [("sale_recorded", sale.pk)])

    # =====================================================
    # REJECTIONS (nothing persists)
    # =====================================================

    def _assert_nothing_recorded(self):
        self.assertEqual(SaleRecord.objects.count(), 0)
        self.assertEqual(LedgerEntry.objects.count(), 0)

    def test_sold_phone_cannot_be_sold_again(self):
        Phone.objects.filter(pk=self.phone.pk).update(status=Phone.Status.SOLD)

        with self.assertRaises(ItemNotAvailable):
            record_sale(
                item_kind="phone",
                item_id=self.phone.pk,
                customer=self.customer.pk,
                payment_method="credit",
                transaction_date=SALE_DAY,
            )

        self._assert_nothing_recorded()

    def test_discount_above_gross_is_rejected(self):
        with self.assertRaises(InvalidDiscount):
            record_sale(
                item_kind="product",
                item_id=self.cable.pk,
                quantity=2,
                discount="250000",
                payment_method="cash",
                transaction_date=SALE_DAY,
            )

        self._assert_nothing_recorded()
        self.cable.refresh_from_db()
        self.assertEqual(self.cable.stock_quantity, 10)

    def test_insufficient_stock(self):
        with self.assertRaises(ItemNotAvailable):
            record_sale(
                item_kind="product",
                item_id=self.cable.pk,
                quantity=11,
                payment_method="cash",
                transaction_date=SALE_DAY,
            )
        self._assert_nothing_recorded()

    def test_unpriced_item(self):
        unpriced = Phone.objects.create(model="Pixel 8", imei="350000000000002", purchase_price="20000000")

        with self.assertRaises(PriceNotConfigured):
            record_sale(
                item_kind="phone",
                item_id=unpriced.pk,
                payment_method="cash",
                transaction_date=SALE_DAY,
            )

        unpriced.refresh_from_db()
        self.assertEqual(unpriced.status, Phone.Status.IN_STOCK)
        self._assert_nothing_recorded()

    def test_phone_quantity_must_be_one(self):
        with self.assertRaises(CommerceValidationError):
            record_sale(
                item_kind="phone",
                item_id=self.phone.pk,
                quantity=2,
                payment_method="cash",
                transaction_date=SALE_DAY,
            )

    def test_invalid_payment_method(self):
        with self.assertRaises(CommerceValidationError):
            record_sale(
                item_kind="service",
                item_id=self.service.pk,
                payment_method="barter",
                transaction_date=SALE_DAY,
            )

    def test_partner_cannot_be_the_customer(self):
        supplier = register_partner(display_name="Supplier Co")

        with self.assertRaises(CommerceValidationError):
            record_sale(
                item_kind="service",
                item_id=self.service.pk,
                customer=supplier.pk,
                payment_method="credit",
                transaction_date=SALE_DAY,
            )
        self._assert_nothing_recorded()

    def test_ledger_failure_rolls_back_whole_sale(self):
        with mock.patch("sales.services.sale_service.post_entry", side_effect=DatabaseError("disk I/O error")):
            with self.assertRaises(StorageError):
                record_sale(
                    item_kind="phone",
                    item_id=self.phone.pk,
                    customer=self.customer.pk,
                    payment_method="credit",
                    transaction_date=SALE_DAY,
                )

        self._assert_nothing_recorded()
        self.phone.refresh_from_db()
        self.assertEqual(self.phone.status, Phone.Status.IN_STOCK)
        self.assertIsNone(self.phone.sale_date)

    def test_rolled_back_sale_sends_no_notification(self):
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            with self.assertRaises(InvalidDiscount):
                record_sale(
                    item_kind="service",
                    item_id=self.service.pk,
                    discount="999999",
                    payment_method="cash",
                    transaction_date=SALE_DAY,
                )

        self.assertEqual(callbacks, [])
        self.assertEqual(notifications.outbox, [])

    def test_sale_record_is_immutable(self):
        sale = record_sale(
            item_kind="service",
            item_id=self.service.pk,
            payment_method="cash",
            transaction_date=SALE_DAY,
        )

        sale.notes = "edited"
        with self.assertRaises(ValidationError):
            sale.save()
        with self.assertRaises(ValidationError):
            sale.delete()


class SalesApiTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="cashier", password="pass")
        self.client.force_authenticate(user=self.user)
        self.customer = register_customer(display_name="Sara Ahmadi")
        self.phone = Phone.objects.create(
            model="iPhone 15",
            imei="350000000000009",
            purchase_price="60000000",
            sale_price="68000000",
        )

    def _payload(self, **overrides):
        payload = {
            "item_kind": "phone",
            "item_id": self.phone.pk,
            "payment_method": "credit",
            "customer": self.customer.pk,
            "transaction_date": "2024-06-01",
        }
        payload.update(overrides)
        return payload

    def test_record_sale(self):
        res = self.client.post("/api/sales/", self._payload(), format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(res.data["net_total"]), Decimal("68000000"))
        self.assertEqual(res.data["customer_name"], "Sara Ahmadi")
        self.assertEqual(res.data["recorded_by"], self.user.pk)

        res = self.client.get("/api/sales/?payment_method=credit")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data["results"]), 1)

    def test_second_sale_of_same_phone_is_409(self):
        self.client.post("/api/sales/", self._payload(), format="json")
        res = self.client.post("/api/sales/", self._payload(), format="json")

        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(res.data["error"]["code"], "item_not_available")

    def test_excess_discount_is_400(self):
        res = self.client.post("/api/sales/", self._payload(discount="70000000"), format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "invalid_discount")

    def test_unknown_item_is_404(self):
        res = self.client.post("/api/sales/", self._payload(item_id=999999), format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_long_phone_model_name_is_recorded(self):
        phone = Phone.objects.create(
            model="Y" * 250,
            imei="350000000000010",
            purchase_price="10000000",
            sale_price="12000000",
        )

        res = self.client.post("/api/sales/", self._payload(item_id=phone.pk), format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertTrue(res.data["item_name"].endswith("(IMEI: 350000000000010)"))
        self.assertLessEqual(len(res.data["item_name"]), 255)

    @override_settings(SHOP_CALENDAR="jalali")
    def test_transaction_date_in_shop_calendar(self):
        res = self.client.post("/api/sales/", self._payload(transaction_date="1403/03/12"), format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(
            SaleRecord.objects.get(pk=res.data["id"]).transaction_date,
            jdatetime.date(1403, 3, 12).togregorian(),
        )
