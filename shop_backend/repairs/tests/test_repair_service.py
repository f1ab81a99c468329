# repairs/tests/test_repair_service.py

from decimal import Decimal
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase

from accounting.models import LedgerEntry
from accounting.services.party_service import register_customer, register_partner
from common import notifications
from common.exceptions import (
    CommerceValidationError,
    ConflictError,
    ItemNotAvailable,
    NotFoundError,
    StorageError,
)
from products.models import Product
from repairs.models import Repair, RepairPart
from repairs.services.repair_service import add_part, create_repair, finalize_repair, remove_part


class RepairServiceTests(TestCase):
    """
    GUARANTEES:
    - Parts move stock in the same unit as the RepairPart row
    - Finalization debits the customer and credits the technician together
    - A delivered repair is closed
    """

    def setUp(self):
        notifications.outbox.clear()
        self.customer = register_customer(display_name="Maryam Hosseini")
        self.technician = register_partner(display_name="Hamid (board repair)", partner_type="technician")
        self.screen = Product.objects.create(
            name="A54 OLED screen",
            purchase_price="2500000",
            selling_price="3200000",
            stock_quantity=4,
        )
        self.repair = create_repair(
            customer=self.customer,
            device_model="Galaxy A54",
            problem_description="Cracked screen, touch not responding",
            estimated_cost="4000000",
        )

    def _stock(self):
        return Product.objects.get(pk=self.screen.pk).stock_quantity

    # =====================================================
    # INTAKE
    # =====================================================

    def test_intake(self):
        self.assertEqual(self.repair.status, Repair.Status.RECEIVED)
        self.assertEqual(self.repair.estimated_cost, Decimal("4000000.00"))
        self.assertIsNone(self.repair.date_completed)

    def test_intake_requires_description_and_customer_kind(self):
        with self.assertRaises(CommerceValidationError):
            create_repair(customer=self.customer, device_model="iPhone 12", problem_description="  ")

        with self.assertRaises(CommerceValidationError):
            create_repair(customer=self.technician, device_model="iPhone 12", problem_description="No power")

    # =====================================================
    # PARTS
    # =====================================================

    def test_add_and_remove_part_moves_stock(self):
        part = add_part(repair_id=self.repair.pk, product_id=self.screen.pk, quantity=1)
        self.assertEqual(self._stock(), 3)

        remove_part(part_id=part.pk)
        self.assertEqual(self._stock(), 4)
        self.assertFalse(RepairPart.objects.exists())

    def test_part_beyond_stock(self):
        with self.assertRaises(ItemNotAvailable):
            add_part(repair_id=self.repair.pk, product_id=self.screen.pk, quantity=5)

        self.assertEqual(self._stock(), 4)
        self.assertFalse(RepairPart.objects.exists())

    def test_part_for_missing_repair(self):
        with self.assertRaises(NotFoundError):
            add_part(repair_id=999999, product_id=self.screen.pk, quantity=1)
        self.assertEqual(self._stock(), 4)

    def test_remove_missing_part(self):
        with self.assertRaises(NotFoundError):
            remove_part(part_id=999999)

    # =====================================================
    # FINALIZATION
    # =====================================================

    def test_finalize_posts_customer_debit_and_technician_credit(self):
        with self.captureOnCommitCallbacks(execute=True):
            repair = finalize_repair(
                repair_id=self.repair.pk,
                final_cost="3800000",
                labor_fee="600000",
                technician_id=self.technician.pk,
            )

        self.assertEqual(repair.status, Repair.Status.DELIVERED)
        self.assertIsNotNone(repair.date_completed)
        self.assertEqual(repair.technician_id, self.technician.pk)

        debit = LedgerEntry.objects.get(account=self.customer)
        self.assertEqual(debit.debit, Decimal("3800000.00"))
        self.assertEqual(debit.reference_type, "repair")
        self.assertEqual(debit.reference_id, str(repair.pk))

        credit = LedgerEntry.objects.get(account=self.technician)
        self.assertEqual(credit.credit, Decimal("600000.00"))
        self.assertEqual(credit.reference_type, "repair_fee")

        self.technician.refresh_from_db()
        self.assertEqual(self.technician.current_balance, Decimal("600000.00"))
        self.assertEqual(notifications.outbox, [("repair_finalized", repair.pk)])

    def test_zero_amounts_skip_ledger(self):
        finalize_repair(repair_id=self.repair.pk, final_cost="0", technician_id=self.technician.pk)
        self.assertEqual(LedgerEntry.objects.count(), 0)

    def test_finalize_requires_partner_technician(self):
        with self.assertRaises(CommerceValidationError):
            finalize_repair(repair_id=self.repair.pk, final_cost="100")

        with self.assertRaises(CommerceValidationError):
            finalize_repair(repair_id=self.repair.pk, final_cost="100", technician_id=self.customer.pk)

        self.repair.refresh_from_db()
        self.assertEqual(self.repair.status, Repair.Status.RECEIVED)

    def test_delivered_repair_is_closed(self):
        part = add_part(repair_id=self.repair.pk, product_id=self.screen.pk, quantity=1)
        finalize_repair(repair_id=self.repair.pk, final_cost="3800000", technician_id=self.technician.pk)

        with self.assertRaises(ConflictError):
            finalize_repair(repair_id=self.repair.pk, final_cost="1", technician_id=self.technician.pk)
        with self.assertRaises(ConflictError):
            add_part(repair_id=self.repair.pk, product_id=self.screen.pk, quantity=1)
        with self.assertRaises(ConflictError):
            remove_part(part_id=part.pk)

        self.assertEqual(LedgerEntry.objects.filter(account=self.customer).count(), 1)
        self.assertEqual(self._stock(), 3)

    def test_ledger_failure_leaves_repair_open(self):
        with mock.patch(
            "repairs.services.repair_service.post_entry",
            side_effect=DatabaseError("connection lost"),
        ):
            with self.assertRaises(StorageError):
                finalize_repair(
                    repair_id=self.repair.pk,
                    final_cost="3800000",
                    labor_fee="600000",
                    technician_id=self.technician.pk,
                )

        self.repair.refresh_from_db()
        self.assertEqual(self.repair.status, Repair.Status.RECEIVED)
        self.assertIsNone(self.repair.final_cost)
        self.assertEqual(LedgerEntry.objects.count(), 0)
