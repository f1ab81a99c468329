# accounting/tests/test_ledger_service.py

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.test import TestCase
from django.utils import timezone

from accounting.models import Account, LedgerEntry
from accounting.services.ledger_service import (
    current_balance,
    history,
    post_entry,
    signed_delta,
    verify_recurrence,
)
from accounting.services.party_service import register_customer, register_partner
from common.exceptions import (
    CommerceValidationError,
    ConsistencyError,
    NotFoundError,
    StorageError,
)


class SignRuleTests(TestCase):
    """
    customer: debit increases what they owe
    partner:  credit increases what the shop owes them
    """

    def test_customer_delta_is_debit_minus_credit(self):
        self.assertEqual(signed_delta(Account.Kind.CUSTOMER, "100", "30"), Decimal("70.00"))

    def test_partner_delta_is_credit_minus_debit(self):
        self.assertEqual(signed_delta(Account.Kind.PARTNER, "100", "30"), Decimal("-70.00"))

    def test_unknown_kind_is_a_consistency_error(self):
        with self.assertRaises(ConsistencyError):
            signed_delta("supplier", 1, 0)


class LedgerPostingTests(TestCase):
    def setUp(self):
        self.customer = register_customer(display_name="Reza Ahmadi", phone_number="09120000001")
        self.partner = register_partner(display_name="Mobile Wholesale", partner_type="supplier")

    # =====================================================
    # RUNNING BALANCE
    # =====================================================

    def test_first_entry_starts_from_zero(self):
        entry = post_entry(account=self.customer, description="Opening debt", debit="250000")

        self.assertEqual(entry.balance, Decimal("250000.00"))
        self.assertEqual(current_balance(self.customer), Decimal("250000.00"))

    def test_customer_balance_recurrence(self):
        post_entry(account=self.customer, description="Credit purchase", debit="100")
        post_entry(account=self.customer, description="Payment received", credit="30")
        post_entry(account=self.customer, description="Credit purchase", debit="50")

        balances = [e.balance for e in history(self.customer)]
        self.assertEqual(balances, [Decimal("100.00"), Decimal("70.00"), Decimal("120.00")])
        self.assertEqual(verify_recurrence(self.customer), Decimal("120.00"))

    def test_partner_balance_recurrence(self):
        post_entry(account=self.partner, description="Phone purchase", credit="200")
        post_entry(account=self.partner, description="Payment to supplier", debit="50")

        balances = [e.balance for e in history(self.partner)]
        self.assertEqual(balances, [Decimal("200.00"), Decimal("150.00")])
        self.assertEqual(verify_recurrence(self.partner), Decimal("150.00"))

    def test_denormalized_balance_follows_ledger(self):
        post_entry(account=self.customer.pk, description="Credit purchase", debit="80")

        self.customer.refresh_from_db()
        self.assertEqual(self.customer.current_balance, Decimal("80.00"))

    def test_passed_account_instance_is_updated(self):
        post_entry(account=self.customer, description="Credit purchase", debit="80")
        self.assertEqual(self.customer.current_balance, Decimal("80.00"))

    def test_backdated_entry_uses_insertion_order(self):
        post_entry(account=self.customer, description="Credit purchase", debit="100")
        backdated = post_entry(
            account=self.customer,
            description="Correction for last year",
            credit="40",
            posted_at=timezone.now() - timedelta(days=365),
        )

        self.assertEqual(backdated.balance, Decimal("60.00"))
        self.assertEqual(current_balance(self.customer), Decimal("60.00"))

        post_entry(account=self.customer, description="Credit purchase", debit="10")
        self.assertEqual(current_balance(self.customer), Decimal("70.00"))

    def test_history_is_restartable(self):
        post_entry(account=self.customer, description="A", debit="1")
        post_entry(account=self.customer, description="B", debit="2")

        first = [e.pk for e in history(self.customer)]
        second = [e.pk for e in history(self.customer)]
        self.assertEqual(first, second)
        self.assertEqual(len(first), 2)

    def test_empty_account_balance_is_zero(self):
        self.assertEqual(current_balance(self.partner), Decimal("0.00"))
        self.assertEqual(list(history(self.partner)), [])

    # =====================================================
    # INPUT VALIDATION
    # =====================================================

    def test_negative_amount_rejected(self):
        with self.assertRaises(CommerceValidationError):
            post_entry(account=self.customer, description="Bad", debit="-5")
        self.assertEqual(LedgerEntry.objects.count(), 0)

    def test_blank_description_rejected(self):
        with self.assertRaises(CommerceValidationError):
            post_entry(account=self.customer, description="   ", debit="5")

    def test_zero_posting_rejected(self):
        with self.assertRaises(CommerceValidationError):
            post_entry(account=self.customer, description="Nothing", debit=0, credit=0)

    def test_unknown_account_is_not_found(self):
        with self.assertRaises(NotFoundError):
            post_entry(account=999999, description="Ghost", debit="5")

    # =====================================================
    # CONSISTENCY / STORAGE
    # =====================================================

    def test_drifted_balance_blocks_posting(self):
        post_entry(account=self.customer, description="Credit purchase", debit="100")
        Account.objects.filter(pk=self.customer.pk).update(current_balance=Decimal("999.00"))

        with self.assertRaises(ConsistencyError):
            post_entry(account=self.customer, description="Credit purchase", debit="1")

        self.assertEqual(LedgerEntry.objects.filter(account=self.customer).count(), 1)

    def test_verify_recurrence_detects_drift(self):
        post_entry(account=self.customer, description="Credit purchase", debit="100")
        Account.objects.filter(pk=self.customer.pk).update(current_balance=Decimal("5.00"))

        with self.assertRaises(ConsistencyError):
            verify_recurrence(self.customer)

    def test_database_failure_surfaces_as_storage_error(self):
        with mock.patch.object(LedgerEntry.objects, "create", side_effect=DatabaseError("disk full")):
            with self.assertRaises(StorageError) as ctx:
                post_entry(account=self.customer, description="Credit purchase", debit="100")

        self.assertIsInstance(ctx.exception.__cause__, DatabaseError)
        self.customer.refresh_from_db()
        self.assertEqual(self.customer.current_balance, Decimal("0.00"))

    # =====================================================
    # IMMUTABILITY
    # =====================================================

    def test_entries_cannot_be_modified(self):
        entry = post_entry(account=self.customer, description="Credit purchase", debit="100")
        entry.debit = Decimal("1.00")

        with self.assertRaises(ValidationError):
            entry.save()

    def test_entries_cannot_be_deleted(self):
        entry = post_entry(account=self.customer, description="Credit purchase", debit="100")

        with self.assertRaises(ValidationError):
            entry.delete()

        self.assertTrue(LedgerEntry.objects.filter(pk=entry.pk).exists())
