# installments/tests/test_payments.py

from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from accounting.models import LedgerEntry
from common import notifications
from common.exceptions import CommerceValidationError, ConflictError, NotFoundError
from common.shop_calendar import add_months
from installments.models import InstallmentPayment, InstallmentTransaction
from installments.services.payment_service import apply_partial_payment, set_payment_paid
from installments.services.scheduler import create_installment_sale
from installments.services.status import payment_total_paid, remaining_balance, shop_today
from installments.tests.base import InstallmentFixtures

PAID_ON = date(2024, 7, 1)


class PaymentApplicationTests(InstallmentFixtures, TestCase):
    """
    GUARANTEES:
    - status always equals the status derived from sum(transactions)
    - collecting an installment never touches the customer ledger
    """

    def setUp(self):
        super().setUp()
        notifications.outbox.clear()
        self.start_date = add_months(shop_today(), 1)
        self.sale = create_installment_sale(**self.sale_kwargs())
        self.first = self.sale.payments.get(number=1)

    def _reload(self, payment):
        return InstallmentPayment.objects.get(pk=payment.pk)

    def test_partial_then_full_payment(self):
        apply_partial_payment(payment_id=self.first.pk, amount="400000", payment_date=PAID_ON, user=self.user)

        payment = self._reload(self.first)
        self.assertEqual(payment.status, InstallmentPayment.Status.PARTIAL)
        self.assertEqual(payment.paid_on, PAID_ON)
        self.assertEqual(remaining_balance(self.sale), Decimal("9600000.00"))

        apply_partial_payment(payment_id=self.first.pk, amount="600000", payment_date=date(2024, 7, 20))

        payment = self._reload(self.first)
        self.assertEqual(payment.status, InstallmentPayment.Status.PAID)
        self.assertEqual(payment.paid_on, date(2024, 7, 20))
        self.assertEqual(remaining_balance(self.sale), Decimal("9000000.00"))

    def test_status_converges_with_transaction_sum(self):
        for amount in ("100000", "250000", "650000"):
            apply_partial_payment(payment_id=self.first.pk, amount=amount, payment_date=PAID_ON)
            payment = self._reload(self.first)
            total = payment_total_paid(payment)
            if total >= payment.amount_due:
                expected = InstallmentPayment.Status.PAID
            else:
                expected = InstallmentPayment.Status.PARTIAL
            self.assertEqual(payment.status, expected)

        self.assertEqual(payment_total_paid(self.first), Decimal("1000000.00"))

    def test_overpayment_marks_paid_and_floors_remaining(self):
        sale = create_installment_sale(
            **self.sale_kwargs(
                phone_id=self.make_phone("352000000000002").pk,
                sale_price=Decimal("1000000"),
                down_payment=Decimal("0"),
                installment_count=1,
            )
        )
        payment = sale.payments.get()

        apply_partial_payment(payment_id=payment.pk, amount="1500000", payment_date=PAID_ON)

        self.assertEqual(self._reload(payment).status, InstallmentPayment.Status.PAID)
        self.assertEqual(remaining_balance(sale), Decimal("0.00"))
        self.assertEqual(remaining_balance(sale, floor=False), Decimal("-500000.00"))

    def test_payment_does_not_post_to_ledger(self):
        before = LedgerEntry.objects.count()
        apply_partial_payment(payment_id=self.first.pk, amount="1000000", payment_date=PAID_ON)
        self.assertEqual(LedgerEntry.objects.count(), before)

    def test_notification_after_commit(self):
        with self.captureOnCommitCallbacks(execute=True):
            apply_partial_payment(payment_id=self.first.pk, amount="1000", payment_date=PAID_ON)

        self.assertIn(("installment_payment_applied", self.first.pk), notifications.outbox)

    def test_rejections(self):
        with self.assertRaises(CommerceValidationError):
            apply_partial_payment(payment_id=self.first.pk, amount="0", payment_date=PAID_ON)
        with self.assertRaises(CommerceValidationError):
            apply_partial_payment(payment_id=self.first.pk, amount="-5", payment_date=PAID_ON)
        with self.assertRaises(CommerceValidationError):
            apply_partial_payment(payment_id=self.first.pk, amount="100", payment_date=None)
        with self.assertRaises(NotFoundError):
            apply_partial_payment(payment_id=999999, amount="100", payment_date=PAID_ON)

        self.assertEqual(InstallmentTransaction.objects.count(), 0)
        self.assertEqual(self._reload(self.first).status, InstallmentPayment.Status.UNPAID)

    def test_transactions_are_append_only(self):
        txn = apply_partial_payment(payment_id=self.first.pk, amount="1000", payment_date=PAID_ON)

        txn.amount_paid = Decimal("2000")
        with self.assertRaises(ValidationError):
            txn.save()
        with self.assertRaises(ValidationError):
            txn.delete()


class PaidFlagTests(InstallmentFixtures, TestCase):
    def setUp(self):
        super().setUp()
        self.start_date = add_months(shop_today(), 1)
        self.sale = create_installment_sale(**self.sale_kwargs())
        self.first = self.sale.payments.get(number=1)

    def test_mark_paid_creates_transaction_for_outstanding(self):
        apply_partial_payment(payment_id=self.first.pk, amount="400000", payment_date=PAID_ON)

        txn = set_payment_paid(payment_id=self.first.pk, paid=True, payment_date=date(2024, 7, 5))

        self.assertEqual(txn.amount_paid, Decimal("600000.00"))
        self.first.refresh_from_db()
        self.assertEqual(self.first.status, InstallmentPayment.Status.PAID)
        self.assertEqual(self.first.paid_on, date(2024, 7, 5))
        self.assertEqual(payment_total_paid(self.first), self.first.amount_due)

    def test_mark_paid_defaults_to_today(self):
        set_payment_paid(payment_id=self.first.pk, paid=True)

        self.first.refresh_from_db()
        self.assertEqual(self.first.paid_on, shop_today())

    def test_mark_paid_twice_is_noop(self):
        set_payment_paid(payment_id=self.first.pk, paid=True)

        self.assertIsNone(set_payment_paid(payment_id=self.first.pk, paid=True))
        self.assertEqual(InstallmentTransaction.objects.filter(payment=self.first).count(), 1)

    def test_unmark_without_money_is_noop(self):
        self.assertIsNone(set_payment_paid(payment_id=self.first.pk, paid=False))

        self.first.refresh_from_db()
        self.assertEqual(self.first.status, InstallmentPayment.Status.UNPAID)

    def test_unmark_after_money_is_conflict(self):
        set_payment_paid(payment_id=self.first.pk, paid=True)

        with self.assertRaises(ConflictError):
            set_payment_paid(payment_id=self.first.pk, paid=False)

        self.first.refresh_from_db()
        self.assertEqual(self.first.status, InstallmentPayment.Status.PAID)
