# accounting/tests/test_party_service.py

from django.core.exceptions import ValidationError
from django.test import TestCase

from accounting.models import Account
from accounting.services.party_service import get_account, register_customer, register_partner
from common.exceptions import CommerceValidationError, ConflictError, NotFoundError


class PartyRegistrationTests(TestCase):
    def test_register_customer_opens_zero_balance_account(self):
        account = register_customer(display_name="  Sara Karimi ", phone_number="09121111111")

        self.assertEqual(account.kind, Account.Kind.CUSTOMER)
        self.assertEqual(account.display_name, "Sara Karimi")
        self.assertEqual(account.current_balance, 0)

    def test_register_partner_keeps_partner_type(self):
        account = register_partner(display_name="Ali Fix", partner_type="technician")

        self.assertEqual(account.kind, Account.Kind.PARTNER)
        self.assertEqual(account.partner_type, "technician")

    def test_duplicate_phone_number_is_conflict(self):
        register_customer(display_name="First", phone_number="09122222222")

        with self.assertRaises(ConflictError):
            register_partner(display_name="Second", phone_number="09122222222")

    def test_blank_name_is_validation_error(self):
        with self.assertRaises(CommerceValidationError):
            register_customer(display_name="   ")

    def test_get_account_asserts_kind(self):
        partner = register_partner(display_name="Supplier")

        with self.assertRaises(CommerceValidationError):
            get_account(partner.pk, kind=Account.Kind.CUSTOMER)

        self.assertEqual(get_account(partner.pk, kind=Account.Kind.PARTNER), partner)

    def test_get_account_unknown_id(self):
        with self.assertRaises(NotFoundError):
            get_account(424242)

    def test_kind_cannot_change(self):
        account = register_customer(display_name="Fixed Kind")
        account.kind = Account.Kind.PARTNER

        with self.assertRaises(ValidationError):
            account.save()
