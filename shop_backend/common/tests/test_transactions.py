# common/tests/test_transactions.py

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.test import TestCase

from accounting.models import Account
from common.exceptions import CommerceValidationError, ConflictError, StorageError
from common.transactions import atomic_unit


class AtomicUnitTests(TestCase):
    def _create_and_fail(self, exc):
        with atomic_unit("tests.atomic_unit", step="create"):
            Account.objects.create(kind=Account.Kind.CUSTOMER, display_name="Rolled back")
            raise exc

    def test_model_validation_becomes_commerce_validation_error(self):
        with self.assertRaises(CommerceValidationError) as ctx:
            self._create_and_fail(ValidationError({"item_name": ["Ensure this value has at most 255 characters."]}))

        self.assertIn("at most 255 characters", ctx.exception.message)
        self.assertIsInstance(ctx.exception.__cause__, ValidationError)
        self.assertFalse(Account.objects.exists())

    def test_database_error_becomes_storage_error(self):
        with self.assertRaises(StorageError) as ctx:
            self._create_and_fail(DatabaseError("disk I/O error"))

        self.assertEqual(ctx.exception.context["operation"], "tests.atomic_unit")
        self.assertFalse(Account.objects.exists())

    def test_domain_errors_pass_through_unchanged(self):
        with self.assertRaises(ConflictError):
            self._create_and_fail(ConflictError("taken"))

        self.assertFalse(Account.objects.exists())
