# common/tests/test_api_errors.py

from unittest import mock

from django.test import SimpleTestCase
from rest_framework.exceptions import ValidationError as DRFValidationError

from common import api
from common.api import GENERIC_FAILURE_MESSAGE, commerce_exception_handler
from common.exceptions import (
    CommerceValidationError,
    ConflictError,
    ConsistencyError,
    InvalidCheckTransition,
    ItemNotFound,
    StorageError,
)


class CommerceExceptionHandlerTests(SimpleTestCase):
    def test_user_visible_errors_keep_their_message(self):
        cases = [
            (CommerceValidationError("bad amount"), 400, "validation_error"),
            (ItemNotFound("phone 9 not found"), 404, "item_not_found"),
            (ConflictError("already registered"), 409, "conflict"),
            (InvalidCheckTransition("cleared is final"), 409, "invalid_check_transition"),
        ]
        for exc, status_code, code in cases:
            with self.subTest(code=code):
                response = commerce_exception_handler(exc, {})
                self.assertEqual(response.status_code, status_code)
                self.assertEqual(response.data["error"]["code"], code)
                self.assertEqual(response.data["error"]["message"], exc.message)

    def test_internal_errors_are_generic_and_logged(self):
        for exc in (ConsistencyError("drift on account 4", account_id=4), StorageError("disk full")):
            with self.subTest(code=exc.code):
                with mock.patch.object(api.logger, "error") as log_error:
                    response = commerce_exception_handler(exc, {})

                self.assertEqual(response.status_code, 500)
                self.assertEqual(response.data["error"]["message"], GENERIC_FAILURE_MESSAGE)
                log_error.assert_called_once()

    def test_drf_errors_use_stock_handling(self):
        response = commerce_exception_handler(DRFValidationError({"amount": ["required"]}), {})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {"amount": ["required"]})
