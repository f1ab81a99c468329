# backend/tests/test_observability.py

from unittest import mock

from django.test import SimpleTestCase
from sentry_sdk.integrations.django import DjangoIntegration

from backend.observability import init_error_reporting


class ErrorReportingTests(SimpleTestCase):
    @mock.patch("sentry_sdk.init")
    def test_no_dsn_means_no_client(self, sentry_init):
        self.assertFalse(init_error_reporting(dsn=""))
        sentry_init.assert_not_called()

    @mock.patch("sentry_sdk.init")
    def test_dsn_starts_sentry_with_django_integration(self, sentry_init):
        started = init_error_reporting(
            dsn="https://public@sentry.example.com/7",
            environment="shop-prod",
            traces_sample_rate=0.2,
        )

        self.assertTrue(started)
        kwargs = sentry_init.call_args.kwargs
        self.assertEqual(kwargs["dsn"], "https://public@sentry.example.com/7")
        self.assertEqual(kwargs["environment"], "shop-prod")
        self.assertEqual(kwargs["traces_sample_rate"], 0.2)
        self.assertFalse(kwargs["send_default_pii"])
        self.assertIsInstance(kwargs["integrations"][0], DjangoIntegration)
