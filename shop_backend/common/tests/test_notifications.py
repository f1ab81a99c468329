# common/tests/test_notifications.py

from unittest import mock

from django.test import TestCase, override_settings

from common import notifications
from common.notifications import dispatch, notify_after_commit


def _exploding_dispatcher(event, object_id):
    raise RuntimeError("sms gateway down")


class NotificationHandOffTests(TestCase):
    def setUp(self):
        notifications.outbox.clear()

    def test_dispatch_runs_after_commit_only(self):
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            notify_after_commit("sale_recorded", 7)
            self.assertEqual(notifications.outbox, [])

        self.assertEqual(len(callbacks), 1)
        self.assertEqual(notifications.outbox, [("sale_recorded", 7)])

    @override_settings(NOTIFICATION_DISPATCHER="common.tests.test_notifications._exploding_dispatcher")
    def test_dispatcher_failure_is_logged_not_raised(self):
        with mock.patch.object(notifications.logger, "exception") as log_exception:
            dispatch("repair_finalized", 3)

        log_exception.assert_called_once()
