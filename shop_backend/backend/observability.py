# backend/observability.py

"""
OPTIONAL ERROR REPORTING (Sentry)

Off unless SENTRY_DSN is set. With a DSN the sentry-sdk extra must be
installed (pip install "shop-backend[sentry]"); a missing package fails
settings import instead of silently running unreported.

Internal engine failures (ConsistencyError / StorageError) are logged with
exc_info by common.api and common.transactions; the Django and logging
integrations forward those records as events.
"""

from __future__ import annotations


def init_error_reporting(
    *,
    dsn: str,
    environment: str = "development",
    traces_sample_rate: float = 0.0,
    send_default_pii: bool = False,
) -> bool:
    if not dsn:
        return False

    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        integrations=[DjangoIntegration()],
        traces_sample_rate=traces_sample_rate,
        send_default_pii=send_default_pii,
    )
    return True
