# backend/urls.py
"""
PROJECT URLS

Everything the back office exposes lives under /api/:
- accounting/    parties + ledgers
- products/     stock intake, price inquiry
- sales/         single-item cash/credit sales
- installments/  financed phone sales, schedule, checks
- repairs/       repair intake, parts, finalization

/api/health/ is public and touches the database, so a load balancer sees a
dead connection as 503. The admin path comes from settings (ADMIN_PATH).
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib import admin
from django.db import DatabaseError, connections
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.utils import extend_schema, inline_serializer
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework import serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

logger = logging.getLogger("api")

MODULES = ("accounting", "products", "sales", "installments", "repairs")

_health_schema = inline_serializer(
    name="HealthStatus",
    fields={"status": serializers.CharField(), "db": serializers.CharField()},
)


@extend_schema(responses={200: inline_serializer(name="ApiRoot", fields={"modules": serializers.DictField()})})
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response(
        {
            "message": "Shop Back Office API is running",
            "auth": {"jwt_create": "/api/auth/jwt/create/", "jwt_refresh": "/api/auth/jwt/refresh/"},
            "docs": {"swagger": "/api/docs/", "schema": "/api/schema/"},
            "modules": {name: f"/api/{name}/" for name in MODULES},
        }
    )


@extend_schema(responses={200: _health_schema, 503: _health_schema})
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
    except DatabaseError:
        logger.exception("Health check: database unreachable")
        return Response({"status": "degraded", "db": "down"}, status=503)

    return Response({"status": "ok", "db": "ok"})


admin_path = getattr(settings, "ADMIN_PATH", "admin/").rstrip("/") + "/"

api_urlpatterns = [
    path("", api_root, name="api-root"),
    path("health/", health_check, name="health-check"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("auth/jwt/create/", TokenObtainPairView.as_view(), name="jwt-create"),
    path("auth/jwt/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
    path("accounting/", include("accounting.api.urls")),
    path("products/", include("products.api.urls")),
    path("sales/", include("sales.api.urls")),
    path("installments/", include("installments.api.urls")),
    path("repairs/", include("repairs.api.urls")),
]

urlpatterns = [
    path(admin_path, admin.site.urls),
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]
