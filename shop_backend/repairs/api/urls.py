# repairs/api/urls.py

from django.urls import path

from repairs.api.views import (
    RepairFinalizeView,
    RepairListCreateView,
    RepairPartCreateView,
    RepairPartDeleteView,
    RepairReadyListView,
    RepairStatusView,
)

urlpatterns = [
    path("", RepairListCreateView.as_view(), name="repairs"),
    path("ready/", RepairReadyListView.as_view(), name="repairs-ready"),
    path("parts/<int:pk>/", RepairPartDeleteView.as_view(), name="repair-part-delete"),
    path("<int:pk>/parts/", RepairPartCreateView.as_view(), name="repair-parts"),
    path("<int:pk>/status/", RepairStatusView.as_view(), name="repair-status"),
    path("<int:pk>/finalize/", RepairFinalizeView.as_view(), name="repair-finalize"),
]
