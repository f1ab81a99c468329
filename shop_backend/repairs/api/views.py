# repairs/api/views.py

"""
REPAIR CENTER API

GET/POST /api/repairs/                  (?status=  ?customer=)
POST     /api/repairs/<id>/parts/       attach a part (takes stock out)
DELETE   /api/repairs/parts/<id>/       detach a part (puts stock back)
POST     /api/repairs/<id>/finalize/    deliver + customer debit + technician credit
POST     /api/repairs/<id>/status/      workflow move (repairing, waiting_parts, ready, cancelled)
GET      /api/repairs/ready/           waiting for pickup
"""

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import ListAPIView, ListCreateAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from repairs.api.serializers import (
    FinalizeRepairSerializer,
    RepairCreateSerializer,
    RepairPartInputSerializer,
    RepairPartSerializer,
    RepairSerializer,
    RepairStatusSerializer,
)
from repairs.models import Repair
from repairs.services.repair_lifecycle import list_ready_for_pickup, update_repair_status
from repairs.services.repair_service import add_part, create_repair, finalize_repair, remove_part


@extend_schema(tags=["repairs"])
class RepairListCreateView(ListCreateAPIView):
    permission_classes = [IsAuthenticated]
    queryset = (
        Repair.objects.select_related("customer", "technician")
        .prefetch_related("parts__product")
        .order_by("-date_received", "-id")
    )
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["status", "customer"]

    def get_serializer_class(self):
        if self.request.method == "POST":
            return RepairCreateSerializer
        return RepairSerializer

    @extend_schema(
        tags=["repairs"],
        request=RepairCreateSerializer,
        responses={201: RepairSerializer},
    )
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        repair = create_repair(
            customer=data["customer"],
            device_model=data["device_model"],
            device_color=data.get("device_color", ""),
            serial_number=data.get("serial_number", ""),
            problem_description=data["problem_description"],
            estimated_cost=data.get("estimated_cost"),
        )
        return Response(RepairSerializer(repair).data, status=status.HTTP_201_CREATED)


class RepairPartCreateView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["repairs"],
        request=RepairPartInputSerializer,
        responses={201: RepairPartSerializer},
    )
    def post(self, request, pk: int):
        s = RepairPartInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        part = add_part(
            repair_id=pk,
            product_id=s.validated_data["product"],
            quantity=s.validated_data["quantity"],
        )
        return Response(RepairPartSerializer(part).data, status=status.HTTP_201_CREATED)


class RepairPartDeleteView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["repairs"], responses={204: None})
    def delete(self, request, pk: int):
        remove_part(part_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RepairFinalizeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["repairs"],
        request=FinalizeRepairSerializer,
        responses={200: RepairSerializer},
    )
    def post(self, request, pk: int):
        s = FinalizeRepairSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        repair = finalize_repair(
            repair_id=pk,
            final_cost=data["final_cost"],
            labor_fee=data.get("labor_fee", 0),
            technician_id=data.get("technician"),
            user=request.user,
        )
        return Response(RepairSerializer(repair).data, status=status.HTTP_200_OK)


class RepairStatusView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["repairs"],
        request=RepairStatusSerializer,
        responses={200: RepairSerializer},
    )
    def post(self, request, pk: int):
        s = RepairStatusSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        repair = update_repair_status(
            pk,
            s.validated_data["status"],
            technician_notes=s.validated_data.get("technician_notes"),
        )
        return Response(RepairSerializer(repair).data, status=status.HTTP_200_OK)


@extend_schema(tags=["repairs"])
class RepairReadyListView(ListAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = RepairSerializer

    def get_queryset(self):
        return list_ready_for_pickup()
