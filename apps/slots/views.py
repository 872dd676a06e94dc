"""API views for the slot domain."""

from __future__ import annotations

import structlog
from django.db import connection  # type: ignore
from django.http import JsonResponse  # type: ignore
from django.utils.dateparse import parse_date  # type: ignore
from django.views.decorators.csrf import csrf_exempt  # type: ignore
from django.views.decorators.http import require_http_methods  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .models import Slot
from .serializers import MaintenanceSlotSerializer, SlotSerializer
from .services import (
    SlotAlreadyExists,
    add_maintenance_slot,
    remove_slot,
    slots_for_date,
    upcoming_slot_exceptions,
)

logger = structlog.get_logger(__name__)


class SlotViewSet(viewsets.GenericViewSet):
    """Slot listings and operator maintenance."""

    queryset = Slot.objects.all()
    serializer_class = SlotSerializer

    def get_serializer_class(self):  # type: ignore
        if self.action == "maintenance":
            return MaintenanceSlotSerializer
        return SlotSerializer

    @action(detail=False, methods=["get"], url_path=r"date/(?P<slot_date>[^/]+)")
    def by_date(self, request, slot_date=None):  # type: ignore
        try:
            parsed = parse_date(slot_date or "")
        except ValueError:
            parsed = None
        if parsed is None:
            return Response(
                {"detail": "Invalid date format. Use YYYY-MM-DD."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        serializer = SlotSerializer(slots_for_date(parsed), many=True)
        return Response(serializer.data)

    @action(detail=False, methods=["get"])
    def exceptions(self, request):  # type: ignore
        serializer = SlotSerializer(upcoming_slot_exceptions(), many=True)
        return Response(serializer.data)

    @action(detail=False, methods=["post"])
    def maintenance(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            slot = add_maintenance_slot(data["slotDate"], data["slotTime"])
        except SlotAlreadyExists as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(
            {"message": "Maintenance slot added successfully.", "slot": SlotSerializer(slot).data},
            status=status.HTTP_201_CREATED,
        )

    def destroy(self, request, pk=None):  # type: ignore
        try:
            remove_slot(int(pk))
        except (ValueError, Slot.DoesNotExist):
            return Response({"detail": "Slot not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response({"message": "Slot removed successfully."}, status=status.HTTP_200_OK)


@csrf_exempt
@require_http_methods(["GET"])
def healthz(request):
    """Health check endpoint for load balancers and containers"""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        logger.info("healthz.ok", database="connected")
        return JsonResponse({"status": "healthy", "database": "connected"}, status=200)
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.error("healthz.fail", error=str(exc))
        return JsonResponse({"status": "unhealthy", "error": str(exc)}, status=503)
