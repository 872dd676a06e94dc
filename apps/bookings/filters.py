"""Filters for booking listings."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class BookingFilter(django_filters.FilterSet):
    booking_date = django_filters.DateFilter(field_name="booking_date")
    booking_date_from = django_filters.DateFilter(field_name="booking_date", lookup_expr="gte")
    booking_date_to = django_filters.DateFilter(field_name="booking_date", lookup_expr="lte")

    class Meta:
        model = Booking
        fields = ["user", "booking_date"]
