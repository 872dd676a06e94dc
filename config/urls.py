"""URL configuration for the turf booking project.

The `urlpatterns` list routes URLs to views. It includes the Django admin,
each app's API routes and the OpenAPI schema served by drf-spectacular.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore

from apps.slots.views import healthz

urlpatterns = [
    path('admin/', admin.site.urls),
    path('healthz/', healthz, name='healthz'),
    # Application URLs
    path('api/bookings/', include('apps.bookings.urls')),
    path('api/slots/', include('apps.slots.urls')),
    # API schema
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/schema/swagger-ui/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]
