"""
URL configuration for the smart inbox project.

The `urlpatterns` list routes URLs to views.  This module includes the
inbox API routes provided by the core app and the Prometheus metrics
endpoint.  OpenAPI documentation is exposed at ``/swagger/`` and
``/redoc/``.
"""
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="Smart Inbox API",
    default_version='v1',
    description="Read-only access to clinical inbox requests.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('', include('core.routers')),
    # Exposes /metrics
    path('', include('django_prometheus.urls')),
    # Swagger and ReDoc
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
