"""
URL mappings for the smart inbox API.

Paths mirror those the inbox frontend requests.  Note that trailing
slashes are deliberately omitted.
"""
from django.urls import path

from .views import health
from .views.requests import inbox, list_requests, request_detail

urlpatterns = [
    path('healthz', health.healthz, name='healthz'),
    path('requests', list_requests, name='request-list'),
    path('requests/<str:request_id>', request_detail, name='request-detail'),
    path('inbox', inbox, name='inbox'),
]
