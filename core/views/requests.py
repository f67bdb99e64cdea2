"""
Inbox request endpoints.

``/requests`` and ``/requests/<id>`` return the raw request records exactly
as the inbox frontend consumes them.  ``/inbox`` additionally attaches the
derived display values of each request, all computed against the same
``now`` so relative times agree with each other.
"""
from __future__ import annotations

import structlog
from django.utils import timezone
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.serializers.request import InboxQuerySerializer, InboxRequestSerializer, InboxRowSerializer
from core.services.presenter import present
from core.services.requests import get_all_requests, get_request_by_id

logger = structlog.get_logger(__name__)


@swagger_auto_schema(method='get', responses={200: InboxRequestSerializer(many=True)})
@api_view(['GET'])
def list_requests(request):
    """Return every request in the inbox."""
    requests = get_all_requests()
    return Response(InboxRequestSerializer(requests, many=True).data)


@swagger_auto_schema(method='get', responses={200: InboxRequestSerializer(), 404: 'Request not found'})
@api_view(['GET'])
def request_detail(request, request_id: str):
    """Return a single request, or 404 when the id is unknown."""
    item = get_request_by_id(request_id)
    if item is None:
        logger.info('request_not_found', request_id=request_id)
        return Response({'message': 'Request not found'}, status=status.HTTP_404_NOT_FOUND)
    return Response(InboxRequestSerializer(item).data)


@swagger_auto_schema(method='get', query_serializer=InboxQuerySerializer,
                     responses={200: InboxRowSerializer(many=True)})
@api_view(['GET'])
def inbox(request):
    """Return the requests together with their display values.

    Query params:
      - tz: optional IANA time zone for ``formattedTimestamp``
    """
    q = InboxQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    tz = q.validated_data.get('tz')

    now = timezone.now()
    rows = [(r, present(r, now, tz)) for r in get_all_requests()]
    return Response({
        'ok': True,
        'syncedAt': now.isoformat(),
        'data': InboxRowSerializer(rows, many=True).data,
    })
