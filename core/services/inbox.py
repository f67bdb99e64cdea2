"""
Inbox state: what a screen listing the requests needs to know.

``Inbox`` starts out loading, then holds either the fetched requests or a
user-facing error message, along with the time of the last successful
sync.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

import structlog
from django.utils import timezone

from core.domain import InboxRequest
from core.services.client import InboxClient
from core.services.presenter import DerivedView, present, relative_time

logger = structlog.get_logger(__name__)

LOAD_ERROR_MESSAGE = 'Failed to load requests. Please ensure the backend server is running.'
EMPTY_MESSAGE = 'No requests found'


class Inbox:
    def __init__(self, client: InboxClient):
        self.client = client
        self.requests: List[InboxRequest] = []
        self.loading = True
        self.error: Optional[str] = None
        self.last_sync_time: Optional[datetime] = None

    def load(self, now: Optional[datetime] = None) -> bool:
        """Fetch all requests; return True when the inbox now holds fresh data."""
        self.loading = True
        result = self.client.get_all_requests()
        if result.ok:
            self.requests = list(result.data or [])
            self.error = None
            self.last_sync_time = now or timezone.now()
        else:
            logger.error('inbox_load_failed', error=result.error, status=result.status)
            self.requests = []
            self.error = LOAD_ERROR_MESSAGE
        self.loading = False
        return result.ok

    @property
    def is_empty(self) -> bool:
        return not self.loading and self.error is None and not self.requests

    def sync_time_display(self, now: Optional[datetime] = None) -> str:
        if self.last_sync_time is None:
            return ''
        return relative_time(self.last_sync_time, now or timezone.now())

    def rows(self, now: Optional[datetime] = None) -> List[Tuple[InboxRequest, DerivedView]]:
        now = now or timezone.now()
        return [(r, present(r, now)) for r in self.requests]
