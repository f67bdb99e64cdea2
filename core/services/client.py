"""
HTTP client for the inbox API.

Calls never raise for network or HTTP problems; they return a
``FetchResult`` whose ``ok`` flag tells the caller whether ``data`` can be
used.  A failed fetch means "nothing to present", not an unclassified
request.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

import requests
from requests.utils import quote
import structlog
from django.conf import settings

from core.domain import InboxRequest
from core.services.presenter import parse_instant

logger = structlog.get_logger(__name__)

T = TypeVar('T')


def _decode(item) -> InboxRequest:
    # a record the presenter cannot date is as unusable as a malformed one
    request = InboxRequest.from_dict(item)
    parse_instant(request.last_modified_date)
    return request


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    data: Optional[T] = None
    error: Optional[str] = None
    status: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def not_found(self) -> bool:
        return self.status == 404


class InboxClient:
    def __init__(self, base_url: Optional[str] = None, *, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or settings.INBOX_API_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else settings.INBOX_API_TIMEOUT
        self.session = session or requests.Session()

    def _get(self, path: str):
        url = f'{self.base_url}{path}'
        try:
            r = self.session.get(url, timeout=self.timeout, headers={'Accept': 'application/json'})
        except requests.RequestException as exc:
            logger.warning('inbox_fetch_failed', url=url, error=str(exc))
            return None, FetchResult(error=str(exc))
        if r.status_code >= 400:
            logger.warning('inbox_fetch_failed', url=url, status=r.status_code)
            return None, FetchResult(error=f'HTTP {r.status_code} for {url}', status=r.status_code)
        try:
            return r.json(), None
        except ValueError as exc:
            logger.warning('inbox_fetch_failed', url=url, status=r.status_code, error='invalid JSON')
            return None, FetchResult(error=f'invalid JSON from {url}: {exc}', status=r.status_code)

    def get_all_requests(self) -> FetchResult[List[InboxRequest]]:
        body, failure = self._get('/requests')
        if failure:
            return failure
        try:
            items = [_decode(item) for item in body]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            return FetchResult(error=f'unexpected response shape: {exc!r}', status=200)
        return FetchResult(data=items, status=200)

    def get_request_by_id(self, request_id: str) -> FetchResult[InboxRequest]:
        body, failure = self._get(f'/requests/{quote(str(request_id), safe="")}')
        if failure:
            return failure
        try:
            item = _decode(body)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            return FetchResult(error=f'unexpected response shape: {exc!r}', status=200)
        return FetchResult(data=item, status=200)
