"""
Static request store.

Inbox requests are read once from a JSON fixture (``INBOX_REQUESTS_FILE``)
and served from memory; nothing ever writes them back.
"""
from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Dict, List, Optional

import structlog
from django.conf import settings

from core.domain import InboxRequest
from core.services.presenter import parse_instant

logger = structlog.get_logger(__name__)


class RequestDataError(ValueError):
    """The request fixture is missing or malformed."""


class RequestStore:
    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._requests: Optional[List[InboxRequest]] = None
        self._by_id: Dict[str, InboxRequest] = {}
        self._lock = threading.Lock()

    def _load(self) -> List[InboxRequest]:
        try:
            raw = json.loads(self.path.read_text(encoding='utf-8'))
        except OSError as exc:
            raise RequestDataError(f'cannot read request fixture {self.path}: {exc}') from exc
        except json.JSONDecodeError as exc:
            raise RequestDataError(f'request fixture {self.path} is not valid JSON: {exc}') from exc
        if not isinstance(raw, list):
            raise RequestDataError(f'request fixture {self.path} must contain a JSON array')

        records = []
        for index, item in enumerate(raw):
            try:
                record = InboxRequest.from_dict(item)
                parse_instant(record.last_modified_date)
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                raise RequestDataError(f'invalid request at index {index}: {exc!r}') from exc
            records.append(record)
        logger.info('requests_loaded', path=str(self.path), count=len(records))
        return records

    def _ensure_loaded(self) -> List[InboxRequest]:
        if self._requests is None:
            with self._lock:
                if self._requests is None:
                    records = self._load()
                    # first record wins for duplicate ids
                    by_id: Dict[str, InboxRequest] = {}
                    for r in records:
                        by_id.setdefault(r.id, r)
                    self._by_id = by_id
                    self._requests = records
        return self._requests

    def get_all_requests(self) -> List[InboxRequest]:
        return list(self._ensure_loaded())

    def get_request_by_id(self, request_id: str) -> Optional[InboxRequest]:
        self._ensure_loaded()
        return self._by_id.get(str(request_id))


_store: Optional[RequestStore] = None
_store_lock = threading.Lock()


def get_store() -> RequestStore:
    """Return the process-wide store for ``settings.INBOX_REQUESTS_FILE``."""
    global _store
    with _store_lock:
        if _store is None or _store.path != Path(settings.INBOX_REQUESTS_FILE):
            _store = RequestStore(settings.INBOX_REQUESTS_FILE)
        return _store


def reset_store() -> None:
    global _store
    with _store_lock:
        _store = None


def get_all_requests() -> List[InboxRequest]:
    return get_store().get_all_requests()


def get_request_by_id(request_id: str) -> Optional[InboxRequest]:
    return get_store().get_request_by_id(request_id)
