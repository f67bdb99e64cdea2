"""
Display logic for inbox requests.

Every function here is a pure mapping from request fields (and, for the
time based ones, an explicit ``now``) to a display string or CSS class
token.  None of them raise for unknown types, missing sequences or odd
clinician names; they fall back to a neutral value instead.
"""
from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass
from datetime import datetime, timezone as dt_timezone, tzinfo
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Union

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from core.domain import InboxRequest, RequestType

Instant = Union[str, datetime]

UNKNOWN_ICON = 'assets/icons/icon-unknown.svg'
DEFAULT_CATEGORY_LABEL = 'Request'

TYPE_ICONS: Mapping[str, str] = MappingProxyType({
    RequestType.RENEWAL.value: 'assets/icons/medicine.svg',
    RequestType.FREE_TEXT.value: 'assets/icons/message.svg',
    RequestType.LAB_REPORT.value: 'assets/icons/icon_labs.svg',
})

CATEGORY_LABELS: Mapping[str, str] = MappingProxyType({
    RequestType.RENEWAL.value: 'Medication',
    RequestType.LAB_REPORT.value: 'Lab Results',
    RequestType.FREE_TEXT.value: 'Message',
})

_TITLE_RE = re.compile(r'^(?:dr\.?|m\.?d\.?)(?:\s+|$)', re.IGNORECASE)


def parse_instant(value: Instant) -> datetime:
    """Return an aware datetime for an ISO-8601 string or a datetime.

    Naive values are taken to be UTC.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        dt = parse_datetime(value.strip()) if value else None
        if dt is None:
            raise ValueError(f'not an ISO-8601 timestamp: {value!r}')
    if timezone.is_naive(dt):
        dt = timezone.make_aware(dt, dt_timezone.utc)
    return dt


def _elapsed_seconds(instant: Instant, now: Instant) -> float:
    # future timestamps count as "no time elapsed"
    return max((parse_instant(now) - parse_instant(instant)).total_seconds(), 0.0)


# -----------------------------------------------------------------------------
# Type & category
# -----------------------------------------------------------------------------
def type_icon(request_type: str) -> str:
    return TYPE_ICONS.get(request_type, UNKNOWN_ICON)


def type_class(request_type: str) -> str:
    return f'type-{request_type}'


def category_label(request_type: str) -> str:
    return CATEGORY_LABELS.get(request_type, DEFAULT_CATEGORY_LABEL)


def category_class(request_type: str) -> str:
    return f'category-{request_type}'


# -----------------------------------------------------------------------------
# Priority (urgent > abnormal results > routine)
# -----------------------------------------------------------------------------
def _priority(is_urgent: bool, abnormal_results: Optional[Sequence[str]]) -> str:
    if is_urgent:
        return 'urgent'
    if abnormal_results:
        return 'attention'
    return 'routine'


def priority_class(is_urgent: bool, abnormal_results: Optional[Sequence[str]] = None) -> str:
    return f'priority-{_priority(is_urgent, abnormal_results)}'


def priority_badge_class(is_urgent: bool, abnormal_results: Optional[Sequence[str]] = None) -> str:
    level = _priority(is_urgent, abnormal_results)
    return '' if level == 'routine' else level


def priority_label(is_urgent: bool, abnormal_results: Optional[Sequence[str]] = None) -> str:
    return priority_badge_class(is_urgent, abnormal_results).capitalize()


def has_alerts(is_urgent: bool, abnormal_results: Optional[Sequence[str]] = None) -> bool:
    return bool(is_urgent or abnormal_results)


# -----------------------------------------------------------------------------
# Time
# -----------------------------------------------------------------------------
def formatted_timestamp(instant: Instant, tz: Optional[tzinfo] = None) -> str:
    """Render ``instant`` as ``HH:mm DD/MM/YYYY`` in local wall-clock time.

    Local means ``tz`` when given, otherwise the project's ``TIME_ZONE``.
    """
    local = timezone.localtime(parse_instant(instant), tz)
    return local.strftime('%H:%M %d/%m/%Y')


def relative_time(instant: Instant, now: Instant) -> str:
    minutes = math.floor(_elapsed_seconds(instant, now) / 60)
    if minutes < 1:
        return 'Just now'
    if minutes < 60:
        return f'{minutes} min. ago'
    hours = minutes // 60
    if hours < 24:
        return f'{hours} hr. ago'
    days = hours // 24
    if days == 1:
        return 'Yesterday'
    if days < 7:
        return f'{days} days ago'
    return f'{days // 7} wk. ago'


def time_age_class(instant: Instant, now: Instant) -> str:
    hours = _elapsed_seconds(instant, now) / 3600
    if hours < 1:
        return 'age-recent'
    if hours < 24:
        return 'age-today'
    if hours < 72:
        return 'age-aging'
    return 'age-old'


def estimated_time(seconds: int) -> str:
    if seconds >= 1200:
        return f'{seconds // 60}+ min.'
    if seconds >= 60:
        # round half up, not Python's banker's rounding
        return f'{math.floor(seconds / 60 + 0.5)} min.'
    return f'{seconds} sec.'


# -----------------------------------------------------------------------------
# People & lists
# -----------------------------------------------------------------------------
def doctor_initials(name: Optional[str]) -> str:
    if not name:
        return '??'
    parts = _TITLE_RE.sub('', name.strip()).split()
    if len(parts) >= 2:
        return (parts[0][0] + parts[-1][0]).upper()
    if len(parts) == 1 and len(parts[0]) >= 2:
        return parts[0][:2].upper()
    return '??'


def join_display(values: Optional[Sequence[str]]) -> str:
    if not values:
        return ''
    return ', '.join(values)


def panels_display(panels: Optional[Sequence[str]]) -> str:
    return join_display(panels)


def panels_count(panels: Optional[Sequence[str]]) -> int:
    return len(panels) if panels else 0


def panels_label(panels: Optional[Sequence[str]]) -> str:
    return 'panel' if panels_count(panels) == 1 else 'panels'


def abnormal_results_display(abnormal_results: Optional[Sequence[str]]) -> str:
    return join_display(abnormal_results)


def labels_display(labels: Optional[Sequence[str]]) -> str:
    return join_display(labels)


def read_class(is_read: bool) -> str:
    return '' if is_read else 'unread'


# -----------------------------------------------------------------------------
# Whole-request projection
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class DerivedView:
    type_icon: str
    type_class: str
    category_label: str
    category_class: str
    priority_class: str
    priority_badge_class: str
    priority_label: str
    has_alerts: bool
    formatted_timestamp: str
    relative_time: str
    time_age_class: str
    estimated_time: str
    doctor_initials: str
    panels_display: str
    panels_count: int
    panels_label: str
    abnormal_results_display: str
    labels_display: str
    read_class: str

    def to_dict(self) -> dict:
        """camelCase keys, matching the request wire format."""
        def camel(key: str) -> str:
            head, *rest = key.split('_')
            return head + ''.join(w.capitalize() for w in rest)
        return {camel(k): v for k, v in asdict(self).items()}


def present(request: InboxRequest, now: Instant, tz: Optional[tzinfo] = None) -> DerivedView:
    """Derive every display value of ``request`` against one ``now`` snapshot."""
    urgent, abnormal = request.is_urgent, request.abnormal_results
    return DerivedView(
        type_icon=type_icon(request.type),
        type_class=type_class(request.type),
        category_label=category_label(request.type),
        category_class=category_class(request.type),
        priority_class=priority_class(urgent, abnormal),
        priority_badge_class=priority_badge_class(urgent, abnormal),
        priority_label=priority_label(urgent, abnormal),
        has_alerts=has_alerts(urgent, abnormal),
        formatted_timestamp=formatted_timestamp(request.last_modified_date, tz),
        relative_time=relative_time(request.last_modified_date, now),
        time_age_class=time_age_class(request.last_modified_date, now),
        estimated_time=estimated_time(request.estimated_time_sec),
        doctor_initials=doctor_initials(request.assignment.assigned_to),
        panels_display=panels_display(request.panels),
        panels_count=panels_count(request.panels),
        panels_label=panels_label(request.panels),
        abnormal_results_display=abnormal_results_display(abnormal),
        labels_display=labels_display(request.labels),
        read_class=read_class(request.is_read),
    )
