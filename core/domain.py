"""
Inbox request records.

Requests arrive as camelCase JSON (from the fixture file or from the API)
and are turned into frozen dataclasses so the presenter can treat them as
immutable values.  Unknown ``type`` strings are kept as-is; only the
presenter decides how to display them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple


class RequestType(str, Enum):
    RENEWAL = 'renewal'
    FREE_TEXT = 'freeText'
    LAB_REPORT = 'labReport'


def _strings(values: Optional[Iterable[Any]]) -> Tuple[str, ...]:
    # absent and empty both collapse to an empty tuple
    if not values:
        return ()
    return tuple(str(v) for v in values)


@dataclass(frozen=True)
class Assignment:
    assign_date: str
    assigned_to: str
    grouping: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Assignment':
        data = data or {}
        return cls(
            assign_date=data.get('assignDate') or '',
            assigned_to=data.get('assignedTo') or '',
            grouping=data.get('grouping'),
        )

    def to_dict(self) -> dict:
        out = {'assignDate': self.assign_date, 'assignedTo': self.assigned_to}
        if self.grouping is not None:
            out['grouping'] = self.grouping
        return out


@dataclass(frozen=True)
class Recommendation:
    value: str
    description: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Recommendation':
        return cls(
            value=data.get('recommendationValue') or '',
            description=data.get('recommendationDescription') or '',
        )

    def to_dict(self) -> dict:
        return {'recommendationValue': self.value, 'recommendationDescription': self.description}


@dataclass(frozen=True)
class InboxRequest:
    id: str
    type: str
    status: str
    is_read: bool
    patient_name: str
    request_date: str
    last_modified_date: str
    description: str
    estimated_time_sec: int
    assignment: Assignment
    is_urgent: bool
    labels: Tuple[str, ...] = field(default_factory=tuple)
    panels: Tuple[str, ...] = field(default_factory=tuple)
    abnormal_results: Tuple[str, ...] = field(default_factory=tuple)
    prescription_ids: Tuple[str, ...] = field(default_factory=tuple)
    recommendation: Optional[Recommendation] = None

    @property
    def request_type(self) -> Optional[RequestType]:
        """The known type of this request, or None for an unrecognised one."""
        try:
            return RequestType(self.type)
        except ValueError:
            return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InboxRequest':
        """Build a request from its camelCase wire shape.

        ``id``, ``type`` and ``lastModifiedDate`` are required; everything
        else falls back to an empty value.  Raises ``KeyError`` or
        ``ValueError`` for records that cannot be used at all.
        """
        recommendation = data.get('recommendation')
        return cls(
            id=str(data['id']),
            type=str(data['type']),
            status=data.get('status') or '',
            is_read=bool(data.get('isRead', False)),
            patient_name=data.get('patientName') or '',
            request_date=data.get('requestDate') or '',
            last_modified_date=str(data['lastModifiedDate']),
            description=data.get('description') or '',
            estimated_time_sec=int(data.get('estimatedTimeSec') or 0),
            assignment=Assignment.from_dict(data.get('assignment')),
            is_urgent=bool(data.get('isUrgent', False)),
            labels=_strings(data.get('labels')),
            panels=_strings(data.get('panels')),
            abnormal_results=_strings(data.get('abnormalResults')),
            prescription_ids=_strings(data.get('prescriptionIds')),
            recommendation=Recommendation.from_dict(recommendation) if recommendation else None,
        )

    def to_dict(self) -> dict:
        out = {
            'type': self.type,
            'id': self.id,
            'status': self.status,
            'isRead': self.is_read,
            'patientName': self.patient_name,
            'requestDate': self.request_date,
            'lastModifiedDate': self.last_modified_date,
            'description': self.description,
            'estimatedTimeSec': self.estimated_time_sec,
            'assignment': self.assignment.to_dict(),
            'isUrgent': self.is_urgent,
        }
        # optional sequences are only emitted when they carry something
        for key, values in (
            ('labels', self.labels),
            ('panels', self.panels),
            ('abnormalResults', self.abnormal_results),
            ('prescriptionIds', self.prescription_ids),
        ):
            if values:
                out[key] = list(values)
        if self.recommendation is not None:
            out['recommendation'] = self.recommendation.to_dict()
        return out
