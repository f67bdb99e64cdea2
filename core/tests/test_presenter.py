from datetime import datetime, timedelta, timezone as dt_timezone
from zoneinfo import ZoneInfo

import pytest

from core.domain import InboxRequest
from core.services import presenter as p

NOW = datetime(2025, 6, 8, 12, 0, 0, tzinfo=dt_timezone.utc)


def ago(**kwargs):
    return NOW - timedelta(**kwargs)


def make_request(**overrides):
    data = {
        'type': 'renewal',
        'id': '1',
        'status': 'new',
        'isRead': False,
        'patientName': 'John Smith',
        'requestDate': '2025-06-08T00:00:00.000Z',
        'lastModifiedDate': '2025-06-08T11:01:47.567Z',
        'description': 'Test description',
        'estimatedTimeSec': 151,
        'assignment': {'assignDate': '2025-06-08T11:01:47.567Z', 'assignedTo': 'Dr. Johnson'},
        'isUrgent': False,
    }
    data.update(overrides)
    return InboxRequest.from_dict(data)


@pytest.mark.parametrize('request_type, icon', [
    ('renewal', 'assets/icons/medicine.svg'),
    ('freeText', 'assets/icons/message.svg'),
    ('labReport', 'assets/icons/icon_labs.svg'),
])
def test_type_icon(request_type, icon):
    assert p.type_icon(request_type) == icon


@pytest.mark.parametrize('request_type, label', [
    ('renewal', 'Medication'),
    ('labReport', 'Lab Results'),
    ('freeText', 'Message'),
])
def test_category_label_and_class(request_type, label):
    assert p.category_label(request_type) == label
    assert p.category_class(request_type) == f'category-{request_type}'
    assert p.type_class(request_type) == f'type-{request_type}'


@pytest.mark.parametrize('request_type', ['referral', '', 'RENEWAL'])
def test_unknown_type_falls_back(request_type):
    assert p.type_icon(request_type) == p.UNKNOWN_ICON
    assert p.category_label(request_type) == 'Request'
    assert p.category_class(request_type) == f'category-{request_type}'


def test_priority_urgent_beats_abnormal():
    for abnormal in ([], ['High glucose'], None):
        assert p.priority_class(True, abnormal) == 'priority-urgent'
        assert p.priority_badge_class(True, abnormal) == 'urgent'
        assert p.priority_label(True, abnormal) == 'Urgent'
        assert p.has_alerts(True, abnormal) is True


def test_priority_attention_for_abnormal_results():
    assert p.priority_class(False, ['High glucose']) == 'priority-attention'
    assert p.priority_badge_class(False, ['High glucose']) == 'attention'
    assert p.priority_label(False, ['High glucose']) == 'Attention'
    assert p.has_alerts(False, ['High glucose']) is True


@pytest.mark.parametrize('abnormal', [[], None, ()])
def test_priority_routine(abnormal):
    assert p.priority_class(False, abnormal) == 'priority-routine'
    assert p.priority_badge_class(False, abnormal) == ''
    assert p.priority_label(False, abnormal) == ''
    assert p.has_alerts(False, abnormal) is False


def test_formatted_timestamp_uses_given_zone():
    instant = '2025-06-08T11:01:47.567Z'
    assert p.formatted_timestamp(instant, dt_timezone.utc) == '11:01 08/06/2025'
    assert p.formatted_timestamp(instant, ZoneInfo('Asia/Tokyo')) == '20:01 08/06/2025'


def test_formatted_timestamp_zero_pads(settings):
    settings.TIME_ZONE = 'UTC'
    assert p.formatted_timestamp('2025-01-02T03:04:00Z') == '03:04 02/01/2025'


@pytest.mark.parametrize('delta, expected', [
    (timedelta(0), 'Just now'),
    (timedelta(seconds=59), 'Just now'),
    (timedelta(seconds=60), '1 min. ago'),
    (timedelta(minutes=5), '5 min. ago'),
    (timedelta(minutes=30), '30 min. ago'),
    (timedelta(minutes=59, seconds=59), '59 min. ago'),
    (timedelta(hours=1), '1 hr. ago'),
    (timedelta(hours=3), '3 hr. ago'),
    (timedelta(hours=23, minutes=59), '23 hr. ago'),
    (timedelta(hours=24), 'Yesterday'),
    (timedelta(hours=47), 'Yesterday'),
    (timedelta(days=2), '2 days ago'),
    (timedelta(days=6, hours=23), '6 days ago'),
    (timedelta(days=7), '1 wk. ago'),
    (timedelta(days=20), '2 wk. ago'),
])
def test_relative_time_buckets(delta, expected):
    assert p.relative_time(NOW - delta, NOW) == expected


def test_relative_time_accepts_iso_strings():
    assert p.relative_time('2025-06-08T09:00:00Z', '2025-06-08T12:00:00Z') == '3 hr. ago'


def test_future_timestamps_clamp_to_now():
    future = NOW + timedelta(hours=2)
    assert p.relative_time(future, NOW) == 'Just now'
    assert p.time_age_class(future, NOW) == 'age-recent'


@pytest.mark.parametrize('delta, expected', [
    (timedelta(minutes=10), 'age-recent'),
    (timedelta(minutes=59, seconds=59), 'age-recent'),
    (timedelta(hours=1), 'age-today'),
    (timedelta(hours=5), 'age-today'),
    (timedelta(hours=24), 'age-aging'),
    (timedelta(hours=48), 'age-aging'),
    (timedelta(hours=72), 'age-old'),
    (timedelta(days=5), 'age-old'),
])
def test_time_age_class(delta, expected):
    assert p.time_age_class(NOW - delta, NOW) == expected


@pytest.mark.parametrize('seconds, expected', [
    (0, '0 sec.'),
    (45, '45 sec.'),
    (59, '59 sec.'),
    (60, '1 min.'),
    (90, '2 min.'),
    (120, '2 min.'),
    (150, '3 min.'),
    (151, '3 min.'),
    (1199, '20 min.'),
    (1200, '20+ min.'),
    (1863, '31+ min.'),
])
def test_estimated_time(seconds, expected):
    assert p.estimated_time(seconds) == expected


@pytest.mark.parametrize('name, expected', [
    ('Dr. John Smith', 'JS'),
    ('Jane Doe', 'JD'),
    ('Johnson', 'JO'),
    ('Dr. Johnson', 'JO'),
    ('dr emily carter', 'EC'),
    ('MD Patel', 'PA'),
    ('M.D. Ana Lima', 'AL'),
    ('Drew Barry', 'DB'),
    ('  Mary   Ann  Jones ', 'MJ'),
    ('J', '??'),
    ('Dr.', '??'),
    ('', '??'),
    (None, '??'),
])
def test_doctor_initials(name, expected):
    assert p.doctor_initials(name) == expected


def test_panels_display_and_count():
    assert p.panels_display([]) == ''
    assert p.panels_display(None) == ''
    assert p.panels_display(['CBC', 'Lipid Panel']) == 'CBC, Lipid Panel'
    assert p.panels_count(['CBC', 'Lipid Panel', 'Metabolic Panel']) == 3
    assert p.panels_count(None) == 0
    assert p.panels_label(['CBC']) == 'panel'
    assert p.panels_label(['CBC', 'Lipid Panel']) == 'panels'


def test_abnormal_results_and_labels_display():
    assert p.abnormal_results_display(['High glucose', 'Low iron']) == 'High glucose, Low iron'
    assert p.abnormal_results_display(None) == ''
    assert p.labels_display(['Rx', 'Clinical']) == 'Rx, Clinical'


def test_read_class():
    assert p.read_class(False) == 'unread'
    assert p.read_class(True) == ''


def test_present_builds_full_view():
    req = make_request(
        type='labReport',
        isUrgent=False,
        abnormalResults=['High glucose'],
        panels=['CBC'],
        lastModifiedDate='2025-06-08T11:30:00Z',
        estimatedTimeSec=1863,
        assignment={'assignDate': '2025-06-08T11:30:00Z', 'assignedTo': 'Dr. John Smith'},
    )
    view = p.present(req, NOW, dt_timezone.utc)
    assert view.category_label == 'Lab Results'
    assert view.priority_class == 'priority-attention'
    assert view.relative_time == '30 min. ago'
    assert view.time_age_class == 'age-recent'
    assert view.formatted_timestamp == '11:30 08/06/2025'
    assert view.estimated_time == '31+ min.'
    assert view.doctor_initials == 'JS'
    assert view.panels_count == 1
    assert view.panels_label == 'panel'

    data = view.to_dict()
    assert data['typeIcon'] == 'assets/icons/icon_labs.svg'
    assert data['priorityBadgeClass'] == 'attention'
    assert data['hasAlerts'] is True
    assert data['readClass'] == 'unread'


def test_present_is_idempotent():
    req = make_request(labels=['Rx'])
    assert p.present(req, NOW) == p.present(req, NOW)
    assert p.present(req, NOW).to_dict() == p.present(req, NOW).to_dict()
