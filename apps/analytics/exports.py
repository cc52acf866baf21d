"""
CSV export of work records.

Rows are built from in-memory snapshots; the view only streams them.
"""

from datetime import date, datetime

from django.conf import settings
from django.utils import timezone

from apps.work_requests.models import RequestItem
from .services import index_task_types, resolve_task_type_name

EXPORT_HEADERS = [
    'Requester', 'Task type', 'Quantity', 'Due date', 'Estimated minutes',
    'Status', 'Created', 'Updated', 'Notes',
]

STATUS_LABELS = dict(RequestItem.Status.choices)


def format_export_date(value):
    """YYYY/MM/DD for dates and (local) datetimes, '' when missing."""
    if value is None:
        return ''
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        value = value.date()
    if isinstance(value, date):
        return value.strftime('%Y/%m/%d')
    return ''


def build_export_rows(requests, task_types):
    """
    One row per request, columns in EXPORT_HEADERS order.

    Unresolved task types are written with the unknown-type label.
    """
    task_types_by_id = index_task_types(task_types)
    rows = []

    for item in requests or []:
        rows.append([
            item.requester_name,
            resolve_task_type_name(item.task_type_id, task_types_by_id),
            item.quantity,
            format_export_date(item.due_date),
            f'{item.estimated_minutes:g}',
            STATUS_LABELS.get(item.status, item.status),
            format_export_date(item.created_at),
            format_export_date(item.updated_at),
            item.notes or '',
        ])

    return rows


def export_filename(today=None):
    """e.g. work_records_2024-05-01.csv"""
    today = today or timezone.localdate()
    prefix = getattr(settings, 'EXPORT_FILENAME_PREFIX', 'work_records')
    return f'{prefix}_{today.isoformat()}.csv'
