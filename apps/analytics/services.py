"""
Service layer for analytics app.

Pure aggregation over in-memory request and task type snapshots. Nothing
here touches the database: callers load the collections (see
apps.work_requests.services.load_all_requests) and pass plain sequences.

Services:
- compute_monthly_stats: Completed work per month of completion
- compute_requester_stats: Totals per requester
- compute_request_type_stats: Totals per task type reference
- compute_workload_snapshot: Outstanding (pending) work
- compute_month_detail: Drill-down for one month
- format_duration: Minutes as "1h30m"

Every function accepts empty or None input and returns an empty/zero
result; unresolved task type references fall back to a sentinel label.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from django.conf import settings
from django.utils import timezone
from django.utils.translation import gettext as _

from apps.work_requests.models import RequestItem

COMPLETED = RequestItem.Status.COMPLETED
PENDING = RequestItem.Status.PENDING


@dataclass
class MonthlyStats:
    month: str
    completed_count: int = 0
    total_minutes: float = 0


@dataclass
class RequesterStats:
    requester_name: str
    total_requests: int = 0
    completed_requests: int = 0
    total_minutes: float = 0

    @property
    def completion_rate(self):
        """Completed share of all requests, as a percentage."""
        if not self.total_requests:
            return 0.0
        return self.completed_requests / self.total_requests * 100


@dataclass
class RequestTypeStats:
    request_type: object
    count: int = 0
    total_minutes: float = 0


@dataclass
class WorkloadSnapshot:
    pending_count: int = 0
    total_estimated_minutes: float = 0
    total_estimated_hours: float = 0


@dataclass
class Breakdown:
    count: int = 0
    total_minutes: float = 0


@dataclass
class MonthDetail:
    month: str
    requests: List = field(default_factory=list)
    task_type_breakdown: Dict[str, Breakdown] = field(default_factory=dict)
    requester_breakdown: Dict[str, Breakdown] = field(default_factory=dict)

    @property
    def total_minutes(self):
        return sum(b.total_minutes for b in self.task_type_breakdown.values())


# =============================================================================
# Helpers
# =============================================================================

def unknown_task_type_label():
    return getattr(settings, 'UNKNOWN_TASK_TYPE_LABEL', 'Unknown task type')


def _as_list(items):
    return list(items) if items else []


def _minutes(request):
    value = getattr(request, 'estimated_minutes', 0)
    return value if isinstance(value, (int, float)) else 0


def _is_completed(request):
    return getattr(request, 'status', None) == COMPLETED


def _is_pending(request):
    return getattr(request, 'status', None) == PENDING


def completion_timestamp(request):
    """
    Timestamp a completed request is grouped under.

    ``completed_at`` when recorded, otherwise ``updated_at`` (rows completed
    before completed_at existed).
    """
    return getattr(request, 'completed_at', None) or getattr(request, 'updated_at', None)


def month_key(value) -> Optional[str]:
    """
    Return the ``YYYY-MM`` key for a date or datetime, or None.

    Aware datetimes are converted to the configured local time zone first.
    """
    if value is None:
        return None
    if isinstance(value, datetime) and timezone.is_aware(value):
        value = timezone.localtime(value)
    try:
        return value.strftime('%Y-%m')
    except AttributeError:
        return None


def index_task_types(task_types):
    """Map task type id -> task type."""
    return {getattr(t, 'id', None): t for t in _as_list(task_types)}


def resolve_task_type_name(task_type_id, task_types_by_id):
    """Display name for a task type id, or the unknown-type label."""
    task_type = task_types_by_id.get(task_type_id)
    name = getattr(task_type, 'name', None)
    return name or unknown_task_type_label()


# =============================================================================
# Aggregators
# =============================================================================

def compute_monthly_stats(requests) -> List[MonthlyStats]:
    """
    Completed work grouped by month of completion, most recent month first.

    Pending requests never contribute; months with no completed requests
    produce no entry.
    """
    by_month: Dict[str, MonthlyStats] = {}

    for request in _as_list(requests):
        if not _is_completed(request):
            continue
        key = month_key(completion_timestamp(request))
        if key is None:
            continue
        stats = by_month.setdefault(key, MonthlyStats(month=key))
        stats.completed_count += 1
        stats.total_minutes += _minutes(request)

    return sorted(by_month.values(), key=lambda s: s.month, reverse=True)


def compute_requester_stats(requests) -> List[RequesterStats]:
    """
    Totals per requester name, busiest requester first.

    total_requests counts every status; completed_requests and
    total_minutes only count completed requests. Ties keep the order in
    which requesters first appear.
    """
    by_name: Dict[str, RequesterStats] = {}

    for request in _as_list(requests):
        name = getattr(request, 'requester_name', '')
        stats = by_name.setdefault(name, RequesterStats(requester_name=name))
        stats.total_requests += 1
        if _is_completed(request):
            stats.completed_requests += 1
            stats.total_minutes += _minutes(request)

    return sorted(by_name.values(), key=lambda s: s.total_requests, reverse=True)


def compute_request_type_stats(requests) -> List[RequestTypeStats]:
    """
    Totals per task type reference, most requested first.

    count includes every status, total_minutes only completed requests.
    """
    by_type: Dict[object, RequestTypeStats] = {}

    for request in _as_list(requests):
        type_id = getattr(request, 'task_type_id', None)
        stats = by_type.setdefault(type_id, RequestTypeStats(request_type=type_id))
        stats.count += 1
        if _is_completed(request):
            stats.total_minutes += _minutes(request)

    return sorted(by_type.values(), key=lambda s: s.count, reverse=True)


def compute_workload_snapshot(requests) -> WorkloadSnapshot:
    """Outstanding work: number of pending requests and their estimated time."""
    pending = [r for r in _as_list(requests) if _is_pending(r)]
    total_minutes = sum(_minutes(r) for r in pending)

    return WorkloadSnapshot(
        pending_count=len(pending),
        total_estimated_minutes=total_minutes,
        total_estimated_hours=total_minutes / 60,
    )


def compute_month_detail(requests, task_types, target_month) -> MonthDetail:
    """
    Drill-down for one month of completed work.

    Args:
        requests: All requests
        task_types: Task types used to resolve display names
        target_month: Month key, "YYYY-MM"

    Returns:
        MonthDetail with the matching requests plus breakdowns by task
        type name and by requester name
    """
    task_types_by_id = index_task_types(task_types)
    detail = MonthDetail(month=target_month)

    for request in _as_list(requests):
        if not _is_completed(request):
            continue
        if month_key(completion_timestamp(request)) != target_month:
            continue

        detail.requests.append(request)
        minutes = _minutes(request)

        type_name = resolve_task_type_name(
            getattr(request, 'task_type_id', None), task_types_by_id
        )
        by_type = detail.task_type_breakdown.setdefault(type_name, Breakdown())
        by_type.count += 1
        by_type.total_minutes += minutes

        requester = getattr(request, 'requester_name', '')
        by_requester = detail.requester_breakdown.setdefault(requester, Breakdown())
        by_requester.count += 1
        by_requester.total_minutes += minutes

    return detail


# =============================================================================
# Formatting
# =============================================================================

def format_duration(minutes) -> str:
    """
    Format a minute value as hours and minutes.

    Hours are floored and the leftover minutes rounded half up. A leftover
    that rounds up to 60 is shown as 0, so 119.6 gives "1h" and 59.6 gives
    "0m".

    Examples:
        0 -> "0m"
        45 -> "45m"
        60 -> "1h"
        90 -> "1h30m"
        119.6 -> "1h"
        59.6 -> "0m"
        None / negative -> "0m"
    """
    try:
        minutes = float(minutes)
    except (TypeError, ValueError):
        minutes = 0.0

    if not math.isfinite(minutes) or minutes < 0:
        minutes = 0.0

    hours = int(minutes // 60)
    remaining = int(math.floor(minutes % 60 + 0.5)) % 60

    if hours == 0:
        return _('%(minutes)dm') % {'minutes': remaining}
    if remaining == 0:
        return _('%(hours)dh') % {'hours': hours}
    return _('%(hours)dh%(minutes)dm') % {'hours': hours, 'minutes': remaining}
