"""
Views for analytics app.

Includes:
- Analytics dashboard (monthly, requester and task type stats)
- Month drill-down partial (HTMX)
- CSV export of every request
"""

import csv
import logging
import re

from django.contrib import messages
from django.http import Http404, HttpResponse
from django.shortcuts import render

from apps.task_types.services import load_all_task_types
from apps.work_requests.services import load_all_requests
from .exports import EXPORT_HEADERS, build_export_rows, export_filename
from .services import (
    compute_monthly_stats, compute_requester_stats, compute_request_type_stats,
    compute_workload_snapshot, compute_month_detail,
    index_task_types, resolve_task_type_name,
)

logger = logging.getLogger(__name__)

MONTH_KEY_RE = re.compile(r'^\d{4}-(0[1-9]|1[0-2])$')


def _load_snapshots(request):
    """Load requests and task types, reporting read failures as messages."""
    requests_result = load_all_requests()
    task_types_result = load_all_task_types()

    for result in (requests_result, task_types_result):
        if result.error:
            messages.error(request, result.error)

    return requests_result, task_types_result


def analytics_dashboard(request):
    """
    Analytics dashboard.

    Monthly rows expand into the month drill-down, loaded with HTMX.
    """
    requests_result, task_types_result = _load_snapshots(request)
    items = requests_result.items
    task_types_by_id = index_task_types(task_types_result.items)

    request_type_rows = [
        {
            'stats': stats,
            'name': resolve_task_type_name(stats.request_type, task_types_by_id),
        }
        for stats in compute_request_type_stats(items)
    ]

    return render(request, 'analytics/dashboard.html', {
        'monthly_stats': compute_monthly_stats(items),
        'requester_stats': compute_requester_stats(items),
        'request_type_rows': request_type_rows,
        'workload': compute_workload_snapshot(items),
        'total_requests': len(items),
        'load_error': requests_result.error or task_types_result.error,
    })


def month_detail(request, month):
    """Drill-down for one month of completed work (HTMX partial)."""
    if not MONTH_KEY_RE.match(month):
        raise Http404('Invalid month.')

    requests_result, task_types_result = _load_snapshots(request)
    detail = compute_month_detail(
        requests_result.items, task_types_result.items, month
    )

    template = 'analytics/partials/month_detail.html'
    if not request.htmx:
        template = 'analytics/month_detail.html'

    return render(request, template, {
        'detail': detail,
        'task_type_names': {t.id: t.name for t in task_types_result.items},
    })


def export_csv(request):
    """Download every request as CSV (UTF-8 with BOM)."""
    requests_result, task_types_result = _load_snapshots(request)

    response = HttpResponse(content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{export_filename()}"'
    response.write('\ufeff')

    writer = csv.writer(response)
    writer.writerow(EXPORT_HEADERS)
    writer.writerows(build_export_rows(requests_result.items, task_types_result.items))

    logger.info(f'Exported {len(requests_result.items)} requests to CSV')
    return response
