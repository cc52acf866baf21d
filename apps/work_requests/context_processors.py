"""
Context processors for work_requests app.

Provides the outstanding workload for the navigation badge.
"""

import logging

from django.db import DatabaseError
from django.db.models import Count, Sum

logger = logging.getLogger(__name__)


def workload_summary(request):
    """
    Add the pending workload to template context.

    Returns:
        - nav_workload: WorkloadSnapshot of pending requests (zeros when
          the database cannot be read)
    """
    from apps.analytics.services import WorkloadSnapshot
    from apps.work_requests.models import RequestItem

    try:
        totals = RequestItem.objects.filter(
            status=RequestItem.Status.PENDING
        ).aggregate(count=Count('id'), minutes=Sum('estimated_minutes'))
    except DatabaseError as e:
        logger.warning(f'Workload summary unavailable: {e}')
        return {'nav_workload': WorkloadSnapshot()}

    minutes = totals['minutes'] or 0
    return {
        'nav_workload': WorkloadSnapshot(
            pending_count=totals['count'] or 0,
            total_estimated_minutes=minutes,
            total_estimated_hours=minutes / 60,
        )
    }
