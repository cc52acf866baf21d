"""
Shared database fixtures.
"""

from datetime import timedelta

import pytest
from django.utils import timezone


@pytest.fixture
def hanger_type(db):
    """Task type at 30 seconds (0.5 minutes) per piece."""
    from apps.task_types.services import create_task_type
    return create_task_type(name='Hanger inspection', estimated_seconds=30, unit='piece')


@pytest.fixture
def pipe_type(db):
    """Task type at 12 seconds (0.2 minutes) per piece."""
    from apps.task_types.services import create_task_type
    return create_task_type(name='Pipe inspection', estimated_seconds=12, unit='piece')


@pytest.fixture
def pending_request(hanger_type):
    from apps.work_requests.services import create_request
    return create_request(
        task_type_id=hanger_type.pk,
        requester_name='Sato',
        quantity=10,
        due_date=timezone.localdate() + timedelta(days=3),
        notes='Rack B',
    )


@pytest.fixture
def overdue_request(hanger_type):
    from apps.work_requests.services import create_request
    return create_request(
        task_type_id=hanger_type.pk,
        requester_name='Suzuki',
        quantity=4,
        due_date=timezone.localdate() - timedelta(days=2),
    )
