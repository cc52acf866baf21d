"""
Tests for request lifecycle services.
"""

from datetime import datetime, timedelta
from types import SimpleNamespace
from unittest import mock

import pytest
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.utils import timezone

from apps.work_requests.models import RequestItem, Requester
from apps.work_requests.services import (
    RequestPatch, complete_request, create_request, derive_estimated_minutes,
    load_all_requests, load_requesters, pending_requests, update_request,
)


# =============================================================================
# Estimated minutes
# =============================================================================

class TestDeriveEstimatedMinutes:

    def test_per_unit_times_quantity(self):
        task_type = SimpleNamespace(estimated_time_per_unit=0.5)
        assert derive_estimated_minutes(task_type, 10) == 5

    def test_unresolved_task_type(self):
        assert derive_estimated_minutes(None, 10) == 0

    def test_malformed_task_type(self):
        assert derive_estimated_minutes(SimpleNamespace(), 10) == 0
        assert derive_estimated_minutes(
            SimpleNamespace(estimated_time_per_unit=None), 10
        ) == 0


class TestRequestPatch:

    def test_empty(self):
        assert RequestPatch().is_empty()
        assert not RequestPatch(notes='').is_empty()

    def test_touches_estimate(self):
        assert RequestPatch(quantity=3).touches_estimate
        assert RequestPatch(task_type_id=2).touches_estimate
        assert not RequestPatch(notes='x').touches_estimate


# =============================================================================
# Create
# =============================================================================

@pytest.mark.django_db
class TestCreateRequest:

    def test_creates_pending_with_estimate(self, pending_request):
        assert pending_request.status == RequestItem.Status.PENDING
        assert pending_request.estimated_minutes == 5
        assert pending_request.completed_at is None
        assert pending_request.notes == 'Rack B'

    def test_unresolved_task_type_stores_zero(self, db):
        item = create_request(
            task_type_id=424242,
            requester_name='Ito',
            quantity=3,
            due_date=timezone.localdate(),
        )

        item.refresh_from_db()
        assert item.task_type_id == 424242
        assert item.estimated_minutes == 0

    @pytest.mark.parametrize('overrides', [
        {'requester_name': ''},
        {'requester_name': '   '},
        {'task_type_id': None},
        {'due_date': None},
        {'quantity': 0},
        {'quantity': -1},
        {'quantity': 2.5},
        {'quantity': True},
    ])
    def test_rejects_invalid_input(self, hanger_type, overrides):
        kwargs = {
            'task_type_id': hanger_type.pk,
            'requester_name': 'Sato',
            'quantity': 1,
            'due_date': timezone.localdate(),
        }
        kwargs.update(overrides)

        with pytest.raises(ValidationError):
            create_request(**kwargs)
        assert RequestItem.objects.count() == 0


# =============================================================================
# Update
# =============================================================================

@pytest.mark.django_db
class TestUpdateRequest:

    def test_quantity_recomputes_estimate(self, pending_request):
        update_request(pending_request, RequestPatch(quantity=20))
        pending_request.refresh_from_db()

        assert pending_request.quantity == 20
        assert pending_request.estimated_minutes == 10

    def test_task_type_change_recomputes_estimate(self, pending_request, pipe_type):
        update_request(pending_request, RequestPatch(task_type_id=pipe_type.pk))
        pending_request.refresh_from_db()

        assert pending_request.task_type_id == pipe_type.pk
        assert pending_request.estimated_minutes == pytest.approx(2)

    def test_unresolved_lookup_keeps_previous_estimate(self, pending_request):
        update_request(pending_request, RequestPatch(task_type_id=777, quantity=40))
        pending_request.refresh_from_db()

        assert pending_request.task_type_id == 777
        assert pending_request.quantity == 40
        assert pending_request.estimated_minutes == 5

    def test_task_type_edit_applies_on_next_quantity_change(self, pending_request, hanger_type):
        from apps.task_types.services import update_task_type
        update_task_type(hanger_type, estimated_seconds=60)

        update_request(pending_request, RequestPatch(quantity=10))
        pending_request.refresh_from_db()

        assert pending_request.estimated_minutes == 10

    def test_fields_without_estimate_impact(self, pending_request):
        new_due = pending_request.due_date + timedelta(days=7)

        update_request(pending_request, RequestPatch(due_date=new_due, notes=' moved '))
        pending_request.refresh_from_db()

        assert pending_request.due_date == new_due
        assert pending_request.notes == 'moved'
        assert pending_request.estimated_minutes == 5

    def test_empty_patch_is_noop(self, pending_request):
        updated_at = pending_request.updated_at
        update_request(pending_request, RequestPatch())
        pending_request.refresh_from_db()

        assert pending_request.updated_at == updated_at

    def test_rejects_invalid_quantity(self, pending_request):
        with pytest.raises(ValidationError):
            update_request(pending_request, RequestPatch(quantity=0))


# =============================================================================
# Complete
# =============================================================================

@pytest.mark.django_db
class TestCompleteRequest:

    def test_sets_status_and_completed_at(self, pending_request):
        complete_request(pending_request)
        pending_request.refresh_from_db()

        assert pending_request.is_completed
        assert pending_request.completed_at is not None

    def test_completed_is_terminal(self, pending_request):
        complete_request(pending_request)
        completed_at = pending_request.completed_at

        with pytest.raises(ValidationError):
            complete_request(pending_request)

        pending_request.refresh_from_db()
        assert pending_request.completed_at == completed_at

    def test_editing_completed_request_keeps_completion_month(self, pending_request):
        from apps.analytics.services import compute_monthly_stats

        complete_request(pending_request)
        march = timezone.make_aware(datetime(2024, 3, 20, 10, 0))
        RequestItem.objects.filter(pk=pending_request.pk).update(completed_at=march)
        pending_request.refresh_from_db()

        update_request(pending_request, RequestPatch(notes='late note'))

        stats = compute_monthly_stats(load_all_requests().items)
        assert [s.month for s in stats] == ['2024-03']


# =============================================================================
# Loading
# =============================================================================

@pytest.mark.django_db
class TestLoadAllRequests:

    def test_ordered_by_due_date(self, pending_request, overdue_request):
        result = load_all_requests()

        assert result.ok
        assert result.items == [overdue_request, pending_request]

    def test_database_error_gives_empty_state(self):
        with mock.patch.object(
            RequestItem.objects, 'order_by', side_effect=DatabaseError('down')
        ):
            result = load_all_requests()

        assert result.items == []
        assert result.error == 'Requests could not be loaded.'

    def test_dangling_task_type_still_loads(self, db):
        create_request(
            task_type_id=31337, requester_name='Ito', quantity=1,
            due_date=timezone.localdate(),
        )
        assert len(load_all_requests().items) == 1

    def test_pending_requests(self, pending_request, overdue_request):
        complete_request(pending_request)
        assert pending_requests(load_all_requests().items) == [overdue_request]


@pytest.mark.django_db
def test_is_overdue(pending_request, overdue_request):
    assert overdue_request.is_overdue
    assert not pending_request.is_overdue

    complete_request(overdue_request)
    assert not overdue_request.is_overdue


@pytest.mark.django_db
class TestLoadRequesters:

    def test_active_sorted_by_name(self):
        suzuki = Requester.objects.create(name='Suzuki', department='Assembly')
        ito = Requester.objects.create(name='Ito')
        Requester.objects.create(name='Abe', is_active=False)

        result = load_requesters()

        assert result.ok
        assert result.items == [ito, suzuki]

    def test_empty_directory(self):
        result = load_requesters()

        assert result.ok
        assert result.items == []

    def test_database_error_gives_empty_state(self):
        with mock.patch.object(
            Requester.objects, 'filter', side_effect=DatabaseError('down')
        ):
            result = load_requesters()

        assert result.items == []
        assert result.error == 'Requester directory could not be loaded.'
