"""
Service layer for work_requests app.

All business logic for request operations is centralized here.

Services:
- derive_estimated_minutes: Estimated minutes from task type and quantity
- create_request: Create a new pending request
- update_request: Apply a RequestPatch, recomputing estimates when needed
- complete_request: Mark a pending request completed
- load_all_requests: Full snapshot of requests for list and analytics views
- load_requesters: Active requester directory for the create form
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from apps.task_types.services import LoadResult, get_task_type_or_none
from .models import RequestItem, Requester

logger = logging.getLogger(__name__)


# =============================================================================
# Estimated Minutes
# =============================================================================

def derive_estimated_minutes(task_type, quantity) -> float:
    """
    Estimated minutes for ``quantity`` units of ``task_type``.

    Returns 0 when the task type did not resolve (None) or the inputs
    are not numbers.

    Examples:
        task type at 0.5 min/unit, quantity 10 -> 5.0
        None, quantity 10 -> 0
    """
    if task_type is None:
        return 0
    try:
        return task_type.estimated_time_per_unit * quantity
    except (AttributeError, TypeError):
        return 0


@dataclass
class RequestPatch:
    """
    Partial edit of a request. ``None`` means "field not part of the edit".

    When quantity or task_type_id is present, update_request recomputes
    estimated_minutes explicitly.
    """
    quantity: Optional[int] = None
    task_type_id: Optional[int] = None
    due_date: Optional[date] = None
    notes: Optional[str] = None

    @property
    def touches_estimate(self):
        return self.quantity is not None or self.task_type_id is not None

    def is_empty(self):
        return (
            self.quantity is None and self.task_type_id is None
            and self.due_date is None and self.notes is None
        )


def _validate_quantity(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError("Quantity must be a positive whole number.")


# =============================================================================
# Mutations
# =============================================================================

def create_request(
    task_type_id,
    requester_name: str,
    quantity: int,
    due_date: date,
    notes: str = ''
):
    """
    Central request creation function.

    Args:
        task_type_id: Id of the requested TaskType (required)
        requester_name: Person asking for the work (required)
        quantity: Number of units, positive integer (required)
        due_date: Target completion date (required)
        notes: Free text (optional)

    Returns:
        Created RequestItem instance

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    if not requester_name or not requester_name.strip():
        raise ValidationError("Requester name is required.")

    if not task_type_id:
        raise ValidationError("Task type is required.")

    if not due_date:
        raise ValidationError("Due date is required.")

    _validate_quantity(quantity)

    task_type = get_task_type_or_none(task_type_id)
    if task_type is None:
        logger.warning(
            f'Creating request with unresolved task type id={task_type_id}; '
            f'estimated minutes set to 0'
        )

    with transaction.atomic():
        request_item = RequestItem.objects.create(
            task_type_id=task_type_id,
            requester_name=requester_name.strip(),
            quantity=quantity,
            due_date=due_date,
            notes=notes.strip() if notes else '',
            status=RequestItem.Status.PENDING,
            estimated_minutes=derive_estimated_minutes(task_type, quantity),
        )

    logger.info(
        f'Request {request_item.pk} created for {request_item.requester_name} '
        f'({request_item.quantity} units, {request_item.estimated_minutes:g} min)'
    )
    return request_item


def update_request(request_item, patch: RequestPatch):
    """
    Apply a partial edit to a request.

    When the patch carries quantity or task_type_id, the estimate is
    recomputed from the resolved task type. If that lookup fails the
    previous estimated_minutes is kept as-is.

    Args:
        request_item: RequestItem instance to update
        patch: RequestPatch with the fields to change

    Returns:
        Updated RequestItem instance

    Raises:
        ValidationError: If a patched value is invalid
    """
    if patch.is_empty():
        return request_item

    if patch.quantity is not None:
        _validate_quantity(patch.quantity)

    with transaction.atomic():
        if patch.touches_estimate:
            task_type_id = (
                patch.task_type_id if patch.task_type_id is not None
                else request_item.task_type_id
            )
            quantity = patch.quantity if patch.quantity is not None else request_item.quantity
            task_type = get_task_type_or_none(task_type_id)

            if task_type is not None:
                request_item.estimated_minutes = derive_estimated_minutes(task_type, quantity)
            else:
                logger.warning(
                    f'Request {request_item.pk}: task type id={task_type_id} did not '
                    f'resolve, keeping estimated minutes {request_item.estimated_minutes:g}'
                )

        if patch.quantity is not None:
            request_item.quantity = patch.quantity
        if patch.task_type_id is not None:
            request_item.task_type_id = patch.task_type_id
        if patch.due_date is not None:
            request_item.due_date = patch.due_date
        if patch.notes is not None:
            request_item.notes = patch.notes.strip()

        request_item.save()

    logger.info(f'Request {request_item.pk} updated')
    return request_item


def complete_request(request_item):
    """
    Mark a request as completed.

    Workflow Rules:
    - pending → completed
    - completed is terminal

    Raises:
        ValidationError: If the request is already completed
    """
    if not request_item.can_transition_to(RequestItem.Status.COMPLETED):
        raise ValidationError(
            f"Cannot change status from '{request_item.get_status_display()}' "
            f"to '{RequestItem.Status.COMPLETED.label}'."
        )

    with transaction.atomic():
        request_item.status = RequestItem.Status.COMPLETED
        request_item.completed_at = timezone.now()
        request_item.save()

    logger.info(f'Request {request_item.pk} completed')
    return request_item


# =============================================================================
# Query Helpers
# =============================================================================

def load_all_requests():
    """
    Load every request ordered by due date (earliest first).

    Returns:
        LoadResult with a list of RequestItem instances
    """
    try:
        items = list(RequestItem.objects.order_by('due_date', 'created_at'))
    except DatabaseError as e:
        logger.error(f'Failed to load requests: {e}')
        return LoadResult(items=[], error='Requests could not be loaded.')
    return LoadResult(items=items)


def pending_requests(requests):
    """Filter an in-memory request list down to pending items."""
    return [r for r in requests if r.status == RequestItem.Status.PENDING]


def load_requesters():
    """
    Load active directory entries sorted by name.

    Returns:
        LoadResult with a list of Requester instances; empty (with an
        error message) when the directory cannot be read
    """
    try:
        items = list(Requester.objects.filter(is_active=True).order_by('name'))
    except DatabaseError as e:
        logger.error(f'Failed to load requesters: {e}')
        return LoadResult(items=[], error='Requester directory could not be loaded.')
    return LoadResult(items=items)
