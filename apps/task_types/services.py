"""
Service layer for task_types app.

Services:
- seconds_to_minutes / minutes_to_seconds: Authoring unit conversion
- create_task_type: Create a new active task type
- update_task_type: Partial update of name, duration and unit
- deactivate_task_type: Soft delete
- load_active_task_types: Read model for selection lists and analytics
- get_task_type_or_none: Lookup that never raises on a missing row
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from .models import TaskType

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """
    Snapshot returned by the read helpers.

    On failure ``items`` is empty and ``error`` holds a message for the
    page; callers render the empty state instead of inventing records.
    """
    items: List = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None


# =============================================================================
# Unit Conversion
# =============================================================================

def seconds_to_minutes(seconds):
    """Convert a per-unit duration entered in seconds to stored minutes."""
    return seconds / 60


def minutes_to_seconds(minutes):
    """
    Convert stored minutes back to whole seconds for display.

    Rounds half up, so 0.17 minutes shows as 10 seconds.
    """
    if minutes is None:
        return 0
    return int(math.floor(minutes * 60 + 0.5))


def _validate_fields(name, estimated_seconds):
    if not name or not name.strip():
        raise ValidationError("Task type name is required.")
    if estimated_seconds is None or estimated_seconds <= 0:
        raise ValidationError("Estimated time per unit must be greater than zero.")


# =============================================================================
# Mutations
# =============================================================================

def create_task_type(name: str, estimated_seconds, unit: str = TaskType.Unit.PIECE):
    """
    Create a task type from authoring input.

    Args:
        name: Display label (required)
        estimated_seconds: Seconds per unit, must be positive
        unit: One of TaskType.Unit

    Returns:
        Created TaskType instance

    Raises:
        ValidationError: If name is blank, duration is not positive or unit is unknown
    """
    _validate_fields(name, estimated_seconds)

    if unit not in TaskType.Unit.values:
        raise ValidationError(f"Invalid unit: {unit}")

    task_type = TaskType.objects.create(
        name=name.strip(),
        estimated_time_per_unit=seconds_to_minutes(estimated_seconds),
        unit=unit,
        is_active=True,
    )
    logger.info(f'Task type created: "{task_type.name}" (id={task_type.pk})')
    return task_type


def update_task_type(task_type, **kwargs):
    """
    Update task type fields.

    Existing requests keep their estimated minutes; they are only
    recomputed when the request itself is edited.

    Args:
        task_type: TaskType instance to update
        **kwargs: Any of name, estimated_seconds, unit

    Returns:
        Updated TaskType instance
    """
    name = kwargs.get('name', task_type.name)
    estimated_seconds = kwargs.get(
        'estimated_seconds', task_type.estimated_time_per_unit * 60
    )
    _validate_fields(name, estimated_seconds)

    if 'unit' in kwargs and kwargs['unit'] not in TaskType.Unit.values:
        raise ValidationError(f"Invalid unit: {kwargs['unit']}")

    with transaction.atomic():
        task_type.name = name.strip()
        if 'estimated_seconds' in kwargs:
            task_type.estimated_time_per_unit = seconds_to_minutes(estimated_seconds)
        if 'unit' in kwargs:
            task_type.unit = kwargs['unit']
        task_type.save()

    logger.info(f'Task type {task_type.pk} updated')
    return task_type


def deactivate_task_type(task_type):
    """Hide a task type from selection without deleting it."""
    if not task_type.is_active:
        raise ValidationError("Task type is already inactive.")

    task_type.is_active = False
    task_type.save(update_fields=['is_active', 'updated_at'])
    logger.info(f'Task type {task_type.pk} deactivated')
    return task_type


# =============================================================================
# Query Helpers
# =============================================================================

def load_active_task_types():
    """
    Load every active task type sorted by name.

    Returns:
        LoadResult with a list of TaskType instances
    """
    try:
        items = list(TaskType.objects.filter(is_active=True).order_by('name'))
    except DatabaseError as e:
        logger.error(f'Failed to load task types: {e}')
        return LoadResult(items=[], error='Task types could not be loaded.')
    return LoadResult(items=items)


def load_all_task_types():
    """Like load_active_task_types, but includes retired types for history views."""
    try:
        items = list(TaskType.objects.order_by('name'))
    except DatabaseError as e:
        logger.error(f'Failed to load task types: {e}')
        return LoadResult(items=[], error='Task types could not be loaded.')
    return LoadResult(items=items)


def get_task_type_or_none(task_type_id):
    """Return the TaskType with this id, or None when it does not resolve."""
    if not task_type_id:
        return None
    try:
        return TaskType.objects.get(pk=task_type_id)
    except (TaskType.DoesNotExist, ValueError, TypeError):
        return None
    except DatabaseError as e:
        logger.error(f'Task type lookup failed for id={task_type_id}: {e}')
        return None
