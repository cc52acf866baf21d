"""
Work request models.

Models:
- RequestItem: One quantified ask for work of a given task type
- Requester: Directory of people who ask for work
"""

from django.db import models
from django.utils import timezone


class RequestItem(models.Model):
    """
    A unit of requested work.

    Status workflow:
    - pending → completed (terminal, never reversed)

    ``estimated_minutes`` is derived from the task type's per-unit time and
    the quantity. It is recomputed when a request is created and whenever an
    edit touches quantity or task type; later task type edits do not cascade.
    """

    class Status(models.TextChoices):
        PENDING = 'pending', 'In progress'
        COMPLETED = 'completed', 'Completed'

    # Weak reference: the request does not own its task type, and a dangling
    # id must still load (it is shown under the unknown-type label).
    task_type = models.ForeignKey(
        'task_types.TaskType',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='requests',
    )
    requester_name = models.CharField(max_length=255, db_index=True)
    quantity = models.PositiveIntegerField()
    due_date = models.DateField(db_index=True)
    notes = models.TextField(blank=True)
    status = models.CharField(
        max_length=15,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    estimated_minutes = models.FloatField(
        default=0,
        help_text='Derived: task type minutes per unit × quantity'
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text='Set once when the request is completed'
    )

    class Meta:
        verbose_name = 'request'
        verbose_name_plural = 'requests'
        ordering = ['due_date', 'created_at']
        indexes = [
            models.Index(fields=['status', 'due_date'], name='request_status_due_idx'),
            models.Index(fields=['status', 'updated_at'], name='request_status_updated_idx'),
        ]

    def __str__(self):
        return f"{self.requester_name}: {self.quantity} × task type {self.task_type_id}"

    @property
    def is_pending(self):
        return self.status == self.Status.PENDING

    @property
    def is_completed(self):
        return self.status == self.Status.COMPLETED

    @property
    def is_overdue(self):
        """Check if a pending request is past its due date."""
        if not self.is_pending or not self.due_date:
            return False
        return self.due_date < timezone.localdate()

    def can_transition_to(self, new_status):
        """Check if status transition is valid."""
        return self.status == self.Status.PENDING and new_status == self.Status.COMPLETED


class Requester(models.Model):
    """
    Directory entry offered when registering a request.

    Requests keep the requester as free text, so renaming or retiring an
    entry never rewrites history.
    """

    name = models.CharField(max_length=255, unique=True)
    department = models.CharField(max_length=255, blank=True)
    employee_id = models.CharField(max_length=50, blank=True)
    is_active = models.BooleanField(
        default=True,
        db_index=True,
        help_text='Inactive requesters are no longer suggested'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'requester'
        verbose_name_plural = 'requesters'
        ordering = ['name']

    def __str__(self):
        if self.department:
            return f"{self.name} ({self.department})"
        return self.name
