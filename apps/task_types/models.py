"""
Task type model.

A task type is a reusable definition of a unit of work together with
its standard duration per unit. Task types are never hard-deleted;
retiring one flips ``is_active`` so historical requests keep resolving.
"""

from django.core.exceptions import ValidationError
from django.db import models


class TaskType(models.Model):
    """
    Named unit of trackable work.

    ``estimated_time_per_unit`` is stored in minutes (fractions allowed,
    e.g. 0.5 for a 30 second inspection). Authoring forms work in seconds.
    """

    class Unit(models.TextChoices):
        PIECE = 'piece', 'Piece'
        SHEET = 'sheet', 'Sheet'
        POLE = 'pole', 'Pole'
        MACHINE = 'machine', 'Machine'
        SET = 'set', 'Set'
        RUN = 'run', 'Run'
        CASE = 'case', 'Case'

    name = models.CharField(max_length=255)
    estimated_time_per_unit = models.FloatField(
        help_text='Minutes required to complete one unit'
    )
    unit = models.CharField(
        max_length=20,
        choices=Unit.choices,
        default=Unit.PIECE,
    )
    is_active = models.BooleanField(
        default=True,
        db_index=True,
        help_text='Inactive task types are hidden from selection but kept for history'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'task type'
        verbose_name_plural = 'task types'
        ordering = ['name']

    def __str__(self):
        return self.name

    def clean(self):
        """Validate the per-unit duration."""
        if self.estimated_time_per_unit is None or self.estimated_time_per_unit <= 0:
            raise ValidationError({
                'estimated_time_per_unit': 'Estimated time per unit must be greater than zero.'
            })

    @property
    def estimated_seconds_per_unit(self):
        """Per-unit duration in whole seconds, as shown on authoring forms."""
        from .services import minutes_to_seconds
        return minutes_to_seconds(self.estimated_time_per_unit)
