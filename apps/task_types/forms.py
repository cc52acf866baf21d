"""
Forms for task_types app.

The per-unit duration is authored in seconds and stored in minutes.
"""

from django import forms

from .models import TaskType
from .services import minutes_to_seconds

INPUT_CLASS = (
    'mt-1 block w-full px-3 py-2 border border-gray-300 rounded-md shadow-sm '
    'focus:outline-none focus:ring-orange-400 focus:border-orange-400 sm:text-sm'
)


class TaskTypeForm(forms.Form):
    """Form for creating and editing task types."""

    name = forms.CharField(
        max_length=255,
        widget=forms.TextInput(attrs={
            'class': INPUT_CLASS,
            'placeholder': 'e.g., Hanger inspection',
        }),
    )
    estimated_seconds = forms.IntegerField(
        min_value=1,
        initial=30,
        label='Seconds per unit',
        widget=forms.NumberInput(attrs={
            'class': INPUT_CLASS,
            'min': 1,
        }),
    )
    unit = forms.ChoiceField(
        choices=TaskType.Unit.choices,
        initial=TaskType.Unit.PIECE,
        widget=forms.Select(attrs={
            'class': INPUT_CLASS,
        }),
    )

    def __init__(self, *args, instance=None, **kwargs):
        """
        Initialize form, pre-filling from an existing task type when editing.

        Args:
            instance: TaskType being edited (optional)
        """
        self.instance = instance
        if instance is not None and 'initial' not in kwargs:
            kwargs['initial'] = {
                'name': instance.name,
                'estimated_seconds': minutes_to_seconds(instance.estimated_time_per_unit),
                'unit': instance.unit,
            }
        super().__init__(*args, **kwargs)

        self.fields['estimated_seconds'].help_text = 'Time needed to finish one unit'

    def clean_name(self):
        name = self.cleaned_data.get('name', '').strip()
        if not name:
            raise forms.ValidationError('Task type name is required.')
        return name

    @property
    def example_preview(self):
        """Preview text for ten units, e.g. "10 units take about 300 seconds (5 min)"."""
        seconds = self.initial.get('estimated_seconds') or self.fields['estimated_seconds'].initial
        if self.is_bound and self.is_valid():
            seconds = self.cleaned_data['estimated_seconds']
        total = seconds * 10
        return f'10 units take about {total} seconds ({round(total / 60)} min)'
