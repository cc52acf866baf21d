"""
Forms for work_requests app.

Includes:
- RequestItemForm: Create a new request against an active task type
- RequestEditForm: Inline edit of quantity, due date and notes
"""

from django import forms

from apps.task_types.models import TaskType
from .services import RequestPatch, load_requesters

REQUESTER_DATALIST_ID = 'requester-directory'

INPUT_CLASS = (
    'block w-full rounded-md border-gray-300 shadow-sm '
    'focus:border-orange-400 focus:ring-orange-400 sm:text-sm'
)


class RequestItemForm(forms.Form):
    """
    Form for creating requests.

    Only active task types are offered; each choice shows its per-unit time.
    """

    requester_name = forms.CharField(
        max_length=255,
        label='Requested by',
        widget=forms.TextInput(attrs={
            'class': INPUT_CLASS,
            'placeholder': 'Who is asking?',
        }),
    )
    task_type = forms.ModelChoiceField(
        queryset=TaskType.objects.none(),
        empty_label='-- Select a task type --',
        widget=forms.Select(attrs={
            'class': INPUT_CLASS,
        }),
    )
    quantity = forms.IntegerField(
        min_value=1,
        initial=1,
        widget=forms.NumberInput(attrs={
            'class': INPUT_CLASS,
            'min': 1,
        }),
    )
    due_date = forms.DateField(
        widget=forms.DateInput(attrs={
            'type': 'date',
            'class': INPUT_CLASS,
        }),
    )
    notes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={
            'class': INPUT_CLASS,
            'rows': 3,
            'placeholder': 'Anything the operator should know...',
        }),
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        # Suggestions only; any name typed in is accepted
        directory = load_requesters()
        self.requesters = directory.items
        self.requester_error = directory.error
        self.fields['requester_name'].widget.attrs['list'] = REQUESTER_DATALIST_ID

        self.fields['task_type'].queryset = TaskType.objects.filter(is_active=True).order_by('name')
        self.fields['task_type'].label_from_instance = lambda obj: (
            f"{obj.name} ({obj.estimated_seconds_per_unit}s/{obj.get_unit_display().lower()})"
        )

    def clean_requester_name(self):
        name = self.cleaned_data.get('requester_name', '').strip()
        if not name:
            raise forms.ValidationError('Requester name is required.')
        return name


class RequestEditForm(forms.Form):
    """Inline edit form for a pending request row."""

    quantity = forms.IntegerField(
        min_value=1,
        widget=forms.NumberInput(attrs={
            'class': 'w-20 border border-gray-300 rounded px-2 py-1',
            'min': 1,
        }),
    )
    due_date = forms.DateField(
        widget=forms.DateInput(
            format='%Y-%m-%d',
            attrs={
                'type': 'date',
                'class': 'border border-gray-300 rounded px-2 py-1',
            },
        ),
    )
    notes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={
            'class': 'w-full border border-gray-300 rounded px-2 py-1',
            'rows': 2,
        }),
    )

    def __init__(self, *args, instance=None, **kwargs):
        self.instance = instance
        if instance is not None and 'initial' not in kwargs:
            kwargs['initial'] = {
                'quantity': instance.quantity,
                'due_date': instance.due_date,
                'notes': instance.notes,
            }
        super().__init__(*args, **kwargs)

    def to_patch(self):
        """Build a RequestPatch holding only the fields that changed."""
        data = self.cleaned_data
        patch = RequestPatch()
        if self.instance is None or data['quantity'] != self.instance.quantity:
            patch.quantity = data['quantity']
        if self.instance is None or data['due_date'] != self.instance.due_date:
            patch.due_date = data['due_date']
        if self.instance is None or data['notes'] != self.instance.notes:
            patch.notes = data['notes']
        return patch
