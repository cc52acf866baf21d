"""
Request filters using django-filter.

Provides filtering capabilities for the request list view:
- Search (requester name, notes)
- Status filter (multi-select)
- Task type filter
- Due date filter (overdue, today, this week, next week)
"""

from datetime import timedelta

import django_filters
from django import forms
from django.db.models import Q
from django.utils import timezone

from apps.task_types.models import TaskType
from .models import RequestItem

SELECT_ATTRS = {
    'class': 'block w-full rounded-md border-gray-300 shadow-sm focus:border-orange-400 focus:ring-orange-400 sm:text-sm',
    'hx-get': '',
    'hx-trigger': 'change',
    'hx-target': '#request-list-container',
    'hx-push-url': 'true',
    'hx-include': '[name]',
}


class RequestFilter(django_filters.FilterSet):
    """
    Request filter for the full list view.

    Usage in views:
        filterset = RequestFilter(request.GET, queryset=queryset)
        items = filterset.qs
    """

    search = django_filters.CharFilter(
        method='filter_search',
        label='Search',
        widget=forms.TextInput(attrs={
            'placeholder': 'Search requester or notes...',
            'class': 'block w-full rounded-md border-gray-300 shadow-sm focus:border-orange-400 focus:ring-orange-400 sm:text-sm',
            'hx-get': '',
            'hx-trigger': 'keyup changed delay:300ms',
            'hx-target': '#request-list-container',
            'hx-push-url': 'true',
            'hx-include': '[name]',
        })
    )

    status = django_filters.MultipleChoiceFilter(
        choices=RequestItem.Status.choices,
        widget=forms.CheckboxSelectMultiple(attrs={
            'class': 'h-4 w-4 rounded border-gray-300 text-orange-500 focus:ring-orange-400',
        }),
        label='Status'
    )

    # Includes retired task types so historical requests stay filterable
    task_type = django_filters.ModelChoiceFilter(
        queryset=TaskType.objects.order_by('name'),
        label='Task Type',
        empty_label='All Task Types',
        widget=forms.Select(attrs=SELECT_ATTRS),
    )

    due_filter = django_filters.ChoiceFilter(
        method='filter_due',
        choices=[
            ('', 'Any Due Date'),
            ('overdue', 'Overdue'),
            ('today', 'Due Today'),
            ('this_week', 'Due This Week'),
            ('next_week', 'Due Next Week'),
        ],
        label='Due',
        empty_label=None,
        widget=forms.Select(attrs=SELECT_ATTRS),
    )

    class Meta:
        model = RequestItem
        fields = ['status', 'task_type']

    def filter_search(self, queryset, name, value):
        """Case-insensitive partial match on requester name and notes."""
        if not value:
            return queryset

        return queryset.filter(
            Q(requester_name__icontains=value) |
            Q(notes__icontains=value)
        )

    def filter_due(self, queryset, name, value):
        """Filter by due date using predefined ranges."""
        if not value:
            return queryset

        today = timezone.localdate()

        if value == 'overdue':
            return queryset.filter(
                due_date__lt=today,
                status=RequestItem.Status.PENDING
            )

        elif value == 'today':
            return queryset.filter(due_date=today)

        elif value == 'this_week':
            week_start = today - timedelta(days=today.weekday())
            week_end = week_start + timedelta(days=7)
            return queryset.filter(due_date__gte=week_start, due_date__lt=week_end)

        elif value == 'next_week':
            next_week_start = today - timedelta(days=today.weekday()) + timedelta(days=7)
            next_week_end = next_week_start + timedelta(days=7)
            return queryset.filter(due_date__gte=next_week_start, due_date__lt=next_week_end)

        return queryset


def get_sorting_options():
    """Return available sorting options for the request list."""
    return [
        ('due_date', 'Due Date (Earliest First)'),
        ('-due_date', 'Due Date (Latest First)'),
        ('-created_at', 'Created (Newest First)'),
        ('created_at', 'Created (Oldest First)'),
        ('requester_name', 'Requester (A-Z)'),
        ('-estimated_minutes', 'Estimated Time (Longest First)'),
    ]


def apply_sorting(queryset, sort_param):
    """
    Apply sorting to queryset based on sort parameter.

    Unknown values fall back to due date ascending.
    """
    valid = [option for option, _ in get_sorting_options()]
    if sort_param not in valid:
        sort_param = 'due_date'
    return queryset.order_by(sort_param, 'created_at')
