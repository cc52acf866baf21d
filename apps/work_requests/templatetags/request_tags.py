"""
Custom template tags and filters for work_requests app.

Usage in templates:
    {% load request_tags %}

    {# Filters #}
    {{ item|is_overdue }}
    {{ item.status|status_class }}
    {{ item|task_type_name:task_type_names }}
    {{ item.due_date|format_due_date }}

    {# Tags #}
    {% status_badge item %}
"""

from django import template
from django.conf import settings
from django.utils import timezone
from django.utils.html import format_html

register = template.Library()


# =============================================================================
# FILTERS
# =============================================================================

@register.filter
def is_overdue(item):
    """
    Check if a request is overdue (pending and due date before today).

    Usage: {{ item|is_overdue }}
    """
    if not item:
        return False
    return bool(getattr(item, 'is_overdue', False))


@register.filter
def status_class(status):
    """
    Return CSS class for request status.

    Usage: {{ item.status|status_class }}
    """
    status_classes = {
        'pending': 'status-pending',
        'completed': 'status-completed',
    }
    return status_classes.get(status, '')


@register.filter
def task_type_name(item, names):
    """
    Resolve the task type name of a request from an id -> name map.

    Requests pointing at a missing task type show the unknown-type label.

    Usage: {{ item|task_type_name:task_type_names }}
    """
    fallback = getattr(settings, 'UNKNOWN_TASK_TYPE_LABEL', 'Unknown task type')
    if not item or not names:
        return fallback
    return names.get(getattr(item, 'task_type_id', None)) or fallback


@register.filter
def format_due_date(due_date):
    """
    Format a due date as YYYY/MM/DD with a relative hint.

    Examples:
        today -> "2024/05/01 (today)"
        yesterday -> "2024/04/30 (1 day late)"
    """
    if not due_date:
        return ''

    formatted = due_date.strftime('%Y/%m/%d')
    days = (due_date - timezone.localdate()).days

    if days == 0:
        return f'{formatted} (today)'
    if days == 1:
        return f'{formatted} (tomorrow)'
    if days < 0:
        late = -days
        return f'{formatted} ({late} day{"s" if late != 1 else ""} late)'
    return formatted


# =============================================================================
# TAGS
# =============================================================================

@register.simple_tag
def status_badge(item):
    """
    Generate HTML badge for request status.

    Usage: {% status_badge item %}
    """
    if not item or not item.status:
        return ''

    colors = {
        'pending': 'bg-yellow-100 text-yellow-800',
        'completed': 'bg-green-100 text-green-800',
    }

    color_class = colors.get(item.status, 'bg-gray-100 text-gray-800')

    return format_html(
        '<span class="inline-flex items-center px-2 py-0.5 rounded text-xs font-medium {}">'
        '{}</span>',
        color_class, item.get_status_display()
    )
