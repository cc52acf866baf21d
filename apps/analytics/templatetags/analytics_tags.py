"""
Custom template filters for analytics.

Filters:
- duration: Minutes as "1h30m"
- percent: Completion rate as "66.7%"
- month_label: "2024-05" as "2024/05"

Usage:
    {% load analytics_tags %}

    {{ stats.total_minutes|duration }}
    {{ stats.completion_rate|percent }}
    {{ stats.month|month_label }}
"""

from django import template

from apps.analytics.services import format_duration

register = template.Library()


@register.filter
def duration(minutes):
    """
    Format a minute value as hours and minutes.

    Examples:
        90 -> "1h30m"
        45 -> "45m"
        None -> "0m"
    """
    return format_duration(minutes)


@register.filter
def percent(rate, places=1):
    """Render a completion rate (0-100) such as 66.67 as "66.7%"."""
    try:
        return f"{float(rate):.{int(places)}f}%"
    except (TypeError, ValueError):
        return "0.0%"


@register.filter
def month_label(key):
    """Display form of a YYYY-MM month key."""
    if not key:
        return ''
    return str(key).replace('-', '/')

