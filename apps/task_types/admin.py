"""
Admin configuration for task_types app.
"""

from django.contrib import admin
from .models import TaskType


@admin.register(TaskType)
class TaskTypeAdmin(admin.ModelAdmin):
    """Admin for TaskType model."""
    
    list_display = ('name', 'estimated_time_per_unit', 'seconds_display', 'unit', 'is_active', 'updated_at')
    list_filter = ('is_active', 'unit')
    search_fields = ('name',)
    ordering = ('name',)
    
    readonly_fields = ('created_at', 'updated_at')
    
    fieldsets = (
        (None, {
            'fields': ('name', 'estimated_time_per_unit', 'unit', 'is_active')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def seconds_display(self, obj):
        """Show the per-unit duration in seconds."""
        return f"{obj.estimated_seconds_per_unit} s"
    seconds_display.short_description = 'Per unit'

    def has_delete_permission(self, request, obj=None):
        """Task types are retired via is_active, never deleted."""
        return False
