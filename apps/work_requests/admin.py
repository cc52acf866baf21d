"""
Admin configuration for work_requests app.

Adds and edits are routed through the request services; status only
changes through the mark_completed action.
"""

from django import forms
from django.contrib import admin, messages
from django.core.exceptions import ValidationError
from django.utils.html import format_html

from .models import RequestItem, Requester
from .services import RequestPatch, complete_request, create_request, update_request


class RequestItemAdminForm(forms.ModelForm):
    """Admin form with the same input rules as the create form."""

    class Meta:
        model = RequestItem
        fields = ('requester_name', 'task_type', 'quantity', 'due_date', 'notes')

    def clean_requester_name(self):
        name = self.cleaned_data.get('requester_name', '').strip()
        if not name:
            raise forms.ValidationError('Requester name is required.')
        return name

    def clean_quantity(self):
        quantity = self.cleaned_data.get('quantity')
        if quantity is not None and quantity < 1:
            raise forms.ValidationError('Quantity must be at least 1.')
        return quantity


@admin.register(RequestItem)
class RequestItemAdmin(admin.ModelAdmin):
    """Admin for RequestItem model."""

    form = RequestItemAdminForm

    list_display = (
        'requester_name', 'task_type_id', 'quantity', 'due_date',
        'status_display', 'estimated_minutes', 'is_overdue_display', 'created_at'
    )
    list_filter = ('status', 'due_date', 'created_at')
    search_fields = ('requester_name', 'notes')
    ordering = ('due_date', 'created_at')
    date_hierarchy = 'due_date'
    actions = ['mark_completed']

    # Status only moves forward through the mark_completed action
    readonly_fields = ('status', 'estimated_minutes', 'created_at', 'updated_at', 'completed_at')

    fieldsets = (
        (None, {
            'fields': ('requester_name', 'task_type', 'quantity', 'notes')
        }),
        ('Status & Schedule', {
            'fields': ('status', 'due_date', 'estimated_minutes')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'completed_at'),
            'classes': ('collapse',)
        }),
    )

    def save_model(self, request, obj, form, change):
        if not change:
            created = create_request(
                task_type_id=obj.task_type_id,
                requester_name=obj.requester_name,
                quantity=obj.quantity,
                due_date=obj.due_date,
                notes=obj.notes,
            )
            obj.pk = created.pk
            obj.refresh_from_db()
            return

        patch = RequestPatch()
        if 'quantity' in form.changed_data:
            patch.quantity = obj.quantity
        if 'task_type' in form.changed_data:
            patch.task_type_id = obj.task_type_id
        if 'due_date' in form.changed_data:
            patch.due_date = obj.due_date
        if 'notes' in form.changed_data:
            patch.notes = obj.notes

        if patch.is_empty():
            obj.save()
        else:
            update_request(obj, patch)

    @admin.action(description='Mark selected requests as completed')
    def mark_completed(self, request, queryset):
        completed = 0
        for item in queryset.filter(status=RequestItem.Status.PENDING):
            try:
                complete_request(item)
            except ValidationError as e:
                self.message_user(request, f'{item}: {e.messages[0]}', messages.ERROR)
                continue
            completed += 1
        self.message_user(request, f'{completed} request(s) marked as completed.', messages.SUCCESS)

    def status_display(self, obj):
        """Colour-coded status."""
        colours = {
            RequestItem.Status.PENDING: '#d97706',
            RequestItem.Status.COMPLETED: '#16a34a',
        }
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            colours.get(obj.status, '#000'), obj.get_status_display()
        )
    status_display.short_description = 'Status'
    status_display.admin_order_field = 'status'

    def is_overdue_display(self, obj):
        if obj.is_overdue:
            return format_html('<span style="color: #dc2626;">Overdue</span>')
        return ''
    is_overdue_display.short_description = 'Overdue'


@admin.register(Requester)
class RequesterAdmin(admin.ModelAdmin):
    """Admin for the requester directory."""

    list_display = ('name', 'department', 'employee_id', 'is_active', 'updated_at')
    list_filter = ('is_active', 'department')
    search_fields = ('name', 'department', 'employee_id')
    ordering = ('name',)

    readonly_fields = ('created_at', 'updated_at')

    def has_delete_permission(self, request, obj=None):
        """Requesters are retired via is_active, never deleted."""
        return False
