"""
Views for task_types app.

Includes:
- Task type list with HTMX inline editing
- Task type create view
- Deactivate (soft delete) action
"""

import logging

from django.contrib import messages
from django.core.exceptions import ValidationError
from django.http import HttpResponse
from django.shortcuts import render, redirect, get_object_or_404
from django.views.decorators.http import require_http_methods, require_POST

from .forms import TaskTypeForm
from .models import TaskType
from .services import (
    create_task_type, update_task_type, deactivate_task_type,
    load_active_task_types,
)

logger = logging.getLogger(__name__)


def task_type_list(request):
    """List active task types."""
    result = load_active_task_types()
    if result.error:
        messages.error(request, result.error)

    return render(request, 'task_types/task_type_list.html', {
        'task_types': result.items,
        'load_error': result.error,
    })


@require_http_methods(["GET", "POST"])
def task_type_create(request):
    """Create a new task type."""
    if request.method == 'POST':
        form = TaskTypeForm(request.POST)
        if form.is_valid():
            try:
                task_type = create_task_type(
                    name=form.cleaned_data['name'],
                    estimated_seconds=form.cleaned_data['estimated_seconds'],
                    unit=form.cleaned_data['unit'],
                )
                messages.success(request, f'Task type "{task_type.name}" created.')
                return redirect('task_types:task_type_list')
            except ValidationError as e:
                messages.error(request, ' '.join(e.messages))
            except Exception as e:
                logger.error(f'Failed to create task type: {e}')
                messages.error(request, 'Task type could not be saved. Please try again.')
    else:
        form = TaskTypeForm()

    return render(request, 'task_types/task_type_form.html', {
        'form': form,
        'title': 'Create Task Type',
        'submit_text': 'Create',
    })


@require_http_methods(["GET", "POST"])
def task_type_edit(request, pk):
    """
    Inline edit of a task type row.

    GET returns the edit row partial, POST saves and returns the display row.
    Without HTMX, falls back to the full form page.
    """
    task_type = get_object_or_404(TaskType, pk=pk)

    if request.method == 'POST':
        form = TaskTypeForm(request.POST, instance=task_type)
        if form.is_valid():
            try:
                update_task_type(
                    task_type,
                    name=form.cleaned_data['name'],
                    estimated_seconds=form.cleaned_data['estimated_seconds'],
                    unit=form.cleaned_data['unit'],
                )
                if request.htmx:
                    return render(request, 'task_types/partials/task_type_row.html', {
                        'task_type': task_type,
                    })
                messages.success(request, f'Task type "{task_type.name}" updated.')
                return redirect('task_types:task_type_list')
            except ValidationError as e:
                if request.htmx:
                    return HttpResponse(' '.join(e.messages), status=400)
                messages.error(request, ' '.join(e.messages))
            except Exception as e:
                logger.error(f'Failed to update task type {pk}: {e}')
                if request.htmx:
                    return HttpResponse('Update failed. Please try again.', status=500)
                messages.error(request, 'Update failed. Please try again.')
    else:
        form = TaskTypeForm(instance=task_type)

    if request.htmx:
        return render(request, 'task_types/partials/task_type_edit_row.html', {
            'task_type': task_type,
            'form': form,
        })

    return render(request, 'task_types/task_type_form.html', {
        'form': form,
        'task_type': task_type,
        'title': f'Edit Task Type: {task_type.name}',
        'submit_text': 'Save Changes',
    })


def task_type_row(request, pk):
    """Return the display row for a task type (used to cancel inline edits)."""
    task_type = get_object_or_404(TaskType, pk=pk)
    return render(request, 'task_types/partials/task_type_row.html', {'task_type': task_type})


@require_POST
def task_type_deactivate(request, pk):
    """Retire a task type."""
    task_type = get_object_or_404(TaskType, pk=pk)

    try:
        deactivate_task_type(task_type)
        messages.success(request, f'Task type "{task_type.name}" deactivated.')
    except ValidationError as e:
        messages.error(request, ' '.join(e.messages))

    if request.htmx:
        return HttpResponse('')

    return redirect('task_types:task_type_list')
