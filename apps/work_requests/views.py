"""
Views for work_requests app.

Includes:
- Dashboard with pending requests and the outstanding workload
- Request create view with HTMX estimate preview
- Inline (HTMX) edit of pending rows
- Complete action
- Full request list with filtering and sorting
"""

import logging

from django.contrib import messages
from django.core.exceptions import ValidationError
from django.core.paginator import Paginator, EmptyPage, PageNotAnInteger
from django.db import DatabaseError
from django.http import HttpResponse
from django.shortcuts import render, redirect, get_object_or_404
from django.views.decorators.http import require_http_methods, require_POST

from apps.analytics.services import compute_workload_snapshot
from apps.task_types.services import get_task_type_or_none, load_all_task_types
from .filters import RequestFilter, get_sorting_options, apply_sorting
from .forms import RequestItemForm, RequestEditForm
from .models import RequestItem
from .services import (
    create_request, update_request, complete_request,
    derive_estimated_minutes, load_all_requests, pending_requests,
)

logger = logging.getLogger(__name__)


def _task_type_names():
    """Map task type id -> name, including retired types."""
    result = load_all_task_types()
    return {t.id: t.name for t in result.items}


def _row_context(request_item):
    return {
        'item': request_item,
        'task_type_names': _task_type_names(),
    }


# =============================================================================
# Dashboard
# =============================================================================

def dashboard(request):
    """
    Main dashboard: pending requests (earliest due first) plus the
    outstanding workload banner.
    """
    result = load_all_requests()
    if result.error:
        messages.error(request, result.error)

    pending = pending_requests(result.items)
    workload = compute_workload_snapshot(pending)

    context = {
        'requests': pending,
        'workload': workload,
        'overdue_count': sum(1 for r in pending if r.is_overdue),
        'task_type_names': _task_type_names(),
        'load_error': result.error,
    }

    if request.htmx:
        return render(request, 'work_requests/partials/pending_table.html', context)

    return render(request, 'work_requests/dashboard.html', context)


# =============================================================================
# Create
# =============================================================================

@require_http_methods(["GET", "POST"])
def request_create(request):
    """Register a new work request."""
    if request.method == 'POST':
        form = RequestItemForm(request.POST)
        if form.is_valid():
            try:
                request_item = create_request(
                    task_type_id=form.cleaned_data['task_type'].pk,
                    requester_name=form.cleaned_data['requester_name'],
                    quantity=form.cleaned_data['quantity'],
                    due_date=form.cleaned_data['due_date'],
                    notes=form.cleaned_data['notes'],
                )
                messages.success(
                    request,
                    f'Request from {request_item.requester_name} registered.'
                )
                return redirect('work_requests:dashboard')
            except ValidationError as e:
                messages.error(request, ' '.join(e.messages))
            except DatabaseError as e:
                logger.error(f'Failed to create request: {e}')
                messages.error(request, 'Request could not be saved. Please try again.')
    else:
        form = RequestItemForm()

    return render(request, 'work_requests/request_form.html', {
        'form': form,
        'title': 'New Request',
        'submit_text': 'Register',
    })


def estimate_preview(request):
    """
    HTMX endpoint: estimated time for the selected task type and quantity.

    Invalid or missing input renders a zero estimate.
    """
    task_type = get_task_type_or_none(request.GET.get('task_type'))
    try:
        quantity = int(request.GET.get('quantity', 0))
    except (TypeError, ValueError):
        quantity = 0

    return render(request, 'work_requests/partials/estimate_preview.html', {
        'task_type': task_type,
        'quantity': quantity,
        'estimated_minutes': derive_estimated_minutes(task_type, max(quantity, 0)),
    })


# =============================================================================
# Inline Edit
# =============================================================================

@require_http_methods(["GET", "POST"])
def request_edit(request, pk):
    """
    Inline edit of a pending request row.

    GET returns the edit row partial, POST saves and returns the display row.
    Without HTMX, falls back to the full form page.
    """
    request_item = get_object_or_404(RequestItem, pk=pk)

    if request_item.is_completed:
        message = 'Completed requests cannot be edited.'
        if request.htmx:
            return HttpResponse(message, status=400)
        messages.error(request, message)
        return redirect('work_requests:dashboard')

    if request.method == 'POST':
        form = RequestEditForm(request.POST, instance=request_item)
        if form.is_valid():
            try:
                update_request(request_item, form.to_patch())
                if request.htmx:
                    return render(
                        request, 'work_requests/partials/request_row.html',
                        _row_context(request_item)
                    )
                messages.success(request, 'Request updated.')
                return redirect('work_requests:dashboard')
            except ValidationError as e:
                if request.htmx:
                    return HttpResponse(' '.join(e.messages), status=400)
                messages.error(request, ' '.join(e.messages))
            except DatabaseError as e:
                logger.error(f'Failed to update request {pk}: {e}')
                if request.htmx:
                    return HttpResponse('Update failed. Please try again.', status=500)
                messages.error(request, 'Update failed. Please try again.')
    else:
        form = RequestEditForm(instance=request_item)

    if request.htmx:
        context = _row_context(request_item)
        context['form'] = form
        return render(request, 'work_requests/partials/request_edit_row.html', context)

    return render(request, 'work_requests/request_form.html', {
        'form': form,
        'item': request_item,
        'title': f'Edit Request from {request_item.requester_name}',
        'submit_text': 'Save Changes',
    })


def request_row(request, pk):
    """Return the display row for a request (used to cancel inline edits)."""
    request_item = get_object_or_404(RequestItem, pk=pk)
    return render(
        request, 'work_requests/partials/request_row.html',
        _row_context(request_item)
    )


@require_POST
def request_complete(request, pk):
    """Mark a pending request as completed."""
    request_item = get_object_or_404(RequestItem, pk=pk)

    try:
        complete_request(request_item)
        messages.success(request, f'Request from {request_item.requester_name} completed.')
    except ValidationError as e:
        if request.htmx:
            return HttpResponse(' '.join(e.messages), status=400)
        messages.error(request, ' '.join(e.messages))
        return redirect('work_requests:dashboard')

    if request.htmx:
        # Row leaves the pending table
        response = HttpResponse('')
        response['HX-Trigger'] = 'workloadChanged'
        return response

    return redirect('work_requests:dashboard')


# =============================================================================
# Request List View
# =============================================================================

def request_list(request):
    """Every request (pending and completed) with filtering and sorting."""
    request_filter = RequestFilter(request.GET, queryset=RequestItem.objects.all())

    sort_param = request.GET.get('sort', 'due_date')
    queryset = apply_sorting(request_filter.qs, sort_param)

    paginator = Paginator(queryset, 20)
    page = request.GET.get('page', 1)

    try:
        items = paginator.page(page)
    except PageNotAnInteger:
        items = paginator.page(1)
    except EmptyPage:
        items = paginator.page(paginator.num_pages)

    context = {
        'items': items,
        'filter': request_filter,
        'sorting_options': get_sorting_options(),
        'current_sort': sort_param,
        'task_type_names': _task_type_names(),
    }

    if request.htmx:
        return render(request, 'work_requests/partials/request_list_table.html', context)

    return render(request, 'work_requests/request_list.html', context)
