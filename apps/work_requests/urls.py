"""
URL configuration for work_requests app.
"""

from django.urls import path
from . import views

app_name = 'work_requests'

urlpatterns = [
    # Dashboard
    path('', views.dashboard, name='dashboard'),

    # Requests
    path('requests/', views.request_list, name='request_list'),
    path('requests/new/', views.request_create, name='request_create'),
    path('requests/estimate/', views.estimate_preview, name='estimate_preview'),
    path('requests/<int:pk>/edit/', views.request_edit, name='request_edit'),
    path('requests/<int:pk>/row/', views.request_row, name='request_row'),
    path('requests/<int:pk>/complete/', views.request_complete, name='request_complete'),
]
