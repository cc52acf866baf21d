"""
URL configuration for task_types app.
"""

from django.urls import path
from . import views

app_name = 'task_types'

urlpatterns = [
    path('', views.task_type_list, name='task_type_list'),
    path('create/', views.task_type_create, name='task_type_create'),
    path('<int:pk>/edit/', views.task_type_edit, name='task_type_edit'),
    path('<int:pk>/row/', views.task_type_row, name='task_type_row'),
    path('<int:pk>/deactivate/', views.task_type_deactivate, name='task_type_deactivate'),
]
