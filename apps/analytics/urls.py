"""
URL configuration for analytics app.
"""

from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    path('', views.analytics_dashboard, name='dashboard'),
    path('months/<str:month>/', views.month_detail, name='month_detail'),
    path('export/', views.export_csv, name='export_csv'),
]
