"""
URL configuration for work_tracker project.
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings

urlpatterns = [
    path('admin/', admin.site.urls),
    
    # App URLs
    path('', include('apps.work_requests.urls', namespace='work_requests')),
    path('task-types/', include('apps.task_types.urls', namespace='task_types')),
    path('analytics/', include('apps.analytics.urls', namespace='analytics')),
]

if settings.DEBUG:
    # Debug toolbar
    import debug_toolbar
    urlpatterns = [
        path('__debug__/', include(debug_toolbar.urls)),
    ] + urlpatterns

# Admin site customization
admin.site.site_header = 'Work Tracker Administration'
admin.site.site_title = 'Work Tracker Admin'
admin.site.index_title = 'Welcome to Work Tracker Admin'
