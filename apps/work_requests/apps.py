from django.apps import AppConfig


class WorkRequestsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.work_requests'
    verbose_name = 'Work Requests'
