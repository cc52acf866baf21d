from django.apps import AppConfig


class TaskTypesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.task_types'
    verbose_name = 'Task Types'
