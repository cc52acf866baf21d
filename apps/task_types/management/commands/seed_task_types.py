"""
Management command to load the default task types.

Usage:
    python manage.py seed_task_types

The command is idempotent - it does nothing when an active task type
already exists.
"""
from django.core.management.base import BaseCommand

from apps.task_types.models import TaskType
from apps.task_types.services import create_task_type


DEFAULT_TASK_TYPES = [
    {
        'name': 'Iron noren hanger inspection',
        'estimated_seconds': 30,
        'unit': TaskType.Unit.PIECE,
    },
    {
        'name': 'P-banner attachment pipe inspection',
        'estimated_seconds': 10,
        'unit': TaskType.Unit.PIECE,
    },
]


class Command(BaseCommand):
    help = 'Load the default task types when none are active'

    def handle(self, *args, **options):
        self.stdout.write('\nSeeding task types...\n')

        existing = TaskType.objects.filter(is_active=True).count()
        if existing:
            self.stdout.write(
                self.style.WARNING(
                    f'↻ Task types already exist ({existing} active). Nothing to do.'
                )
            )
            return

        for entry in DEFAULT_TASK_TYPES:
            task_type = create_task_type(**entry)
            self.stdout.write(
                self.style.SUCCESS(
                    f'✓ Created task type: {task_type.name} (id={task_type.pk})'
                )
            )

        self.stdout.write('')
        self.stdout.write(
            self.style.SUCCESS(f'Done! {len(DEFAULT_TASK_TYPES)} task types configured.')
        )
