import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('task_types', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='RequestItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('requester_name', models.CharField(db_index=True, max_length=255)),
                ('quantity', models.PositiveIntegerField()),
                ('due_date', models.DateField(db_index=True)),
                ('notes', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('pending', 'In progress'), ('completed', 'Completed')], db_index=True, default='pending', max_length=15)),
                ('estimated_minutes', models.FloatField(default=0, help_text='Derived: task type minutes per unit × quantity')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('completed_at', models.DateTimeField(blank=True, help_text='Set once when the request is completed', null=True)),
                ('task_type', models.ForeignKey(db_constraint=False, on_delete=django.db.models.deletion.DO_NOTHING, related_name='requests', to='task_types.tasktype')),
            ],
            options={
                'verbose_name': 'request',
                'verbose_name_plural': 'requests',
                'ordering': ['due_date', 'created_at'],
                'indexes': [models.Index(fields=['status', 'due_date'], name='request_status_due_idx'), models.Index(fields=['status', 'updated_at'], name='request_status_updated_idx')],
            },
        ),
    ]
