from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('work_requests', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Requester',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, unique=True)),
                ('department', models.CharField(blank=True, max_length=255)),
                ('employee_id', models.CharField(blank=True, max_length=50)),
                ('is_active', models.BooleanField(db_index=True, default=True, help_text='Inactive requesters are no longer suggested')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'requester',
                'verbose_name_plural': 'requesters',
                'ordering': ['name'],
            },
        ),
    ]
