from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='TaskType',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('estimated_time_per_unit', models.FloatField(help_text='Minutes required to complete one unit')),
                ('unit', models.CharField(choices=[('piece', 'Piece'), ('sheet', 'Sheet'), ('pole', 'Pole'), ('machine', 'Machine'), ('set', 'Set'), ('run', 'Run'), ('case', 'Case')], default='piece', max_length=20)),
                ('is_active', models.BooleanField(db_index=True, default=True, help_text='Inactive task types are hidden from selection but kept for history')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'task type',
                'verbose_name_plural': 'task types',
                'ordering': ['name'],
            },
        ),
    ]
