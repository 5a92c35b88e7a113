import datetime

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Chantier',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('address', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
        ),
        migrations.CreateModel(
            name='WorkPhase',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('group_id', models.PositiveIntegerField(blank=True, null=True)),
                ('sequence_number', models.PositiveIntegerField(default=1)),
                ('label', models.CharField(blank=True, max_length=200)),
                ('start_date', models.DateField()),
                ('end_date', models.DateField()),
                ('start_hour', models.TimeField(default=datetime.time(8, 0))),
                ('end_hour', models.TimeField(default=datetime.time(17, 0))),
                ('duration_hours', models.FloatField(default=8)),
                ('budget_hours', models.FloatField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('assignee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='assigned_phases', to=settings.AUTH_USER_MODEL)),
                ('chantier', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='phases', to='planning.chantier')),
            ],
            options={
                'ordering': ['chantier', 'group_id', 'start_date', 'start_hour', 'sequence_number'],
                'indexes': [models.Index(fields=['chantier', 'group_id'], name='phase_chain_idx')],
            },
        ),
    ]
