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
            name='PhaseHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('phase_id', models.PositiveBigIntegerField(db_index=True)),
                ('chantier_id', models.PositiveBigIntegerField(db_index=True)),
                ('modified_at', models.DateTimeField()),
                ('action', models.CharField(choices=[('create', 'Création'), ('delete', 'Suppression'), ('date_change', 'Changement de dates'), ('duration_change', 'Changement de durée'), ('assignee_change', 'Changement de poseur'), ('budget_change', 'Changement de budget'), ('update', 'Modification')], max_length=20)),
                ('description', models.TextField(blank=True)),
                ('old_values', models.JSONField(blank=True, default=dict)),
                ('new_values', models.JSONField(blank=True, default=dict)),
                ('modified_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='phase_changes', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name_plural': 'phase history',
                'ordering': ['-modified_at', '-id'],
            },
        ),
    ]
