import uuid

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
            name='AuditLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('company_id', models.UUIDField(db_index=True, verbose_name='company ID')),
                ('action', models.CharField(db_index=True, max_length=100, verbose_name='action')),
                ('target_type', models.CharField(blank=True, default='', max_length=60, verbose_name='target type')),
                ('target_id', models.CharField(blank=True, db_index=True, default='', max_length=40, verbose_name='target ID')),
                ('metadata', models.JSONField(blank=True, null=True, verbose_name='metadata')),
                ('timestamp', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='timestamp')),
                ('actor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='audit_logs', to=settings.AUTH_USER_MODEL, verbose_name='actor')),
            ],
            options={
                'verbose_name': 'audit log',
                'verbose_name_plural': 'audit logs',
                'ordering': ['-timestamp'],
                'indexes': [
                    models.Index(fields=['company_id', 'timestamp'], name='audit_company_ts_idx'),
                    models.Index(fields=['target_type', 'target_id'], name='audit_target_idx'),
                    models.Index(fields=['actor', 'timestamp'], name='audit_actor_ts_idx'),
                ],
            },
        ),
    ]
