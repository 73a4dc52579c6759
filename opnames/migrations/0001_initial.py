import uuid
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
        ('companies', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='StockOpname',
            fields=[
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('IN_PROGRESS', 'In progress'), ('FINALIZED', 'Finalized'), ('VOID', 'Void')], db_index=True, default='IN_PROGRESS', max_length=12, verbose_name='status')),
                ('note', models.CharField(blank=True, max_length=500, null=True, verbose_name='note')),
                ('started_at', models.DateTimeField(auto_now_add=True, verbose_name='started at')),
                ('finalized_at', models.DateTimeField(blank=True, null=True, verbose_name='finalized at')),
                ('voided_at', models.DateTimeField(blank=True, null=True, verbose_name='voided at')),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='companies.company', verbose_name='company')),
                ('started_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='started by')),
                ('finalized_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='finalized by')),
                ('voided_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='voided by')),
            ],
            options={
                'verbose_name': 'stock opname',
                'verbose_name_plural': 'stock opnames',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['company', 'status'], name='opname_company_status_idx'),
                    models.Index(fields=['company', 'created_at'], name='opname_company_created_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('status', 'IN_PROGRESS')), fields=('company',), name='uniq_active_opname_per_company'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StockOpnameItem',
            fields=[
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('system_qty', models.DecimalField(decimal_places=2, max_digits=14, verbose_name='system quantity')),
                ('counted_qty', models.DecimalField(decimal_places=2, max_digits=14, verbose_name='counted quantity')),
                ('diff_qty', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14, verbose_name='difference')),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='companies.company', verbose_name='company')),
                ('opname', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='opnames.stockopname', verbose_name='opname')),
                ('variant', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='catalog.productvariant', verbose_name='variant')),
            ],
            options={
                'verbose_name': 'stock opname item',
                'verbose_name_plural': 'stock opname items',
                'ordering': ['created_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('opname', 'variant'), name='uniq_opname_variant'),
                ],
            },
        ),
    ]
