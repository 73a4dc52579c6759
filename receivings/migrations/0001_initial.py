import uuid

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
            name='Receiving',
            fields=[
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('DRAFT', 'Draft'), ('POSTED', 'Posted'), ('VOID', 'Void')], db_index=True, default='DRAFT', max_length=8, verbose_name='status')),
                ('note', models.CharField(blank=True, max_length=500, null=True, verbose_name='note')),
                ('posted_at', models.DateTimeField(blank=True, null=True, verbose_name='posted at')),
                ('voided_at', models.DateTimeField(blank=True, null=True, verbose_name='voided at')),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='companies.company', verbose_name='company')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
            ],
            options={
                'verbose_name': 'receiving',
                'verbose_name_plural': 'receivings',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['company', 'status'], name='receiving_company_status_idx'),
                    models.Index(fields=['company', 'created_at'], name='receiving_company_created_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ReceivingItem',
            fields=[
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('quantity', models.DecimalField(decimal_places=2, max_digits=14, verbose_name='quantity')),
                ('note', models.CharField(blank=True, max_length=300, null=True, verbose_name='note')),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='companies.company', verbose_name='company')),
                ('receiving', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='receivings.receiving', verbose_name='receiving')),
                ('variant', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='catalog.productvariant', verbose_name='variant')),
            ],
            options={
                'verbose_name': 'receiving item',
                'verbose_name_plural': 'receiving items',
                'ordering': ['created_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('receiving', 'variant'), name='uniq_receiving_variant'),
                    models.CheckConstraint(condition=models.Q(('quantity__gt', 0)), name='receiving_item_qty_positive'),
                ],
            },
        ),
    ]
