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
            name='StockMovement',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('movement_type', models.CharField(choices=[('IN', 'In'), ('OUT', 'Out'), ('ADJUST', 'Adjust')], db_index=True, max_length=8, verbose_name='movement type')),
                ('quantity', models.DecimalField(decimal_places=2, help_text='Positive for IN/OUT; signed and non-zero for ADJUST', max_digits=14, verbose_name='quantity')),
                ('reference_type', models.CharField(choices=[('RECEIVING', 'Receiving'), ('ADJUSTMENT', 'Adjustment'), ('OPNAME', 'Stock opname'), ('SALE', 'Sale'), ('RETURN', 'Return')], max_length=12, verbose_name='reference type')),
                ('reference_id', models.UUIDField(verbose_name='reference ID')),
                ('note', models.CharField(blank=True, max_length=500, null=True, verbose_name='note')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('effective_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='effective at')),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='companies.company', verbose_name='company')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
                ('variant', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='stock_movements', to='catalog.productvariant', verbose_name='variant')),
            ],
            options={
                'verbose_name': 'stock movement',
                'verbose_name_plural': 'stock movements',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['company', 'variant'], name='stock_company_variant_idx'),
                    models.Index(fields=['company', 'created_at'], name='stock_company_created_idx'),
                    models.Index(fields=['reference_type', 'reference_id'], name='stock_reference_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(models.Q(('movement_type__in', ['IN', 'OUT']), ('quantity__gt', 0)), models.Q(('movement_type', 'ADJUST'), models.Q(('quantity', 0), _negated=True)), _connector='OR'), name='stock_movement_quantity_sign'),
                ],
            },
        ),
    ]
