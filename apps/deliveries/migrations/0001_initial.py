# Generated manually for deliveries app

import uuid
from decimal import Decimal
import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('farmers', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Delivery',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('quantity', models.DecimalField(decimal_places=2, help_text='Liters delivered', max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.1'))])),
                ('quality', models.CharField(choices=[('A', 'Grade A'), ('B', 'Grade B'), ('C', 'Grade C')], max_length=1)),
                ('date', models.DateField()),
                ('time', models.TimeField()),
                ('notes', models.TextField(blank=True)),
                ('amount', models.DecimalField(decimal_places=2, help_text='quantity x price per liter x grade multiplier (UGX)', max_digits=12)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('farmer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='deliveries', to='farmers.farmer')),
            ],
            options={
                'db_table': 'deliveries',
                'ordering': ['-date', '-time', '-created_at'],
                'verbose_name_plural': 'deliveries',
                'indexes': [
                    models.Index(fields=['date'], name='deliveries_date_idx'),
                    models.Index(fields=['farmer', 'date'], name='deliveries_farmer_date_idx'),
                ],
            },
        ),
    ]
