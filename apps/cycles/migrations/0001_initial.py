import uuid
from decimal import Decimal
import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Cycle',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('status', models.CharField(choices=[('open', 'Open'), ('locked', 'Locked'), ('completed', 'Completed')], default='open', max_length=20)),
                ('shared_password', models.CharField(blank=True, max_length=128, null=True)),
                ('markup_ratio', models.DecimalField(decimal_places=3, default=Decimal('1.000'), max_digits=6, validators=[django.core.validators.MinValueValidator(Decimal('0.001'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'order_cycles',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['status'], name='cycles_status_idx')],
            },
        ),
    ]
