import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='DeliveryZone',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=120, unique=True, verbose_name='Название')),
                ('description', models.CharField(blank=True, max_length=255, null=True, verbose_name='Описание')),
                ('color', models.CharField(blank=True, help_text='Цвет зоны на карте (hex)', max_length=10, null=True, verbose_name='Цвет')),
                ('active', models.BooleanField(default=True, verbose_name='Активна')),
                ('polygon', models.JSONField(help_text='GeoJSON Polygon или MultiPolygon, координаты [lon, lat]', verbose_name='Полигон')),
                ('centroid_latitude', models.FloatField(blank=True, null=True, verbose_name='Широта центроида')),
                ('centroid_longitude', models.FloatField(blank=True, null=True, verbose_name='Долгота центроида')),
                ('coverage_radius_km', models.FloatField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(0.0)], verbose_name='Радиус покрытия (км)')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Создана')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Обновлена')),
            ],
            options={
                'verbose_name': 'Зона доставки',
                'verbose_name_plural': 'Зоны доставки',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='ZoneTariff',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('distance_min_km', models.FloatField(default=0.0, help_text='Включительно', validators=[django.core.validators.MinValueValidator(0.0)], verbose_name='Минимальное расстояние (км)')),
                ('distance_max_km', models.FloatField(blank=True, help_text='Не включительно. Пусто - без ограничения', null=True, validators=[django.core.validators.MinValueValidator(0.0)], verbose_name='Максимальное расстояние (км)')),
                ('base_cost', models.FloatField(validators=[django.core.validators.MinValueValidator(0.0)], verbose_name='Базовая стоимость')),
                ('cost_per_km', models.FloatField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(0.0)], verbose_name='Стоимость за км')),
                ('surcharge', models.FloatField(default=0.0, validators=[django.core.validators.MinValueValidator(0.0)], verbose_name='Надбавка')),
                ('zone', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tariffs', to='zones.deliveryzone', verbose_name='Зона')),
            ],
            options={
                'verbose_name': 'Тариф зоны',
                'verbose_name_plural': 'Тарифы зон',
                'ordering': ['distance_min_km', 'id'],
            },
        ),
    ]
