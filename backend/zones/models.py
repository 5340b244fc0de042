from typing import Optional

from django.core.validators import MinValueValidator
from django.db import models

from geo.geometry import Geometry, Point, parse_geometry


class DeliveryZone(models.Model):
    """Модель зоны доставки"""
    name = models.CharField(max_length=120, unique=True, verbose_name='Название')
    description = models.CharField(max_length=255, null=True, blank=True, verbose_name='Описание')
    color = models.CharField(
        max_length=10,
        null=True,
        blank=True,
        verbose_name='Цвет',
        help_text='Цвет зоны на карте (hex)'
    )
    active = models.BooleanField(default=True, verbose_name='Активна')
    polygon = models.JSONField(
        verbose_name='Полигон',
        help_text='GeoJSON Polygon или MultiPolygon, координаты [lon, lat]'
    )
    centroid_latitude = models.FloatField(null=True, blank=True, verbose_name='Широта центроида')
    centroid_longitude = models.FloatField(null=True, blank=True, verbose_name='Долгота центроида')
    coverage_radius_km = models.FloatField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0.0)],
        verbose_name='Радиус покрытия (км)'
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Создана')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Обновлена')

    class Meta:
        verbose_name = 'Зона доставки'
        verbose_name_plural = 'Зоны доставки'
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def geometry(self) -> Geometry:
        """Разобранная геометрия зоны"""
        return parse_geometry(self.polygon)

    @property
    def centroid(self) -> Optional[Point]:
        """Центроид зоны или None, если он не задан"""
        if self.centroid_latitude is None or self.centroid_longitude is None:
            return None
        return Point(latitude=self.centroid_latitude, longitude=self.centroid_longitude)


class ZoneTariff(models.Model):
    """Тариф зоны для диапазона расстояний [distance_min_km, distance_max_km)"""
    zone = models.ForeignKey(
        DeliveryZone,
        on_delete=models.CASCADE,
        related_name='tariffs',
        verbose_name='Зона'
    )
    distance_min_km = models.FloatField(
        default=0.0,
        validators=[MinValueValidator(0.0)],
        verbose_name='Минимальное расстояние (км)',
        help_text='Включительно'
    )
    distance_max_km = models.FloatField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0.0)],
        verbose_name='Максимальное расстояние (км)',
        help_text='Не включительно. Пусто - без ограничения'
    )
    base_cost = models.FloatField(validators=[MinValueValidator(0.0)], verbose_name='Базовая стоимость')
    cost_per_km = models.FloatField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0.0)],
        verbose_name='Стоимость за км'
    )
    surcharge = models.FloatField(default=0.0, validators=[MinValueValidator(0.0)], verbose_name='Надбавка')

    class Meta:
        verbose_name = 'Тариф зоны'
        verbose_name_plural = 'Тарифы зон'
        ordering = ['distance_min_km', 'id']

    def __str__(self):
        upper = f'{self.distance_max_km} км' if self.distance_max_km is not None else '∞'
        return f'{self.zone.name}: {self.distance_min_km} км - {upper}'
