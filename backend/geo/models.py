from typing import Optional

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from geo.geometry import Point


class Coordinate(models.Model):
    """Модель для хранения необязательных координат"""
    latitude = models.FloatField(
        null=True,
        blank=True,
        validators=[MinValueValidator(-90), MaxValueValidator(90)],
        verbose_name='Широта'
    )
    longitude = models.FloatField(
        null=True,
        blank=True,
        validators=[MinValueValidator(-180), MaxValueValidator(180)],
        verbose_name='Долгота'
    )

    class Meta:
        abstract = True

    @property
    def point(self) -> Optional[Point]:
        """Координаты как Point или None, если заданы не полностью"""
        if self.latitude is None or self.longitude is None:
            return None
        return Point(latitude=self.latitude, longitude=self.longitude)
