from django.db import models

from geo.models import Coordinate
from zones.models import DeliveryZone


class Address(Coordinate):
    """Модель адреса доставки"""
    street = models.CharField(max_length=255, verbose_name='Улица')
    city = models.CharField(max_length=100, verbose_name='Город')
    country = models.CharField(max_length=100, verbose_name='Страна')
    postal_code = models.CharField(max_length=20, null=True, blank=True, verbose_name='Почтовый индекс')
    references = models.TextField(null=True, blank=True, verbose_name='Ориентиры')
    validated = models.BooleanField(
        default=False,
        verbose_name='Проверен',
        help_text='Координаты подтверждены полигоном зоны'
    )
    zone = models.ForeignKey(
        DeliveryZone,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='addresses',
        verbose_name='Зона доставки'
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Создан')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Обновлен')

    class Meta:
        verbose_name = 'Адрес'
        verbose_name_plural = 'Адреса'
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.street}, {self.city}'
