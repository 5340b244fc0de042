"""
Сервис для работы с адресами доставки
"""
from typing import Dict
import logging

from zones.services import ZoneResolver
from .models import Address

logger = logging.getLogger(__name__)

BINDING_FIELDS = ('zone_id', 'latitude', 'longitude', 'validated')


class AddressService:
    """Создание и обновление адресов с привязкой к зоне доставки"""

    @staticmethod
    def create_address(data: Dict) -> Address:
        """
        Создает адрес, определяя зону по координатам или проверяя выбранную

        Raises:
            ZoneNotFoundError, ZoneInactiveError, PointOutsideZoneError
        """
        resolution = ZoneResolver.resolve(
            latitude=data.get('latitude'),
            longitude=data.get('longitude'),
            zone_id=data.get('zone_id'),
        )

        fields = {key: value for key, value in data.items() if key not in BINDING_FIELDS}
        address = Address.objects.create(
            latitude=data.get('latitude'),
            longitude=data.get('longitude'),
            zone_id=resolution.zone_id,
            validated=resolution.validated,
            **fields
        )
        logger.info(
            f'Создан адрес {address.id}: зона {resolution.zone_id}, проверен {resolution.validated}'
        )
        return address

    @staticmethod
    def update_address(address: Address, data: Dict) -> Address:
        """
        Частично обновляет адрес

        Зона и флаг проверки пересчитываются только если изменились
        координаты или выбранная зона, иначе сохраняется флаг клиента.
        Явно переданный None стирает координату.
        """
        latitude = data['latitude'] if 'latitude' in data else address.latitude
        longitude = data['longitude'] if 'longitude' in data else address.longitude

        resolution = ZoneResolver.resolve(
            latitude=latitude,
            longitude=longitude,
            zone_id=data.get('zone_id') or address.zone_id,
            recalculate=any(key in data for key in ('latitude', 'longitude', 'zone_id')),
            validated=data.get('validated'),
        )

        for key, value in data.items():
            if key not in BINDING_FIELDS:
                setattr(address, key, value)
        address.latitude = latitude
        address.longitude = longitude
        if resolution.zone_id is not None:
            address.zone_id = resolution.zone_id
        address.validated = resolution.validated
        address.save()

        logger.info(
            f'Обновлен адрес {address.id}: зона {address.zone_id}, проверен {address.validated}'
        )
        return address
