"""
Сервисы для работы с зонами доставки
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional
import logging

from django.db import transaction

from geo.geometry import Geometry, Point, centroid, parse_geometry, point_in_geometry
from utils.exceptions import (
    InvalidGeometryError, PointOutsideZoneError, ZoneInactiveError, ZoneNotFoundError
)
from .models import DeliveryZone, ZoneTariff

logger = logging.getLogger(__name__)

ZONE_FIELDS = ('name', 'description', 'color', 'active', 'coverage_radius_km')


class ZoneCatalog:
    """Каталог зон доставки и их тарифов"""

    @staticmethod
    def normalize_tariffs(tariffs: Optional[Iterable[Dict]]) -> Optional[List[Dict]]:
        """Приводит тарифы к полному набору полей, None - тарифы не переданы"""
        if tariffs is None:
            return None
        return [
            {
                'distance_min_km': tariff.get('distance_min_km', 0.0),
                'distance_max_km': tariff.get('distance_max_km'),
                'base_cost': tariff['base_cost'],
                'cost_per_km': tariff.get('cost_per_km'),
                'surcharge': tariff.get('surcharge') or 0.0,
            }
            for tariff in tariffs
        ]

    @staticmethod
    def _explicit_centroid(data: Dict) -> Optional[Point]:
        latitude = data.get('centroid_latitude')
        longitude = data.get('centroid_longitude')
        if latitude is None or longitude is None:
            return None
        return Point(latitude=latitude, longitude=longitude)

    @staticmethod
    def derive_centroid(geometry: Geometry, data: Dict, previous: Optional[Point] = None) -> Optional[Point]:
        """Явный центроид, иначе вычисленный по геометрии, иначе прежний"""
        return ZoneCatalog._explicit_centroid(data) or centroid(geometry) or previous

    @staticmethod
    def _replace_tariffs(zone: DeliveryZone, tariffs: List[Dict]):
        zone.tariffs.all().delete()
        if tariffs:
            ZoneTariff.objects.bulk_create([ZoneTariff(zone=zone, **tariff) for tariff in tariffs])

    @staticmethod
    def list_zones(active: Optional[bool] = None):
        """Зоны с тарифами, при необходимости только активные или неактивные"""
        queryset = DeliveryZone.objects.prefetch_related('tariffs')
        if active is not None:
            queryset = queryset.filter(active=active)
        return queryset

    @staticmethod
    def get_zone(zone_id: int) -> DeliveryZone:
        try:
            return DeliveryZone.objects.prefetch_related('tariffs').get(pk=zone_id)
        except DeliveryZone.DoesNotExist:
            raise ZoneNotFoundError(f'Зона доставки {zone_id} не существует')

    @staticmethod
    def create_zone(data: Dict) -> DeliveryZone:
        """
        Создает зону доставки

        Полигон валидируется, центроид берется из данных, если переданы обе
        координаты, иначе вычисляется по геометрии. Для вырожденной
        геометрии центроид остается пустым.

        Raises:
            InvalidGeometryError: Если полигон не Polygon/MultiPolygon
        """
        geometry = parse_geometry(data.get('polygon'))
        zone_centroid = ZoneCatalog.derive_centroid(geometry, data)
        tariffs = ZoneCatalog.normalize_tariffs(data.get('tariffs'))

        fields = {field: data[field] for field in ZONE_FIELDS if field in data}

        with transaction.atomic():
            zone = DeliveryZone.objects.create(
                polygon=geometry.to_geojson(),
                centroid_latitude=zone_centroid.latitude if zone_centroid else None,
                centroid_longitude=zone_centroid.longitude if zone_centroid else None,
                **fields
            )
            if tariffs:
                ZoneCatalog._replace_tariffs(zone, tariffs)

        if zone_centroid is None:
            logger.warning(f'Зона {zone.id} ({zone.name}): геометрия вырождена, центроид не вычислен')
        logger.info(f'Создана зона доставки {zone.id} ({zone.name}), тарифов: {len(tariffs or [])}')
        return zone

    @staticmethod
    def update_zone(zone_id: int, data: Dict) -> DeliveryZone:
        """
        Частично обновляет зону доставки

        Если передан список тарифов, старые тарифы удаляются и создаются
        новые в той же транзакции, строка зоны блокируется на время записи.
        """
        with transaction.atomic():
            try:
                zone = DeliveryZone.objects.select_for_update().get(pk=zone_id)
            except DeliveryZone.DoesNotExist:
                raise ZoneNotFoundError(f'Зона доставки {zone_id} не существует')

            polygon_supplied = data.get('polygon') is not None
            geometry = parse_geometry(data['polygon'] if polygon_supplied else zone.polygon)

            zone_centroid = ZoneCatalog.derive_centroid(geometry, data, previous=zone.centroid)

            for field in ZONE_FIELDS:
                if field in data:
                    setattr(zone, field, data[field])
            if polygon_supplied:
                zone.polygon = geometry.to_geojson()
            zone.centroid_latitude = zone_centroid.latitude if zone_centroid else None
            zone.centroid_longitude = zone_centroid.longitude if zone_centroid else None
            zone.save()

            tariffs = ZoneCatalog.normalize_tariffs(data.get('tariffs'))
            if tariffs is not None:
                ZoneCatalog._replace_tariffs(zone, tariffs)

        logger.info(
            f'Обновлена зона доставки {zone.id} ({zone.name})'
            + (f', тарифы заменены: {len(tariffs)}' if tariffs is not None else '')
        )
        return zone

    @staticmethod
    def delete_zone(zone_id: int):
        deleted, _ = DeliveryZone.objects.filter(pk=zone_id).delete()
        if not deleted:
            raise ZoneNotFoundError(f'Зона доставки {zone_id} не существует')
        logger.info(f'Удалена зона доставки {zone_id}')


@dataclass(frozen=True)
class ZoneResolution:
    """Результат привязки точки к зоне"""
    zone_id: Optional[int]
    validated: bool


def _zone_contains(zone: DeliveryZone, point: Point) -> bool:
    try:
        geometry: Geometry = zone.geometry
    except InvalidGeometryError as e:
        logger.warning(f'Некорректный полигон у зоны {zone.id}: {e.detail}')
        return False
    return point_in_geometry(point, geometry)


class ZoneResolver:
    """Определяет зону доставки для точки"""

    @staticmethod
    def active_zones():
        """Активные зоны в порядке создания"""
        return DeliveryZone.objects.filter(active=True).prefetch_related('tariffs').order_by('id')

    @staticmethod
    def find_covering_zone(point: Point) -> Optional[DeliveryZone]:
        """
        Возвращает первую активную зону, содержащую точку

        При пересечении зон выигрывает созданная раньше.
        """
        for zone in ZoneResolver.active_zones():
            if _zone_contains(zone, point):
                logger.debug(f'Точка ({point.latitude}, {point.longitude}) найдена в зоне {zone.id}')
                return zone

        logger.debug(f'Точка ({point.latitude}, {point.longitude}) не найдена ни в одной зоне')
        return None

    @staticmethod
    def get_active_zone(zone_id: int) -> DeliveryZone:
        zone = ZoneCatalog.get_zone(zone_id)
        if not zone.active:
            raise ZoneInactiveError(f'Зона доставки {zone_id} сейчас отключена')
        return zone

    @staticmethod
    def get_zone_containing(zone_id: int, point: Point) -> DeliveryZone:
        """Активная зона zone_id, если точка лежит в ней"""
        zone = ZoneResolver.get_active_zone(zone_id)
        if not _zone_contains(zone, point):
            raise PointOutsideZoneError()
        return zone

    @staticmethod
    def resolve(
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        zone_id: Optional[int] = None,
        recalculate: bool = True,
        validated: Optional[bool] = None,
    ) -> ZoneResolution:
        """
        Привязывает координаты к зоне доставки

        Args:
            latitude: Широта точки
            longitude: Долгота точки
            zone_id: Зона, выбранная клиентом
            recalculate: Проверять ли координаты заново
            validated: Флаг проверки, переданный клиентом

        Returns:
            ZoneResolution; zone_id=None означает, что адрес не покрыт зонами

        Raises:
            ZoneNotFoundError, ZoneInactiveError, PointOutsideZoneError
        """
        has_coordinates = latitude is not None and longitude is not None

        if zone_id:
            if recalculate and has_coordinates:
                zone = ZoneResolver.get_zone_containing(zone_id, Point(latitude=latitude, longitude=longitude))
                return ZoneResolution(zone.id, True)

            zone = ZoneResolver.get_active_zone(zone_id)
            if not recalculate:
                return ZoneResolution(zone.id, validated if validated is not None else True)

            return ZoneResolution(zone.id, True)

        if not has_coordinates:
            return ZoneResolution(None, validated if validated is not None else False)

        zone = ZoneResolver.find_covering_zone(Point(latitude=latitude, longitude=longitude))
        if zone is None:
            return ZoneResolution(None, False)

        return ZoneResolution(zone.id, True)
