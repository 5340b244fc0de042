"""
Расчет стоимости доставки по тарифам зоны
Расстояние считается от центроида зоны (или склада) до точки доставки
"""
from typing import Dict, List, Optional, Sequence
import logging

from django.conf import settings

from geo.geometry import Point
from geo.services import Geo
from utils.helpers import round_half_up
from .models import DeliveryZone, ZoneTariff
from .services import ZoneResolver

logger = logging.getLogger(__name__)


class TariffEngine:
    """Калькулятор стоимости доставки по зонам"""

    def __init__(self, hub: Point):
        # Точка отсчета для зон без центроида
        self.hub = hub

    @classmethod
    def from_settings(cls) -> 'TariffEngine':
        return cls(hub=Point(
            latitude=settings.SHIPPING_HUB_LATITUDE,
            longitude=settings.SHIPPING_HUB_LONGITUDE,
        ))

    def reference_point(self, zone: DeliveryZone) -> Point:
        """Центроид зоны или склад, если центроида нет"""
        zone_centroid = zone.centroid
        if zone_centroid is None:
            logger.warning(f'У зоны {zone.id} нет центроида, расстояние считается от склада')
            return self.hub
        return zone_centroid

    @staticmethod
    def select_tier(tiers: Sequence[ZoneTariff], distance: float) -> Optional[ZoneTariff]:
        """
        Выбирает тариф для расстояния

        Диапазон тарифа [distance_min_km, distance_max_km): нижняя граница
        включается, верхняя нет. Если ни один тариф не подошел, берется
        последний (с наибольшим distance_min_km) как тариф без ограничения.
        """
        if not tiers:
            return None

        ordered: List[ZoneTariff] = sorted(tiers, key=lambda tier: tier.distance_min_km)
        for tier in ordered:
            if distance >= tier.distance_min_km and (
                tier.distance_max_km is None or distance < tier.distance_max_km
            ):
                return tier

        fallback = ordered[-1]
        logger.warning(
            f'Расстояние {distance} км не попало ни в один тариф зоны {fallback.zone_id}, '
            f'применен последний тариф {fallback.id}'
        )
        return fallback

    @staticmethod
    def calculate_cost(tier: ZoneTariff, distance: float) -> float:
        """Базовая стоимость + надбавка + расстояние * стоимость км, до копеек"""
        total = tier.base_cost + (tier.surcharge or 0.0)
        if tier.cost_per_km is not None:
            total += distance * tier.cost_per_km
        return round_half_up(total, 2)

    def quote(self, zone: DeliveryZone, point: Point) -> Dict:
        """
        Рассчитывает доставку в точку внутри уже определенной зоны

        Returns:
            Словарь с зоной, примененным тарифом и расстоянием
        """
        distance = Geo.haversine_km(self.reference_point(zone), point)
        tier = self.select_tier(list(zone.tariffs.all()), distance)

        if tier is None:
            return {
                'zone': zone,
                'tariff_applied': None,
                'distance_estimated_km': distance,
            }

        return {
            'zone': zone,
            'tariff_applied': {
                'id': tier.id,
                'distance_min_km': tier.distance_min_km,
                'distance_max_km': tier.distance_max_km,
                'base_cost': tier.base_cost,
                'cost_per_km': tier.cost_per_km,
                'surcharge': tier.surcharge,
                'cost_total': self.calculate_cost(tier, distance),
            },
            'distance_estimated_km': distance,
        }

    def calculate(self, latitude: float, longitude: float, zone_id: Optional[int] = None) -> Dict:
        """
        Определяет зону для точки и рассчитывает стоимость доставки

        Если zone_id передан, точка обязана лежать в этой активной зоне.
        Точка вне всех зон - не ошибка: зона и тариф в ответе пустые.

        Raises:
            ZoneNotFoundError, ZoneInactiveError, PointOutsideZoneError
        """
        point = Point(latitude=latitude, longitude=longitude)

        if zone_id:
            zone = ZoneResolver.get_zone_containing(zone_id, point)
        else:
            zone = ZoneResolver.find_covering_zone(point)

        if zone is None:
            logger.info(f'Точка ({latitude}, {longitude}) не покрыта ни одной активной зоной')
            return {
                'zone': None,
                'tariff_applied': None,
                'distance_estimated_km': None,
            }

        result = self.quote(zone, point)
        logger.debug(
            f'Доставка в ({latitude}, {longitude}): зона {zone.id}, '
            f'расстояние {result["distance_estimated_km"]} км'
        )
        return result
