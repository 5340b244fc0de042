import math
from typing import TYPE_CHECKING

from utils.helpers import round_half_up

if TYPE_CHECKING:
    from geo.geometry import Point


class Geo:
    """Сервис для геолокационных расчетов"""
    # Радиус Земли в километрах
    EARTH_RADIUS_KM = 6371

    @staticmethod
    def haversine_km(origin: 'Point', destination: 'Point') -> float:
        """
        Вычисляет расстояние между двумя точками по формуле Haversine
        Возвращает расстояние в километрах, округленное до метра
        """
        lat1_rad = math.radians(origin.latitude)
        lat2_rad = math.radians(destination.latitude)
        delta_lat_rad = math.radians(destination.latitude - origin.latitude)
        delta_lon_rad = math.radians(destination.longitude - origin.longitude)

        a = (math.sin(delta_lat_rad / 2) ** 2 +
             math.cos(lat1_rad) * math.cos(lat2_rad) *
             math.sin(delta_lon_rad / 2) ** 2)
        # Для почти противоположных точек погрешность дает a > 1
        a = min(1.0, a)
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        # Тарифы считаются от этого значения, округление менять нельзя
        return round_half_up(Geo.EARTH_RADIUS_KM * c, 3)
