"""
Кастомные исключения
"""
from rest_framework.exceptions import APIException
from rest_framework import status


class InvalidGeometryError(APIException):
    """Некорректная геометрия зоны"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = (
        'Полигон не соответствует стандарту GeoJSON (Polygon или MultiPolygon)'
    )
    default_code = 'invalid_geometry'


class ZoneNotFoundError(APIException):
    """Зона доставки не найдена"""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Зона доставки не найдена'
    default_code = 'zone_not_found'


class ZoneInactiveError(APIException):
    """Зона доставки отключена"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Выбранная зона доставки сейчас отключена'
    default_code = 'zone_inactive'


class PointOutsideZoneError(APIException):
    """Точка не принадлежит выбранной зоне"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Координаты не принадлежат выбранной зоне доставки'
    default_code = 'point_outside_zone'

