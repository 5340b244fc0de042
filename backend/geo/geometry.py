"""
Геометрия зон доставки: разбор GeoJSON, точка-в-полигоне, центроид

Все функции чистые, без состояния и без обращений к БД.
Координаты в кольцах хранятся в порядке GeoJSON: (долгота, широта).
"""
import math
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from utils.exceptions import InvalidGeometryError

EPSILON = sys.float_info.epsilon

# Минимальный замкнутый треугольник: 3 вершины + повтор первой
MIN_RING_POINTS = 4

Coordinate = Tuple[float, float]
Ring = Tuple[Coordinate, ...]


@dataclass(frozen=True)
class Point:
    """Географическая точка"""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Polygon:
    """Полигон: первое кольцо - внешний контур, остальные - дыры"""
    rings: Tuple[Ring, ...]

    def to_geojson(self) -> dict:
        return {
            'type': 'Polygon',
            'coordinates': [[list(pair) for pair in ring] for ring in self.rings],
        }


@dataclass(frozen=True)
class MultiPolygon:
    """Набор полигонов"""
    polygons: Tuple[Tuple[Ring, ...], ...]

    def to_geojson(self) -> dict:
        return {
            'type': 'MultiPolygon',
            'coordinates': [
                [[list(pair) for pair in ring] for ring in polygon]
                for polygon in self.polygons
            ],
        }


Geometry = Union[Polygon, MultiPolygon]


def _is_number(value) -> bool:
    # bool - подкласс int, но координатой не является
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _parse_ring(raw) -> Ring:
    if not isinstance(raw, (list, tuple)):
        raise InvalidGeometryError('Кольцо полигона должно быть массивом координат')
    if len(raw) < MIN_RING_POINTS:
        raise InvalidGeometryError(
            f'Кольцо полигона должно содержать минимум {MIN_RING_POINTS} точки, получено {len(raw)}'
        )
    pairs = []
    for pair in raw:
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise InvalidGeometryError('Каждая точка должна быть массивом [lon, lat]')
        lng, lat = pair
        if not _is_number(lng) or not _is_number(lat):
            raise InvalidGeometryError('Координаты должны быть конечными числами')
        if not -180 <= lng <= 180 or not -90 <= lat <= 90:
            raise InvalidGeometryError(f'Координата [{lng}, {lat}] вне допустимого диапазона')
        pairs.append((float(lng), float(lat)))
    return tuple(pairs)


def _parse_polygon(raw) -> Tuple[Ring, ...]:
    if not isinstance(raw, (list, tuple)) or not raw:
        raise InvalidGeometryError('Полигон должен содержать хотя бы одно кольцо')
    return tuple(_parse_ring(ring) for ring in raw)


def parse_geometry(data) -> Geometry:
    """
    Валидирует GeoJSON-геометрию и приводит ее к Polygon/MultiPolygon

    Args:
        data: Словарь {"type": ..., "coordinates": ...}

    Returns:
        Polygon или MultiPolygon

    Raises:
        InvalidGeometryError: Если тип не поддерживается или координаты некорректны
    """
    if isinstance(data, (Polygon, MultiPolygon)):
        return data
    if not isinstance(data, dict):
        raise InvalidGeometryError('Геометрия должна быть объектом GeoJSON')

    geometry_type = data.get('type')
    coordinates = data.get('coordinates')

    if geometry_type == 'Polygon':
        return Polygon(rings=_parse_polygon(coordinates))

    if geometry_type == 'MultiPolygon':
        if not isinstance(coordinates, (list, tuple)) or not coordinates:
            raise InvalidGeometryError('MultiPolygon должен содержать хотя бы один полигон')
        return MultiPolygon(polygons=tuple(_parse_polygon(polygon) for polygon in coordinates))

    raise InvalidGeometryError(
        f'Неподдерживаемый тип геометрии: {geometry_type!r}. Ожидается Polygon или MultiPolygon'
    )


def point_in_ring(point: Point, ring: Sequence[Coordinate]) -> bool:
    """
    Проверяет, находится ли точка внутри кольца (алгоритм Ray Casting)

    К знаменателю (yj - yi) добавляется машинный эпсилон, чтобы не делить
    на ноль на почти горизонтальных ребрах. Это приближение, а не точная
    геометрия: точки на самой границе могут попасть в любую сторону.
    """
    if len(ring) < MIN_RING_POINTS:
        return False

    x = point.longitude
    y = point.latitude
    inside = False

    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i]
        xj, yj = ring[j]
        if (yi > y) != (yj > y):
            x_intersection = (xj - xi) * (y - yi) / (yj - yi + EPSILON) + xi
            if x < x_intersection:
                inside = not inside
        j = i

    return inside


def point_in_polygon(point: Point, rings: Sequence[Sequence[Coordinate]]) -> bool:
    """Точка внутри внешнего контура и вне всех дыр"""
    if not rings:
        return False

    outer, holes = rings[0], rings[1:]
    if not point_in_ring(point, outer):
        return False

    for hole in holes:
        if point_in_ring(point, hole):
            return False

    return True


def point_in_geometry(point: Point, geometry: Geometry) -> bool:
    """Для MultiPolygon достаточно попадания в любой из полигонов"""
    if isinstance(geometry, Polygon):
        return point_in_polygon(point, geometry.rings)
    return any(point_in_polygon(point, polygon) for polygon in geometry.polygons)


def _ring_moments(ring: Sequence[Coordinate]) -> Tuple[float, float, float]:
    """Удвоенная знаковая площадь и первые моменты кольца"""
    area = 0.0
    cx = 0.0
    cy = 0.0
    j = len(ring) - 1
    for i in range(len(ring)):
        x0, y0 = ring[j]
        x1, y1 = ring[i]
        factor = x0 * y1 - x1 * y0
        area += factor
        cx += (x0 + x1) * factor
        cy += (y0 + y1) * factor
        j = i
    return area, cx, cy


def _outer_ring_centroid(rings: Sequence[Sequence[Coordinate]]) -> Optional[Tuple[float, float, float]]:
    """
    Центроид и площадь внешнего контура полигона

    Returns:
        (долгота, широта, площадь) или None для вырожденного контура
    """
    if not rings or len(rings[0]) < MIN_RING_POINTS:
        return None

    double_area, cx, cy = _ring_moments(rings[0])
    area = double_area * 0.5
    if abs(area) < EPSILON:
        return None

    factor = 1 / (6 * area)
    return cx * factor, cy * factor, abs(area)


def centroid(geometry: Geometry) -> Optional[Point]:
    """
    Вычисляет центроид геометрии, взвешенный по площади

    Учитываются только внешние контуры, дыры игнорируются - для выбора
    точки отсчета расстояния этого достаточно.

    Returns:
        Point или None, если геометрия вырождена (нулевая площадь)
    """
    if isinstance(geometry, Polygon):
        polygons: List = [geometry.rings]
    else:
        polygons = list(geometry.polygons)

    sum_x = 0.0
    sum_y = 0.0
    sum_area = 0.0
    for rings in polygons:
        result = _outer_ring_centroid(rings)
        if result is None:
            continue
        lng, lat, area = result
        sum_x += lng * area
        sum_y += lat * area
        sum_area += area

    if sum_area == 0:
        return None

    return Point(latitude=sum_y / sum_area, longitude=sum_x / sum_area)
