import pytest
from rest_framework.test import APIClient

from zones.services import ZoneCatalog


def square(min_lng, min_lat, max_lng, max_lat):
    """Замкнутое кольцо прямоугольника в порядке [lon, lat]"""
    return [
        [min_lng, min_lat],
        [max_lng, min_lat],
        [max_lng, max_lat],
        [min_lng, max_lat],
        [min_lng, min_lat],
    ]


# Прямоугольник вокруг (18.5, -69.9): долгота -70.0..-69.8, широта 18.4..18.6
CENTER_POLYGON = {'type': 'Polygon', 'coordinates': [square(-70.0, 18.4, -69.8, 18.6)]}

TWO_TIERS = [
    {'distance_min_km': 0, 'distance_max_km': 5, 'base_cost': 3, 'cost_per_km': 0.5},
    {'distance_min_km': 5, 'base_cost': 5},
]


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_zone(db):
    counter = {'value': 0}

    def factory(**overrides):
        counter['value'] += 1
        data = {
            'name': f'Зона {counter["value"]}',
            'polygon': CENTER_POLYGON,
            'tariffs': TWO_TIERS,
        }
        data.update(overrides)
        return ZoneCatalog.create_zone(data)

    return factory


@pytest.fixture
def center_zone(make_zone):
    return make_zone(name='Центр', centroid_latitude=18.5, centroid_longitude=-69.9)
