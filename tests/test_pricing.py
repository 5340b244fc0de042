import pytest

from geo.geometry import Point
from utils.exceptions import PointOutsideZoneError, ZoneInactiveError, ZoneNotFoundError
from zones.models import DeliveryZone, ZoneTariff
from zones.pricing import TariffEngine

HUB = Point(latitude=18.486057, longitude=-69.931211)


def tier(distance_min_km, distance_max_km=None, base_cost=0.0, cost_per_km=None, surcharge=0.0):
    return ZoneTariff(
        distance_min_km=distance_min_km,
        distance_max_km=distance_max_km,
        base_cost=base_cost,
        cost_per_km=cost_per_km,
        surcharge=surcharge,
    )


@pytest.fixture
def tiers():
    return [
        tier(0, 5, base_cost=3, cost_per_km=0.5),
        tier(5, None, base_cost=5),
    ]


class TestSelectTier:
    def test_first_tier(self, tiers):
        assert TariffEngine.select_tier(tiers, 3.0) is tiers[0]

    def test_open_ended_tier(self, tiers):
        assert TariffEngine.select_tier(tiers, 10.0) is tiers[1]

    def test_boundary_belongs_to_next_tier(self, tiers):
        # Нижняя граница включается, верхняя нет
        assert TariffEngine.select_tier(tiers, 5.0) is tiers[1]

    def test_zero_distance(self, tiers):
        assert TariffEngine.select_tier(tiers, 0.0) is tiers[0]

    def test_no_tiers(self):
        assert TariffEngine.select_tier([], 1.0) is None

    def test_unsorted_input_is_sorted_by_min_distance(self):
        near, far = tier(0, 5, base_cost=1), tier(5, 10, base_cost=2)
        assert TariffEngine.select_tier([far, near], 2.0) is near

    def test_equal_min_distance_keeps_input_order(self):
        first, second = tier(0, 10, base_cost=1), tier(0, 20, base_cost=2)
        assert TariffEngine.select_tier([first, second], 2.0) is first

    def test_fallback_to_last_tier_when_distance_exceeds_all(self):
        near, far = tier(0, 5, base_cost=1), tier(5, 10, base_cost=2)
        assert TariffEngine.select_tier([far, near], 12.0) is far

    def test_fallback_when_distance_falls_into_gap(self):
        near, far = tier(0, 5, base_cost=1), tier(8, None, base_cost=2)
        assert TariffEngine.select_tier([near, far], 6.0) is far


class TestCalculateCost:
    def test_per_km_tier(self, tiers):
        assert TariffEngine.calculate_cost(tiers[0], 3.0) == 4.5

    def test_flat_tier(self, tiers):
        assert TariffEngine.calculate_cost(tiers[1], 10.0) == 5.0

    def test_surcharge_is_added(self):
        assert TariffEngine.calculate_cost(tier(0, base_cost=2, cost_per_km=0.25, surcharge=1.5), 4.0) == 4.5

    def test_rounds_half_up_to_cents(self):
        assert TariffEngine.calculate_cost(tier(0, base_cost=0.125), 0.0) == 0.13

    def test_rounds_per_km_product(self):
        assert TariffEngine.calculate_cost(tier(0, base_cost=1, cost_per_km=0.3), 3.333) == 2.0


class TestReferencePoint:
    def test_zone_centroid(self):
        zone = DeliveryZone(centroid_latitude=18.5, centroid_longitude=-69.9)
        assert TariffEngine(hub=HUB).reference_point(zone) == Point(18.5, -69.9)

    def test_hub_when_zone_has_no_centroid(self):
        zone = DeliveryZone(centroid_latitude=None, centroid_longitude=None)
        assert TariffEngine(hub=HUB).reference_point(zone) == HUB

    def test_from_settings(self, settings):
        settings.SHIPPING_HUB_LATITUDE = 10.0
        settings.SHIPPING_HUB_LONGITUDE = 20.0
        assert TariffEngine.from_settings().hub == Point(10.0, 20.0)


@pytest.mark.django_db
class TestCalculate:
    def test_point_at_centroid_uses_first_tier(self, center_zone):
        result = TariffEngine(hub=HUB).calculate(latitude=18.5, longitude=-69.9)

        assert result['zone'].id == center_zone.id
        assert result['distance_estimated_km'] == 0.0
        assert result['tariff_applied']['distance_min_km'] == 0
        assert result['tariff_applied']['cost_total'] == 3.0

    def test_far_point_uses_open_ended_tier(self, center_zone):
        result = TariffEngine(hub=HUB).calculate(latitude=18.55, longitude=-69.9)

        assert result['distance_estimated_km'] == 5.56
        assert result['tariff_applied']['distance_max_km'] is None
        assert result['tariff_applied']['cost_total'] == 5.0

    def test_per_km_cost_from_distance(self, center_zone):
        result = TariffEngine(hub=HUB).calculate(latitude=18.52, longitude=-69.9)

        # 0.02 градуса широты = 2.224 км
        assert result['distance_estimated_km'] == 2.224
        assert result['tariff_applied']['cost_total'] == 4.11

    def test_uncovered_point(self, center_zone):
        result = TariffEngine(hub=HUB).calculate(latitude=0.0, longitude=0.0)

        assert result == {'zone': None, 'tariff_applied': None, 'distance_estimated_km': None}

    def test_no_zones_at_all(self, db):
        result = TariffEngine(hub=HUB).calculate(latitude=18.5, longitude=-69.9)

        assert result['zone'] is None
        assert result['tariff_applied'] is None
        assert result['distance_estimated_km'] is None

    def test_zone_without_tariffs(self, make_zone):
        make_zone(tariffs=None, centroid_latitude=18.5, centroid_longitude=-69.9)

        result = TariffEngine(hub=HUB).calculate(latitude=18.55, longitude=-69.9)

        assert result['tariff_applied'] is None
        assert result['distance_estimated_km'] == 5.56

    def test_distance_from_hub_when_centroid_missing(self, center_zone):
        DeliveryZone.objects.filter(pk=center_zone.pk).update(
            centroid_latitude=None, centroid_longitude=None
        )
        engine = TariffEngine(hub=Point(latitude=18.45, longitude=-69.9))

        result = engine.calculate(latitude=18.5, longitude=-69.9)

        assert result['distance_estimated_km'] == 5.56
        assert result['tariff_applied']['cost_total'] == 5.0

    def test_explicit_zone(self, center_zone):
        result = TariffEngine(hub=HUB).calculate(latitude=18.5, longitude=-69.9, zone_id=center_zone.id)
        assert result['zone'].id == center_zone.id

    def test_explicit_zone_loaded_once(self, center_zone, django_assert_num_queries):
        # зона и ее тарифы
        with django_assert_num_queries(2):
            result = TariffEngine(hub=HUB).calculate(latitude=18.5, longitude=-69.9, zone_id=center_zone.id)

        assert result['tariff_applied']['cost_total'] == 3.0

    def test_explicit_zone_point_outside(self, center_zone):
        with pytest.raises(PointOutsideZoneError):
            TariffEngine(hub=HUB).calculate(latitude=0.0, longitude=0.0, zone_id=center_zone.id)

    def test_explicit_zone_inactive(self, make_zone):
        zone = make_zone(active=False)
        with pytest.raises(ZoneInactiveError):
            TariffEngine(hub=HUB).calculate(latitude=18.5, longitude=-69.9, zone_id=zone.id)

    def test_explicit_zone_missing(self, db):
        with pytest.raises(ZoneNotFoundError):
            TariffEngine(hub=HUB).calculate(latitude=18.5, longitude=-69.9, zone_id=999)
