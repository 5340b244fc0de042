import pytest

from zones.models import DeliveryZone

from .conftest import CENTER_POLYGON, TWO_TIERS

pytestmark = pytest.mark.django_db

ZONES_URL = '/api/zones/'
CALCULATE_URL = '/api/zones/calculate/'
ADDRESSES_URL = '/api/addresses/'


def results(response):
    data = response.json()
    return data.get('results', data) if isinstance(data, dict) else data


class TestZonesApi:
    def test_create_zone(self, api_client):
        response = api_client.post(ZONES_URL, {
            'name': 'Центр',
            'color': '#0EA5E9',
            'polygon': CENTER_POLYGON,
            'tariffs': TWO_TIERS,
        }, format='json')

        assert response.status_code == 201
        data = response.json()
        assert data['centroid_latitude'] == pytest.approx(18.5)
        assert data['centroid_longitude'] == pytest.approx(-69.9)
        assert [tariff['distance_min_km'] for tariff in data['tariffs']] == [0, 5]
        assert data['tariffs'][1]['surcharge'] == 0

    def test_create_zone_with_invalid_polygon(self, api_client):
        response = api_client.post(ZONES_URL, {
            'name': 'Плохая',
            'polygon': {'type': 'Polygon', 'coordinates': [[[0, 0], [1, 1]]]},
        }, format='json')

        assert response.status_code == 400
        assert response.json()['detail']
        assert not DeliveryZone.objects.exists()

    def test_create_zone_with_negative_cost(self, api_client):
        response = api_client.post(ZONES_URL, {
            'name': 'Минус',
            'polygon': CENTER_POLYGON,
            'tariffs': [{'distance_min_km': 0, 'base_cost': -1}],
        }, format='json')

        assert response.status_code == 400

    def test_list_active_only(self, api_client, make_zone):
        make_zone(name='Активная')
        make_zone(name='Отключенная', active=False)

        names = [zone['name'] for zone in results(api_client.get(ZONES_URL, {'active': 'true'}))]

        assert names == ['Активная']
        assert len(results(api_client.get(ZONES_URL))) == 2

    def test_patch_replaces_tariffs(self, api_client, center_zone):
        response = api_client.patch(f'{ZONES_URL}{center_zone.id}/', {
            'tariffs': [{'distance_min_km': 0, 'base_cost': 9.5}],
        }, format='json')

        assert response.status_code == 200
        assert [tariff['base_cost'] for tariff in response.json()['tariffs']] == [9.5]

    def test_patch_missing_base_cost(self, api_client, center_zone):
        response = api_client.patch(f'{ZONES_URL}{center_zone.id}/', {
            'tariffs': [{'distance_min_km': 0}],
        }, format='json')

        assert response.status_code == 400

    def test_delete_zone(self, api_client, center_zone):
        response = api_client.delete(f'{ZONES_URL}{center_zone.id}/')

        assert response.status_code == 204
        assert api_client.get(f'{ZONES_URL}{center_zone.id}/').status_code == 404


class TestCalculateApi:
    def test_covered_point(self, api_client, center_zone):
        response = api_client.post(CALCULATE_URL, {'latitude': 18.52, 'longitude': -69.9}, format='json')

        assert response.status_code == 200
        data = response.json()
        assert data['zone']['id'] == center_zone.id
        assert data['distance_estimated_km'] == 2.224
        assert data['tariff_applied']['cost_total'] == 4.11
        assert data['tariff_applied']['distance_max_km'] == 5

    def test_uncovered_point(self, api_client, center_zone):
        response = api_client.post(CALCULATE_URL, {'latitude': 0, 'longitude': 0}, format='json')

        assert response.status_code == 200
        assert response.json() == {'zone': None, 'tariff_applied': None, 'distance_estimated_km': None}

    def test_inactive_zone_requested(self, api_client, make_zone):
        zone = make_zone(active=False)

        response = api_client.post(
            CALCULATE_URL, {'latitude': 18.5, 'longitude': -69.9, 'zone_id': zone.id}, format='json'
        )

        assert response.status_code == 400

    def test_unknown_zone_requested(self, api_client):
        response = api_client.post(
            CALCULATE_URL, {'latitude': 18.5, 'longitude': -69.9, 'zone_id': 999}, format='json'
        )

        assert response.status_code == 404

    def test_latitude_out_of_range(self, api_client):
        response = api_client.post(CALCULATE_URL, {'latitude': 91, 'longitude': 0}, format='json')

        assert response.status_code == 400


class TestAddressesApi:
    def test_create_binds_zone(self, api_client, center_zone):
        response = api_client.post(ADDRESSES_URL, {
            'street': 'Av. 27 de Febrero 1',
            'city': 'Santo Domingo',
            'country': 'DO',
            'latitude': 18.5,
            'longitude': -69.9,
        }, format='json')

        assert response.status_code == 201
        data = response.json()
        assert data['zone_id'] == center_zone.id
        assert data['zone']['name'] == 'Центр'
        assert data['validated'] is True

    def test_patch_null_clears_coordinates(self, api_client, center_zone):
        created = api_client.post(ADDRESSES_URL, {
            'street': 'Calle El Conde 1',
            'city': 'Santo Domingo',
            'country': 'DO',
            'latitude': 18.5,
            'longitude': -69.9,
        }, format='json').json()

        response = api_client.patch(
            f'{ADDRESSES_URL}{created["id"]}/', {'latitude': None, 'longitude': None}, format='json'
        )

        assert response.status_code == 200
        assert response.json()['latitude'] is None
        assert response.json()['longitude'] is None

    def test_create_outside_selected_zone(self, api_client, center_zone):
        response = api_client.post(ADDRESSES_URL, {
            'street': 'Calle 1',
            'city': 'Santiago',
            'country': 'DO',
            'latitude': 19.45,
            'longitude': -70.7,
            'zone_id': center_zone.id,
        }, format='json')

        assert response.status_code == 400
