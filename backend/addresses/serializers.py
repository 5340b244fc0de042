from rest_framework import serializers

from zones.models import DeliveryZone
from .models import Address
from .services import AddressService


class ZoneSummarySerializer(serializers.ModelSerializer):
    """Краткие данные зоны для адреса"""

    class Meta:
        model = DeliveryZone
        fields = ['id', 'name', 'color', 'active']


class AddressSerializer(serializers.ModelSerializer):
    """Сериализатор для адреса доставки"""
    zone = ZoneSummarySerializer(read_only=True)
    zone_id = serializers.IntegerField(required=False, allow_null=True)
    latitude = serializers.FloatField(min_value=-90, max_value=90, required=False, allow_null=True)
    longitude = serializers.FloatField(min_value=-180, max_value=180, required=False, allow_null=True)
    validated = serializers.BooleanField(required=False)

    class Meta:
        model = Address
        fields = [
            'id', 'street', 'city', 'country', 'postal_code', 'references',
            'latitude', 'longitude', 'validated', 'zone_id', 'zone',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def create(self, validated_data):
        """Создание адреса с определением зоны"""
        # Флаг проверки при создании вычисляется, а не берется от клиента
        validated_data.pop('validated', None)
        return AddressService.create_address(validated_data)

    def update(self, instance, validated_data):
        """Обновление адреса с пересчетом зоны при смене координат"""
        return AddressService.update_address(instance, validated_data)
