from rest_framework import serializers

from .models import DeliveryZone, ZoneTariff
from .services import ZoneCatalog


class ZoneTariffSerializer(serializers.ModelSerializer):
    """Сериализатор для тарифа зоны"""
    distance_min_km = serializers.FloatField(min_value=0, default=0.0)
    distance_max_km = serializers.FloatField(min_value=0, required=False, allow_null=True)
    base_cost = serializers.FloatField(min_value=0)
    cost_per_km = serializers.FloatField(min_value=0, required=False, allow_null=True)
    surcharge = serializers.FloatField(min_value=0, required=False, default=0.0)

    class Meta:
        model = ZoneTariff
        fields = ['id', 'distance_min_km', 'distance_max_km', 'base_cost', 'cost_per_km', 'surcharge']
        read_only_fields = ['id']

    def validate(self, attrs):
        # При PATCH обязательность полей вложенного сериализатора не проверяется
        if 'base_cost' not in attrs:
            raise serializers.ValidationError({'base_cost': "Обязательное поле"})
        distance_max_km = attrs.get('distance_max_km')
        if distance_max_km is not None and distance_max_km <= attrs.get('distance_min_km', 0.0):
            raise serializers.ValidationError(
                "Максимальное расстояние должно быть больше минимального"
            )
        return attrs


class DeliveryZoneSerializer(serializers.ModelSerializer):
    """Сериализатор для зоны доставки с тарифами"""
    tariffs = ZoneTariffSerializer(many=True, required=False)
    centroid_latitude = serializers.FloatField(
        min_value=-90, max_value=90, required=False, allow_null=True
    )
    centroid_longitude = serializers.FloatField(
        min_value=-180, max_value=180, required=False, allow_null=True
    )
    coverage_radius_km = serializers.FloatField(min_value=0, required=False, allow_null=True)

    class Meta:
        model = DeliveryZone
        fields = [
            'id', 'name', 'description', 'color', 'active', 'polygon',
            'centroid_latitude', 'centroid_longitude', 'coverage_radius_km',
            'tariffs', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_tariffs(self, value):
        """Список тарифов, если передан, не может быть пустым"""
        if value is not None and len(value) == 0:
            raise serializers.ValidationError("Нужно указать хотя бы один тариф")
        return value

    def create(self, validated_data):
        """Создание зоны через каталог (валидация полигона и центроид)"""
        return ZoneCatalog.create_zone(validated_data)

    def update(self, instance, validated_data):
        """Обновление зоны через каталог (тарифы заменяются целиком)"""
        return ZoneCatalog.update_zone(instance.pk, validated_data)


class TariffCalculationSerializer(serializers.Serializer):
    """Запрос на расчет стоимости доставки"""
    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
    zone_id = serializers.IntegerField(required=False, allow_null=True)


class AppliedTariffSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    distance_min_km = serializers.FloatField()
    distance_max_km = serializers.FloatField(allow_null=True)
    base_cost = serializers.FloatField()
    cost_per_km = serializers.FloatField(allow_null=True)
    surcharge = serializers.FloatField()
    cost_total = serializers.FloatField()


class TariffResultSerializer(serializers.Serializer):
    """Результат расчета стоимости доставки"""
    zone = DeliveryZoneSerializer(allow_null=True)
    tariff_applied = AppliedTariffSerializer(allow_null=True)
    distance_estimated_km = serializers.FloatField(allow_null=True)
