import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from utils.helpers import parse_bool
from .models import DeliveryZone
from .pricing import TariffEngine
from .serializers import DeliveryZoneSerializer, TariffCalculationSerializer, TariffResultSerializer
from .services import ZoneCatalog

logger = logging.getLogger(__name__)


class DeliveryZoneViewSet(viewsets.ModelViewSet):
    """ViewSet для зон доставки с CRUD операциями и расчетом тарифа"""
    queryset = DeliveryZone.objects.prefetch_related('tariffs').all()
    serializer_class = DeliveryZoneSerializer

    def get_queryset(self):
        """Фильтр ?active=true|false"""
        active = self.request.query_params.get('active')
        return ZoneCatalog.list_zones(parse_bool(active) if active is not None else None)

    def perform_destroy(self, instance):
        ZoneCatalog.delete_zone(instance.pk)

    @action(detail=False, methods=['post'], url_path='calculate')
    def calculate(self, request):
        """Рассчитать стоимость доставки в точку"""
        serializer = TariffCalculationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        logger.info(f'Расчет доставки: {data}')
        result = TariffEngine.from_settings().calculate(
            latitude=data['latitude'],
            longitude=data['longitude'],
            zone_id=data.get('zone_id'),
        )
        return Response(TariffResultSerializer(result).data, status=status.HTTP_200_OK)
