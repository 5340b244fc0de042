from rest_framework import viewsets

from .models import Address
from .serializers import AddressSerializer


class AddressViewSet(viewsets.ModelViewSet):
    """ViewSet для адресов доставки"""
    queryset = Address.objects.select_related('zone').all()
    serializer_class = AddressSerializer
