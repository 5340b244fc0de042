from django import forms
from django.contrib import admin

from geo.geometry import parse_geometry
from utils.exceptions import InvalidGeometryError
from .models import DeliveryZone, ZoneTariff
from .services import ZoneCatalog


class DeliveryZoneAdminForm(forms.ModelForm):
    class Meta:
        model = DeliveryZone
        fields = '__all__'

    def clean_polygon(self):
        """Полигон должен быть корректным GeoJSON Polygon/MultiPolygon"""
        try:
            return parse_geometry(self.cleaned_data.get('polygon')).to_geojson()
        except InvalidGeometryError as e:
            raise forms.ValidationError(str(e.detail))


class ZoneTariffInline(admin.TabularInline):
    model = ZoneTariff
    extra = 0


@admin.register(DeliveryZone)
class DeliveryZoneAdmin(admin.ModelAdmin):
    form = DeliveryZoneAdminForm
    list_display = ['id', 'name', 'active', 'centroid_latitude', 'centroid_longitude', 'coverage_radius_km']
    search_fields = ['name', 'description']
    list_filter = ['active']
    inlines = [ZoneTariffInline]

    def save_model(self, request, obj, form, change):
        previous = None
        if change:
            previous = DeliveryZone.objects.get(pk=obj.pk).centroid

        zone_centroid = ZoneCatalog.derive_centroid(obj.geometry, form.cleaned_data, previous=previous)
        obj.centroid_latitude = zone_centroid.latitude if zone_centroid else None
        obj.centroid_longitude = zone_centroid.longitude if zone_centroid else None
        super().save_model(request, obj, form, change)
