from django.contrib import admin
from .models import Address


@admin.register(Address)
class AddressAdmin(admin.ModelAdmin):
    list_display = ['id', 'street', 'city', 'zone', 'validated']
    search_fields = ['street', 'city', 'postal_code']
    list_filter = ['validated', 'zone']
