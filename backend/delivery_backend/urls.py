"""
URL configuration for delivery_backend project.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/zones/', include('zones.urls')),
    path('api/addresses/', include('addresses.urls')),
]
