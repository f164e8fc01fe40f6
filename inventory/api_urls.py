from django.urls import path

from . import api_views

urlpatterns = [
    path("inventory/", api_views.api_inventory, name="api-inventory"),
]
