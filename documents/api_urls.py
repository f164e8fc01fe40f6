from django.urls import path

from . import api_views

urlpatterns = [
    path("purchases/", api_views.api_purchases, name="api-purchases"),
    path("sales/", api_views.api_sales, name="api-sales"),
]
