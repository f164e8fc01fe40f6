from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("inventory.api_urls")),
    path("api/", include("documents.api_urls")),
    path("api/", include("ledger.api_urls")),
]
