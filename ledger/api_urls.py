from django.urls import path

from . import api_views

urlpatterns = [
    path("expenses/", api_views.api_expenses, name="api-expenses"),
    path("reports/", api_views.api_reports, name="api-reports"),
    path("reports/monthly/", api_views.api_monthly_report, name="api-monthly-report"),
]
