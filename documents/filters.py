import django_filters

from documents.models import PurchaseRecord, SaleRecord


class PurchaseFilter(django_filters.FilterSet):
    from_date = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    to_date = django_filters.DateFilter(field_name="date", lookup_expr="lte")
    item = django_filters.NumberFilter(field_name="item_id")
    vendor = django_filters.CharFilter(field_name="vendor_name", lookup_expr="icontains")

    class Meta:
        model = PurchaseRecord
        fields = []


class SaleFilter(django_filters.FilterSet):
    from_date = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    to_date = django_filters.DateFilter(field_name="date", lookup_expr="lte")
    customer = django_filters.CharFilter(field_name="customer_name", lookup_expr="icontains")
    invoice_number = django_filters.CharFilter(field_name="invoice_number")

    class Meta:
        model = SaleRecord
        fields = []
