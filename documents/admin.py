from django.contrib import admin

from documents.models import PurchaseRecord, SaleRecord


class LedgerRecordAdmin(admin.ModelAdmin):
    """Ledger rows are written by the purchase/sales services only.

    The admin shows them read-only; adding or editing here would change
    history without moving stock.
    """

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(PurchaseRecord)
class PurchaseRecordAdmin(LedgerRecordAdmin):
    list_display = ("date", "id", "item", "quantity", "rate", "amount", "vendor_name", "invoice_number")
    list_filter = ("date",)
    search_fields = ("vendor_name", "invoice_number", "item__item_name")
    date_hierarchy = "date"


@admin.register(SaleRecord)
class SaleRecordAdmin(LedgerRecordAdmin):
    list_display = ("date", "invoice_number", "customer_name", "taxable_total", "tax_total", "grand_total")
    list_filter = ("date",)
    search_fields = ("invoice_number", "customer_name", "customer_gstin")
    date_hierarchy = "date"
