from django.contrib import admin, messages
from django_object_actions import DjangoObjectActions, action
from simple_history.admin import SimpleHistoryAdmin

from inventory.models import InventoryItem
from inventory.services.stock import StockMutationEngine


@admin.register(InventoryItem)
class InventoryItemAdmin(DjangoObjectActions, SimpleHistoryAdmin):
    list_display = ("id", "item_name", "category", "hsn_sac", "quantity", "rate")
    list_filter = ("category",)
    search_fields = ("item_name", "hsn_sac")
    readonly_fields = ("opening_quantity",)

    change_actions = ("verify_stock_action",)

    def get_readonly_fields(self, request, obj=None):
        # Quantity only moves through purchases and sales once the item exists
        if obj is not None:
            return (*self.readonly_fields, "quantity")
        return self.readonly_fields

    def save_model(self, request, obj, form, change):
        if not change:
            obj.opening_quantity = obj.quantity
        super().save_model(request, obj, form, change)

    @action(label="Verify stock", description="Recompute quantity from purchases and sales")
    def verify_stock_action(self, request, obj):
        ok, stored, expected = StockMutationEngine().verify(obj)
        if ok:
            self.message_user(request, f"Stock is consistent ({stored}).", level=messages.SUCCESS)
        else:
            self.message_user(
                request,
                f"Stock mismatch: stored {stored}, ledger says {expected}.",
                level=messages.ERROR,
            )
