import logging

from django.db import DatabaseError, transaction

from core.exceptions import ItemNotFound, PersistenceFailure, QueryFailed
from core.services.validation import clean_or_raise
from inventory.forms import InventoryItemForm
from inventory.models import InventoryItem
from inventory.specs import parse_specs, specs_to_document

logger = logging.getLogger(__name__)


def item_as_dict(item: InventoryItem) -> dict:
    return {
        "id": item.id,
        "item_name": item.item_name,
        "category": item.category,
        "hsn_sac": item.hsn_sac,
        "quantity": item.quantity,
        "opening_quantity": item.opening_quantity,
        "rate": item.rate,
        "specs": item.specs or {},
    }


def list_items():
    try:
        return list(InventoryItem.objects.all())
    except DatabaseError as exc:
        logger.exception("Inventory list failed")
        raise QueryFailed("Failed to fetch inventory") from exc


def create_item(item_name, category, quantity, rate, hsn_sac="", specs=None) -> InventoryItem:
    """Add a stock item. ``quantity`` becomes both current and opening stock."""
    data = clean_or_raise(
        InventoryItemForm(
            {
                "item_name": item_name,
                "category": category,
                "hsn_sac": hsn_sac,
                "quantity": quantity,
                "rate": rate,
            }
        ),
        "Invalid inventory item",
    )
    typed = parse_specs(data["category"], specs)

    try:
        item = InventoryItem.objects.create(
            item_name=data["item_name"],
            category=data["category"],
            hsn_sac=data["hsn_sac"],
            quantity=data["quantity"],
            opening_quantity=data["quantity"],
            rate=data["rate"],
            specs=specs_to_document(typed),
        )
    except DatabaseError as exc:
        logger.exception("Inventory insert failed")
        raise PersistenceFailure("Failed to create inventory item") from exc

    logger.info("Created inventory item %s (%s)", item.pk, item.item_name)
    return item


@transaction.atomic
def delete_item(item_id):
    """Delete an item. Its purchases stay, with ``item`` set to NULL."""
    try:
        item = InventoryItem.objects.select_for_update().get(pk=item_id)
    except (InventoryItem.DoesNotExist, ValueError, TypeError) as exc:
        raise ItemNotFound(item_id) from exc
    item.delete()
    logger.info("Deleted inventory item %s", item_id)
