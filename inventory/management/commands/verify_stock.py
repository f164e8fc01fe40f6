from django.core.management.base import BaseCommand, CommandError

from inventory.models import InventoryItem
from inventory.services.stock import StockMutationEngine


class Command(BaseCommand):
    help = "Check that every item's quantity equals opening stock + purchases - sales"

    def add_arguments(self, parser):
        parser.add_argument("--item", type=int, action="append", help="Only check this item id (repeatable)")

    def handle(self, *args, **opts):
        engine = StockMutationEngine()
        items = InventoryItem.objects.order_by("pk")
        if opts["item"]:
            items = items.filter(pk__in=opts["item"])

        checked = mismatched = 0
        for item in items:
            ok, stored, expected = engine.verify(item)
            checked += 1
            if not ok:
                mismatched += 1
                self.stderr.write(f"Item {item.pk} {item.item_name}: stored {stored}, expected {expected}")

        if mismatched:
            raise CommandError(f"{mismatched} of {checked} items do not match the ledger")

        self.stdout.write(self.style.SUCCESS(f"{checked} items match the ledger"))
