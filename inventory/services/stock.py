import logging
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db import DatabaseError, connections, router, transaction
from django.db.models import Sum

from core.exceptions import DeltaInvalid, InsufficientStock, ItemNotFound, LedgerError, PersistenceFailure
from documents.models import PurchaseRecord, SaleRecord
from inventory.models import InventoryItem

logger = logging.getLogger(__name__)

QTY = Decimal("0.01")


def to_delta(value) -> Decimal:
    try:
        delta = Decimal(str(value)).quantize(QTY)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise DeltaInvalid(f"Quantity delta {value!r} is not a number") from exc
    if not delta.is_finite() or delta == 0:
        raise DeltaInvalid("Quantity delta must be non-zero")
    return delta


class StockMutationEngine:
    """Apply quantity deltas to inventory rows together with their ledger record.

    Every call runs in one database transaction:
    1) Lock the affected inventory rows (select_for_update, ascending id)
    2) Let the caller's factory write the ledger record (purchase or sale)
    3) Write the new quantities
    4) Commit, or roll back all of it

    The row locks are held until the transaction ends, so two requests against
    the same item serialize and the read-modify-write of ``quantity`` cannot
    lose an update. Requests against different items never wait for each other.
    """

    def __init__(self, *, using=None, allow_negative=None, lock_timeout_ms=None):
        ledger_settings = getattr(settings, "LEDGER", {})
        self.using = using or router.db_for_write(InventoryItem)
        self.allow_negative = (
            ledger_settings.get("ALLOW_NEGATIVE_STOCK", True) if allow_negative is None else allow_negative
        )
        self.lock_timeout_ms = (
            ledger_settings.get("LOCK_TIMEOUT_MS") if lock_timeout_ms is None else lock_timeout_ms
        )

    def apply(self, item_id, delta, ledger_entry_factory):
        """Apply one signed delta. ``ledger_entry_factory(item)`` creates the record."""
        return self.apply_batch([(item_id, delta)], lambda items: ledger_entry_factory(items[int(item_id)]))

    def apply_batch(self, deltas, ledger_entry_factory):
        """Apply several ``(item_id, delta)`` pairs under a single ledger record.

        ``ledger_entry_factory`` receives ``{item_id: locked InventoryItem}``
        and must return the record it created. Deltas for the same item are
        added up first.
        """
        combined = self._combine(deltas)

        try:
            with transaction.atomic(using=self.using):
                self._set_lock_timeout()
                items = self._lock(sorted(combined))
                record = ledger_entry_factory(items)

                for item_id, delta in combined.items():
                    item = items[item_id]
                    new_quantity = item.quantity + delta
                    if delta < 0 and new_quantity < 0 and not self.allow_negative:
                        raise InsufficientStock(
                            f"Not enough stock for {item.item_name}: on hand {item.quantity}, requested {-delta}",
                            {"quantity": [f"Only {item.quantity} in stock for item {item_id}."]},
                        )
                    item.quantity = new_quantity
                    item._change_reason = f"{type(record).__name__} {record.pk}"
                    item.save(update_fields=["quantity"])
        except LedgerError:
            raise
        except DatabaseError as exc:
            logger.exception("Stock mutation failed for items %s", sorted(combined))
            raise PersistenceFailure(f"Stock mutation failed: {exc}") from exc

        logger.info(
            "Applied %s for items %s",
            record,
            ", ".join(f"{item_id}:{delta:+}" for item_id, delta in combined.items()),
        )
        return record

    def _combine(self, deltas):
        combined = {}
        for item_id, delta in deltas:
            if item_id in (None, ""):
                raise ItemNotFound(item_id)
            try:
                key = int(item_id)
            except (TypeError, ValueError) as exc:
                raise ItemNotFound(item_id) from exc
            combined[key] = combined.get(key, Decimal("0.00")) + to_delta(delta)
        if not combined:
            raise DeltaInvalid("No quantity deltas to apply")
        return combined

    def _lock(self, item_ids):
        locked = {
            item.pk: item
            for item in InventoryItem.objects.using(self.using).select_for_update().filter(pk__in=item_ids).order_by("pk")
        }
        for item_id in item_ids:
            if item_id not in locked:
                raise ItemNotFound(item_id)
        return locked

    def _set_lock_timeout(self):
        connection = connections[self.using]
        if connection.vendor == "postgresql" and self.lock_timeout_ms:
            with connection.cursor() as cursor:
                cursor.execute(f"SET LOCAL lock_timeout = {int(self.lock_timeout_ms)}")

    # Conservation check

    def expected_quantity(self, item) -> Decimal:
        """Opening stock + purchases - sold line quantities, recomputed from the ledger."""
        purchased = (
            PurchaseRecord.objects.using(self.using)
            .filter(item_id=item.pk)
            .aggregate(total=Sum("quantity"))["total"]
            or Decimal("0.00")
        )
        sold = Decimal("0.00")
        for lines in SaleRecord.objects.using(self.using).values_list("items", flat=True).iterator():
            for line in lines or []:
                if str(line.get("item_id")) != str(item.pk):
                    continue
                quantity = Decimal(str(line.get("quantity") or 0))
                if quantity > 0:
                    sold += quantity
        return (item.opening_quantity + purchased - sold).quantize(QTY)

    def verify(self, item):
        """Return ``(ok, stored, expected)`` for one item."""
        expected = self.expected_quantity(item)
        return item.quantity == expected, item.quantity, expected
