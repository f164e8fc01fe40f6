import logging
import re

from django.conf import settings
from django.utils import timezone

from core.models import InvoiceSequence

logger = logging.getLogger(__name__)


def _ledger_setting(key, default):
    return getattr(settings, "LEDGER", {}).get(key, default)


class InvoiceNumberGenerator:
    """Derive display numbers for sales: ``INV-<year>-<sequence>``.

    Call ``next()`` inside the transaction that inserts the sale; the year's
    counter row stays locked until that transaction ends.
    """

    def __init__(self, *, prefix=None, min_width=None, today=None, using=None):
        self.prefix = prefix or _ledger_setting("INVOICE_PREFIX", "INV")
        self.min_width = min_width or _ledger_setting("INVOICE_MIN_WIDTH", 3)
        self._today = today or timezone.localdate
        self.using = using

    def format(self, year: int, number: int) -> str:
        return f"{self.prefix}-{year}-{str(number).zfill(self.min_width)}"

    def next(self) -> str:
        year = self._today().year
        number = InvoiceSequence.allocate(
            year,
            seed=lambda: self.highest_issued(year) + 1,
            using=self.using,
        )
        invoice_number = self.format(year, number)
        logger.debug("Allocated invoice number %s", invoice_number)
        return invoice_number

    def highest_issued(self, year: int) -> int:
        """Largest sequence already present in ``sales`` for ``year`` (0 if none).

        Lets a fresh counter continue after numbers written before the
        counter table existed.
        """
        from documents.models import SaleRecord

        head = f"{self.prefix}-{year}-"
        pattern = re.compile(rf"^{re.escape(head)}(\d+)$")
        numbers = (
            SaleRecord.objects.using(self.using)
            .filter(invoice_number__startswith=head)
            .values_list("invoice_number", flat=True)
        )
        highest = 0
        for value in numbers:
            match = pattern.match(value)
            if match:
                highest = max(highest, int(match.group(1)))
        return highest
