from django.db import IntegrityError, models, transaction


class InvoiceSequence(models.Model):
    """Per-year invoice counter.

    The important part is *concurrency safety*:
    - We lock the row for the year (select_for_update)
    - We read next_number
    - We increment next_number and save
    - The caller's transaction commits the counter together with the sale

    Two sales committing at the same time therefore never share a number,
    unlike deriving the number from ``count(sales) + 1``.
    """

    year = models.PositiveIntegerField(unique=True)
    next_number = models.PositiveIntegerField(default=1)

    class Meta:
        db_table = "invoice_sequences"
        ordering = ["year"]

    def __str__(self):
        return f"{self.year}: next {self.next_number}"

    @classmethod
    def allocate(cls, year: int, *, seed=None, using=None) -> int:
        """Return the next sequence number for ``year`` and advance the counter.

        Must run inside the transaction that persists the number, otherwise the
        lock is released before the number is used.

        ``seed`` is called once, when the year has no counter yet, and returns
        the first number to hand out.
        """
        manager = cls.objects.db_manager(using)

        if not manager.filter(year=year).exists():
            start = seed() if seed else 1
            try:
                # savepoint: a concurrent creator wins and we fall through to the lock
                with transaction.atomic(using=using):
                    manager.create(year=year, next_number=start)
            except IntegrityError:
                pass

        series = manager.select_for_update().get(year=year)
        current = series.next_number
        series.next_number = current + 1
        series.save(update_fields=["next_number"])
        return current
