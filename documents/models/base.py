class ImmutableRecordMixin:
    """Ledger rows are written once. Saving an existing row again is refused."""

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError(f"{type(self).__name__} {self.pk} is a ledger record and cannot be changed.")
        super().save(*args, **kwargs)
