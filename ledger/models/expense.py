from django.db import models


class Expense(models.Model):
    """Money spent outside of stock purchases (rent, salaries, utilities)."""

    description = models.CharField(max_length=255)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    category = models.CharField(max_length=100, blank=True, default="")
    date = models.DateField()

    class Meta:
        db_table = "expenses"
        ordering = ("-date", "-id")
        indexes = [models.Index(fields=["date"])]

    def __str__(self):
        return f"{self.date} {self.description} {self.amount}"
