from django import forms


class ExpenseForm(forms.Form):
    description = forms.CharField(max_length=255)
    amount = forms.DecimalField(max_digits=12, decimal_places=2)
    category = forms.CharField(max_length=100, required=False)
    date = forms.DateField(required=False)

    def clean_amount(self):
        amount = self.cleaned_data["amount"]
        if amount <= 0:
            raise forms.ValidationError("Amount must be greater than zero.")
        return amount


class ReportForm(forms.Form):
    """Report window. Unless both bounds are given the current month is reported."""

    from_date = forms.DateField(required=False)
    to_date = forms.DateField(required=False)
    detail = forms.BooleanField(required=False)

    def clean(self):
        cleaned = super().clean()
        start, end = cleaned.get("from_date"), cleaned.get("to_date")
        if start and end and start > end:
            raise forms.ValidationError("from_date must not be after to_date.")
        return cleaned


class MonthlyReportForm(forms.Form):
    year = forms.IntegerField(required=False, min_value=1900, max_value=9999)
