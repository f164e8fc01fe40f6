from decimal import Decimal

from django import forms

MONEY = {"max_digits": 12, "decimal_places": 2}


class TaxFieldsMixin(forms.Form):
    """CGST/SGST/IGST as absolute amounts. Missing means zero."""

    cgst = forms.DecimalField(required=False, min_value=Decimal("0"), **MONEY)
    sgst = forms.DecimalField(required=False, min_value=Decimal("0"), **MONEY)
    igst = forms.DecimalField(required=False, min_value=Decimal("0"), **MONEY)

    def clean(self):
        cleaned = super().clean()
        for name in ("cgst", "sgst", "igst"):
            if cleaned.get(name) is None and name not in self.errors:
                cleaned[name] = Decimal("0.00")
        return cleaned


class PurchaseForm(TaxFieldsMixin):
    item_id = forms.IntegerField(min_value=1)
    quantity = forms.DecimalField(**MONEY)
    rate = forms.DecimalField(**MONEY)
    date = forms.DateField(required=False)

    vendor_name = forms.CharField(max_length=255, required=False)
    invoice_number = forms.CharField(max_length=255, required=False)

    def clean_quantity(self):
        quantity = self.cleaned_data["quantity"]
        if quantity <= 0:
            raise forms.ValidationError("Quantity must be greater than zero.")
        return quantity

    def clean_rate(self):
        rate = self.cleaned_data["rate"]
        if rate <= 0:
            raise forms.ValidationError("Rate must be greater than zero.")
        return rate
