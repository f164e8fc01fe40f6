from .number_series import InvoiceSequence
