from core.api import form_errors
from core.exceptions import ValidationError


def clean_or_raise(form, message="Invalid input"):
    """Run a Django form as a validator; return cleaned_data or raise ValidationError."""
    if not form.is_valid():
        errors = form_errors(form)
        missing = sorted(name for name, msgs in errors.items() if "This field is required." in msgs)
        if missing:
            message = f"Missing required fields: {', '.join(missing)}"
        raise ValidationError(message, errors)
    return form.cleaned_data
