"""Helpers shared by the JSON API views of every app."""

import json
import logging
from functools import wraps

from django.http import JsonResponse

from core.exceptions import LedgerError, ReadFailure, ValidationError

logger = logging.getLogger(__name__)


def parse_json_body(request) -> dict:
    """Decode a JSON object body; anything else is a validation error."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValidationError("Malformed JSON body") from exc
    if not isinstance(data, dict):
        raise ValidationError("JSON body must be an object")
    return data


def json_error(message, status, **extra):
    return JsonResponse({"error": message, **extra}, status=status)


def ledger_errors(failure_message, read_failure_message="Failed to fetch records"):
    """Translate ledger errors raised by a view into JSON error responses.

    Validation errors carry their own message and field errors. Failed writes
    are answered with ``failure_message`` and failed reads with
    ``read_failure_message`` so storage detail never reaches the client.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            try:
                return view(request, *args, **kwargs)
            except ValidationError as exc:
                extra = {"fields": exc.fields} if exc.fields else {}
                return json_error(exc.public_message, 400, **extra)
            except ReadFailure as exc:
                logger.error("%s: %s", read_failure_message, exc)
                return json_error(read_failure_message, exc.status_code)
            except LedgerError as exc:
                if exc.status_code >= 500:
                    logger.error("%s: %s", failure_message, exc)
                    return json_error(failure_message, exc.status_code)
                return json_error(exc.public_message, exc.status_code)

        return wrapper

    return decorator


def form_errors(form) -> dict:
    return {field: [str(e) for e in errors] for field, errors in form.errors.items()}


def date_window_params(query):
    """Accept ``from``/``to`` as aliases of ``from_date``/``to_date``."""
    params = query.copy()
    for alias, name in (("from", "from_date"), ("to", "to_date")):
        if alias in params and name not in params:
            params[name] = params[alias]
    return params


def filtered(filterset_class, params, queryset):
    """Apply a django-filter FilterSet to ``queryset``; bad parameters are a ValidationError."""
    filterset = filterset_class(date_window_params(params), queryset=queryset)
    if not filterset.is_valid():
        raise ValidationError("Invalid filter", form_errors(filterset.form))
    return filterset.qs
