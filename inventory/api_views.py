from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from core.api import ledger_errors, parse_json_body
from inventory.services.items import create_item, item_as_dict, list_items


@login_required
@require_http_methods(["GET", "POST"])
@ledger_errors("Failed to create inventory item", "Failed to fetch inventory")
def api_inventory(request):
    if request.method == "GET":
        return JsonResponse({"items": [item_as_dict(item) for item in list_items()]})

    body = parse_json_body(request)
    item = create_item(
        item_name=body.get("item_name"),
        category=body.get("category"),
        hsn_sac=body.get("hsn_sac"),
        quantity=body.get("quantity"),
        rate=body.get("rate"),
        specs=body.get("specs"),
    )
    return JsonResponse({"id": item.id}, status=201)
