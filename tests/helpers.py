from decimal import Decimal


def reload(item):
    item.refresh_from_db()
    return item


def D(value) -> Decimal:
    return Decimal(str(value))
