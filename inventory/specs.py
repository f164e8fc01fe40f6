"""Category specific item attributes.

Each inventory category carries its own small set of attributes (cartons for
FMCG, rack for garments, ...). They are persisted as one JSON document in
``inventory.specs`` but parsed into a typed value per category, so a garment
can never be stored with a ``warranty_months`` key by accident.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from core.exceptions import ValidationError


def _to_int(name: str, value: Any) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        number = int(str(value))
    except ValueError as exc:
        raise ValidationError(f"{name} must be a whole number", {name: ["Enter a whole number."]}) from exc
    if number < 0:
        raise ValidationError(f"{name} cannot be negative", {name: ["Must be zero or more."]})
    return number


def _to_decimal(name: str, value: Any) -> Optional[Decimal]:
    if value in (None, ""):
        return None
    try:
        number = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValidationError(f"{name} must be a number", {name: ["Enter a number."]}) from exc
    if not number.is_finite() or number < 0:
        raise ValidationError(f"{name} cannot be negative", {name: ["Must be zero or more."]})
    return number


def _to_text(name: str, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, (str, int)):
        raise ValidationError(f"{name} must be text", {name: ["Enter text."]})
    return str(value).strip()


@dataclass(frozen=True)
class FmcgSpecs:
    cartons: Optional[int] = None
    items_per_carton: Optional[int] = None

    @classmethod
    def parse(cls, raw: dict) -> "FmcgSpecs":
        return cls(
            cartons=_to_int("cartons", raw.get("cartons")),
            items_per_carton=_to_int("items_per_carton", raw.get("items_per_carton")),
        )


@dataclass(frozen=True)
class GarmentsSpecs:
    type: str = ""
    rack: str = ""

    @classmethod
    def parse(cls, raw: dict) -> "GarmentsSpecs":
        return cls(type=_to_text("type", raw.get("type")), rack=_to_text("rack", raw.get("rack")))


@dataclass(frozen=True)
class GrocerySpecs:
    bags: Optional[int] = None
    weight_per_bag: Optional[Decimal] = None

    @classmethod
    def parse(cls, raw: dict) -> "GrocerySpecs":
        return cls(
            bags=_to_int("bags", raw.get("bags")),
            weight_per_bag=_to_decimal("weight_per_bag", raw.get("weight_per_bag")),
        )


@dataclass(frozen=True)
class ElectronicsSpecs:
    brand: str = ""
    warranty_months: Optional[int] = None

    # older clients send the warranty period as "warranty"
    aliases = {"warranty": "warranty_months"}

    @classmethod
    def parse(cls, raw: dict) -> "ElectronicsSpecs":
        return cls(
            brand=_to_text("brand", raw.get("brand")),
            warranty_months=_to_int("warranty_months", raw.get("warranty_months", raw.get("warranty"))),
        )


@dataclass(frozen=True)
class OtherSpecs:
    """Free-form attributes for items that fit no other category."""

    attributes: dict = field(default_factory=dict)

    @classmethod
    def parse(cls, raw: dict) -> "OtherSpecs":
        return cls(attributes={str(k): v for k, v in raw.items()})

    def to_dict(self) -> dict:
        return dict(self.attributes)


SPEC_TYPES = {
    "FMCG": FmcgSpecs,
    "Garments": GarmentsSpecs,
    "Grocery": GrocerySpecs,
    "Electronics": ElectronicsSpecs,
    "Other": OtherSpecs,
}


def parse_specs(category: str, raw: Optional[dict]):
    """Validate ``raw`` against the shape of ``category`` and return the typed value."""
    try:
        spec_type = SPEC_TYPES[category]
    except KeyError as exc:
        raise ValidationError(f"Unknown category {category!r}", {"category": ["Unknown category."]}) from exc

    raw = raw or {}
    if not isinstance(raw, dict):
        raise ValidationError("specs must be an object", {"specs": ["Must be an object."]})

    if spec_type is not OtherSpecs:
        allowed = {f.name for f in fields(spec_type)} | set(getattr(spec_type, "aliases", {}))
        unknown = sorted(set(raw) - allowed)
        if unknown:
            raise ValidationError(
                f"Unexpected attributes for {category}: {', '.join(unknown)}",
                {"specs": [f"Unexpected attribute: {name}" for name in unknown]},
            )
    return spec_type.parse(raw)


def specs_to_document(specs) -> dict:
    """JSON-safe dict for storage. Empty attributes are dropped."""
    if isinstance(specs, OtherSpecs):
        return specs.to_dict()
    document = {}
    for key, value in asdict(specs).items():
        if value is None or value == "":
            continue
        document[key] = str(value) if isinstance(value, Decimal) else value
    return document
