"""Tests for StockMutationEngine: locking, atomicity and the conservation check."""

from __future__ import annotations

from datetime import date

import pytest
from django.db import IntegrityError

from core.exceptions import DeltaInvalid, InsufficientStock, ItemNotFound, PersistenceFailure
from documents.models import PurchaseRecord
from inventory.services.stock import StockMutationEngine

from tests.helpers import D, reload

pytestmark = pytest.mark.django_db


def purchase_factory(quantity, rate="5.00"):
    def _factory(item):
        return PurchaseRecord.objects.create(item=item, quantity=quantity, rate=rate, date=date(2026, 10, 1))

    return _factory


def test_apply_writes_record_and_quantity_together(widget):
    record = StockMutationEngine().apply(widget.pk, D("25"), purchase_factory("25"))

    assert isinstance(record, PurchaseRecord)
    assert record.item_id == widget.pk
    assert reload(widget).quantity == D("125.00")


def test_apply_records_quantity_history(widget):
    record = StockMutationEngine().apply(widget.pk, D("5"), purchase_factory("5"))

    latest = widget.history.order_by("-history_id").first()
    assert latest.quantity == D("105.00")
    assert latest.history_change_reason == f"PurchaseRecord {record.pk}"


@pytest.mark.parametrize("delta", [0, "0.00", "abc", None])
def test_apply_rejects_zero_or_invalid_delta(widget, delta):
    with pytest.raises(DeltaInvalid):
        StockMutationEngine().apply(widget.pk, delta, purchase_factory("1"))

    assert PurchaseRecord.objects.count() == 0
    assert reload(widget).quantity == D("100.00")


def test_apply_unknown_item_raises_item_not_found(db):
    with pytest.raises(ItemNotFound) as excinfo:
        StockMutationEngine().apply(9999, D("1"), purchase_factory("1"))

    assert excinfo.value.item_id == 9999
    assert PurchaseRecord.objects.count() == 0


def test_failing_factory_leaves_no_trace(widget):
    def broken(item):
        PurchaseRecord.objects.create(item=item, quantity="3", rate="1", date=date(2026, 10, 1))
        raise RuntimeError("printer on fire")

    with pytest.raises(RuntimeError):
        StockMutationEngine().apply(widget.pk, D("3"), broken)

    assert PurchaseRecord.objects.count() == 0
    assert reload(widget).quantity == D("100.00")


def test_database_error_becomes_persistence_failure(widget):
    def violates(item):
        raise IntegrityError("duplicate key")

    with pytest.raises(PersistenceFailure):
        StockMutationEngine().apply(widget.pk, D("-1"), violates)

    assert reload(widget).quantity == D("100.00")


def test_negative_stock_allowed_by_default(widget):
    StockMutationEngine().apply(widget.pk, D("-150"), purchase_factory("1"))

    assert reload(widget).quantity == D("-50.00")


def test_negative_stock_can_be_refused(widget):
    engine = StockMutationEngine(allow_negative=False)

    with pytest.raises(InsufficientStock):
        engine.apply(widget.pk, D("-150"), purchase_factory("1"))

    assert PurchaseRecord.objects.count() == 0
    assert reload(widget).quantity == D("100.00")


def test_batch_sums_deltas_per_item(make_item):
    a = make_item("A", quantity="10")
    b = make_item("B", quantity="10")
    seen = {}

    def factory(items):
        seen.update(items)
        return PurchaseRecord.objects.create(item=items[a.pk], quantity="1", rate="1", date=date(2026, 10, 1))

    StockMutationEngine().apply_batch([(a.pk, "-2"), (b.pk, "-3"), (a.pk, "-1")], factory)

    assert sorted(seen) == sorted([a.pk, b.pk])
    assert reload(a).quantity == D("7.00")
    assert reload(b).quantity == D("7.00")


def test_batch_with_one_missing_item_changes_nothing(make_item):
    a = make_item("A", quantity="10")

    with pytest.raises(ItemNotFound):
        StockMutationEngine().apply_batch([(a.pk, "-2"), (424242, "-1")], lambda items: None)

    assert reload(a).quantity == D("10.00")


def test_verify_matches_ledger(widget):
    engine = StockMutationEngine()
    engine.apply(widget.pk, D("40"), purchase_factory("40"))

    ok, stored, expected = engine.verify(reload(widget))

    assert ok
    assert stored == expected == D("140.00")


def test_verify_detects_out_of_band_changes(widget):
    # bypass the engine on purpose
    type(widget).objects.filter(pk=widget.pk).update(quantity=D("1.00"))

    ok, stored, expected = StockMutationEngine().verify(reload(widget))

    assert not ok
    assert stored == D("1.00")
    assert expected == D("100.00")
