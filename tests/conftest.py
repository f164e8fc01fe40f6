"""Shared pytest fixtures for the stock ledger tests."""

from __future__ import annotations


import pytest

from inventory.services.items import create_item


@pytest.fixture
def make_item(db):
    """Factory creating inventory items with sensible defaults."""

    def _make(item_name="Widget", category="Other", quantity="100.00", rate="10.00", **kwargs):
        return create_item(item_name=item_name, category=category, quantity=quantity, rate=rate, **kwargs)

    return _make


@pytest.fixture
def widget(make_item):
    return make_item()


@pytest.fixture
def api_client(client, django_user_model):
    user = django_user_model.objects.create_user(username="clerk", password="not-used-in-tests")
    client.force_login(user)
    return client
