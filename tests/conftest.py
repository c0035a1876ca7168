"""Shared fixtures."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from pizzaservice.core.config import Settings
from pizzaservice.main import create_app
from pizzaservice.models import Customer, Menu, MenuItem


@pytest.fixture
def menu() -> Menu:
    return Menu.create()


@pytest.fixture
def abc_menu() -> Menu:
    return Menu([
        MenuItem("A", "Alpha", "first", Decimal("1.10")),
        MenuItem("B", "Beta", "second", Decimal("2.20")),
        MenuItem("C", "Gamma", "third", Decimal("3.30")),
    ])


@pytest.fixture
def anna() -> Customer:
    return Customer(
        salutation="Frau",
        first_name="Anna",
        last_name="Schmidt",
        street="Bahnhofstraße",
        house_number="12a",
        postal_code="12345",
        city="Berlin",
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        restaurant_name="Testeria",
        session_secret_key="test-secret",
        max_stored_sessions=50,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
