"""
Pytest configuration and fixtures for warehouse tests
"""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from warehouse.inventory import Product, Store


@pytest.fixture
def milk() -> Product:
    """Expired food product"""
    return Product.food(1, "Milk", Decimal("2.5"), 10, date(2020, 1, 1))


@pytest.fixture
def radio() -> Product:
    """Electronics product"""
    return Product.electronics(2, "Radio", Decimal("49.99"), 3, 12)


@pytest.fixture
def store() -> Store:
    """Empty store"""
    return Store()


@pytest.fixture
def filled_store(milk: Product, radio: Product) -> Store:
    """Store holding Milk and Radio"""
    s = Store()
    s.add(milk)
    s.add(radio)
    return s


@pytest.fixture
def products_file(tmp_path: Path) -> Path:
    """Path of a (not yet created) products file"""
    return tmp_path / "products.csv"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path: Path):
    """Isolate tests from WAREHOUSE_* variables and any .env in the cwd"""
    for key in ("WAREHOUSE_FILE", "WAREHOUSE_CHECK_INTERVAL", "WAREHOUSE_LOG_LEVEL"):
        # setenv first so teardown also removes values a .env load puts in os.environ
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
