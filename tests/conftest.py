import pytest
from fastapi.testclient import TestClient

from main import app
from restor.catalog import Catalog
from restor.schemas import Dish, Restaurant
from restor.store import CatalogStore, get_store


@pytest.fixture
def restaurants():
    return [
        Restaurant(id=1, name="Pizza Place", address="Abay ave 10", type="Pizzeria", rating=4.1,
                   latitude=43.25, longitude=76.95),
        Restaurant(id=2, name="Sushi Bar", address="Dostyk 5", type="Japanese", rating=4.7,
                   latitude=43.24, longitude=76.93),
        Restaurant(id=3, name="Нават", address="Satpayev 3", type="Cafe", rating=None,
                   latitude=43.22, longitude=76.90),
        Restaurant(id=4, name="Empty Kitchen", address="Tole bi 1", type="Canteen", rating=3.9,
                   latitude=43.21, longitude=76.88),
    ]


@pytest.fixture
def dishes():
    return [
        Dish(id=1, name="Pilaf", category="Main", price=10, ingredients=["rice", "lamb"],
             restaurants=[3]),
        Dish(id=2, name="Borscht", category="Soup", price=6, ingredients=["beet", "cabbage"],
             restaurants=[3]),
        Dish(id=3, name="Margherita", category="Pizza", price=12,
             ingredients=["dough", "tomato", "mozzarella"], restaurants=[1]),
        Dish(id=4, name="Salmon roll", category="Sushi", price=9, ingredients=["rice", "salmon"],
             restaurants=[2, 99]),
        Dish(id=5, name="apple pie", category="Dessert", price=4, ingredients=["apple", "dough"],
             restaurants=[]),
    ]


@pytest.fixture
def catalog(restaurants, dishes):
    return Catalog(restaurants=restaurants, dishes=dishes)


@pytest.fixture
def store(catalog):
    return CatalogStore.from_catalog(catalog)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
