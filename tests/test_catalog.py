import pytest

from restor.catalog import Catalog, coerce_id
from restor.errors import CatalogError, ErrorKind


def test_list_restaurants_sorted_by_rating_desc(catalog):
    ratings = [r.rating for r in catalog.list_restaurants()]
    assert ratings == [4.7, 4.1, 3.9, None]


def test_get_restaurant_returns_equal_record(catalog, restaurants):
    for restaurant in restaurants:
        assert catalog.get_restaurant(restaurant.id) == restaurant
        assert catalog.get_restaurant(str(restaurant.id)) == restaurant


@pytest.mark.parametrize("unknown", [42, "42", "abc", ""])
def test_get_restaurant_unknown_is_not_found(catalog, unknown):
    with pytest.raises(CatalogError) as exc:
        catalog.get_restaurant(unknown)
    assert exc.value.kind == ErrorKind.NOT_FOUND
    assert exc.value.status_code == 404


def test_get_dish(catalog):
    assert catalog.get_dish("2").name == "Borscht"
    with pytest.raises(CatalogError) as exc:
        catalog.get_dish(404)
    assert exc.value.kind == ErrorKind.NOT_FOUND


def test_list_dishes_keeps_collection_order(catalog, dishes):
    assert catalog.list_dishes() == dishes


def test_reads_do_not_mutate(catalog):
    first = catalog.list_restaurants()
    first.clear()
    assert catalog.list_restaurants() == catalog.list_restaurants()
    assert len(catalog.list_restaurants()) == 4


def test_empty_catalog():
    empty = Catalog()
    assert empty.list_restaurants() == []
    assert empty.counts() == {"restaurants": 0, "dishes": 0}


def test_coerce_id():
    assert coerce_id(" 7 ") == 7
    assert coerce_id(3) == 3
    assert coerce_id("x1") is None
    assert coerce_id(None) is None
