import pytest

from restor.errors import CatalogError, ErrorKind
from restor.filters import collation_key, filter_dishes, split_terms, unified_search
from restor.schemas import Dish, DishFilter, Restaurant, SearchScope


def names(items):
    return [item.name for item in items]


def test_no_predicates_returns_everything_sorted(dishes):
    result = filter_dishes(dishes, DishFilter())
    assert names(result) == ["apple pie", "Borscht", "Margherita", "Pilaf", "Salmon roll"]


def test_max_price_scenario():
    dishes = [Dish(id=1, name="Pilaf", price=10), Dish(id=2, name="Borscht", price=6)]
    result = filter_dishes(dishes, DishFilter(max_price=8))
    assert [d.id for d in result] == [2]


def test_min_price_above_everything_is_empty(dishes):
    assert filter_dishes(dishes, DishFilter(min_price=1000)) == []


def test_search_matches_name_category_or_ingredient(dishes):
    assert names(filter_dishes(dishes, DishFilter(search="PILAF"))) == ["Pilaf"]
    assert names(filter_dishes(dishes, DishFilter(search="soup"))) == ["Borscht"]
    assert names(filter_dishes(dishes, DishFilter(search="rice"))) == ["Pilaf", "Salmon roll"]


def test_category_is_exact_match(dishes):
    assert names(filter_dishes(dishes, DishFilter(category="Soup"))) == ["Borscht"]
    assert filter_dishes(dishes, DishFilter(category="soup")) == []


def test_predicates_combine_conjunctively(dishes):
    predicates = DishFilter(search="dough", min_price=5, max_price=20)
    result = filter_dishes(dishes, predicates)
    assert names(result) == ["Margherita"]
    for dish in result:
        assert 5 <= dish.price <= 20


def test_result_is_subset(dishes):
    result = filter_dishes(dishes, DishFilter(min_price=5))
    assert all(d in dishes for d in result)
    assert all(d.price >= 5 for d in result)


def test_dish_without_price_fails_price_bounds():
    dishes = [Dish(id=1, name="Water"), Dish(id=2, name="Tea", price=1)]
    assert names(filter_dishes(dishes, DishFilter(min_price=0))) == ["Tea"]
    assert names(filter_dishes(dishes, DishFilter())) == ["Tea", "Water"]


def test_empty_strings_are_absent_predicates(dishes):
    assert len(filter_dishes(dishes, DishFilter(search="", category=""))) == len(dishes)


def test_collation_ignores_case_and_accents():
    words = ["éclair", "Zebra", "apple", "Ёлка", "ель"]
    assert sorted(words, key=collation_key) == ["apple", "éclair", "Zebra", "Ёлка", "ель"]


def test_split_terms():
    assert split_terms(" Pizza , ,SUSHI,") == ["pizza", "sushi"]


def test_unified_search_any_term(catalog):
    results = unified_search(catalog, "Pizza,Sushi", SearchScope.all)
    assert names(results.restaurants) == ["Pizza Place", "Sushi Bar"]
    assert names(results.dishes) == ["Margherita", "Salmon roll"]


def test_unified_search_restaurant_fields(catalog):
    assert names(unified_search(catalog, "dostyk").restaurants) == ["Sushi Bar"]
    assert names(unified_search(catalog, "cafe").restaurants) == ["Нават"]
    assert names(unified_search(catalog, "нав").restaurants) == ["Нават"]


def test_unified_search_scope(catalog):
    only_dishes = unified_search(catalog, "rice", SearchScope.dishes)
    assert only_dishes.restaurants is None
    assert names(only_dishes.dishes) == ["Pilaf", "Salmon roll"]
    assert only_dishes.to_payload().keys() == {"dishes"}

    only_restaurants = unified_search(catalog, "pizza", SearchScope.restaurants)
    assert only_restaurants.dishes is None
    assert only_restaurants.to_payload().keys() == {"restaurants"}


def test_unified_search_caps_results():
    from restor.catalog import Catalog

    big = Catalog(
        restaurants=[Restaurant(id=i, name=f"Pizza {i}") for i in range(30)],
        dishes=[Dish(id=i, name=f"Pizza slice {i}") for i in range(30)],
    )
    results = unified_search(big, "pizza")
    assert len(results.restaurants) == 20
    assert len(results.dishes) == 20
    assert [r.id for r in results.restaurants] == list(range(20))


def test_unified_search_only_separators_matches_nothing(catalog):
    results = unified_search(catalog, " , ")
    assert results.restaurants == []
    assert results.dishes == []


@pytest.mark.parametrize("query", [None, ""])
def test_unified_search_requires_query(catalog, query):
    with pytest.raises(CatalogError) as exc:
        unified_search(catalog, query)
    assert exc.value.kind == ErrorKind.INVALID_REQUEST
    assert exc.value.status_code == 400


def test_blank_price_bounds_are_absent():
    predicates = DishFilter(min_price="", max_price="  ")
    assert predicates.min_price is None
    assert predicates.max_price is None
    assert DishFilter(min_price="7.5").min_price == 7.5
