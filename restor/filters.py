"""Dish filtering and the unified comma-separated search."""
from __future__ import annotations

import unicodedata
from collections.abc import Iterable

from restor.catalog import Catalog
from restor.errors import invalid_request
from restor.schemas import Dish, DishFilter, Restaurant, SearchResults, SearchScope

SEARCH_LIMIT = 20


def collation_key(text: str) -> tuple[str, str]:
    """Case- and accent-insensitive ordering, ties broken by the raw text."""
    folded = unicodedata.normalize("NFKD", text.casefold())
    base = "".join(ch for ch in folded if not unicodedata.combining(ch))
    return base, text


def _contains(value: str | None, needle: str) -> bool:
    return bool(value) and needle in value.lower()


def dish_matches_text(dish: Dish, needle: str) -> bool:
    return (
        _contains(dish.name, needle)
        or _contains(dish.category, needle)
        or any(_contains(ingredient, needle) for ingredient in dish.ingredients)
    )


def restaurant_matches_text(restaurant: Restaurant, needle: str) -> bool:
    return (
        _contains(restaurant.name, needle)
        or _contains(restaurant.address, needle)
        or _contains(restaurant.type, needle)
    )


def _price_at_least(dish: Dish, bound: float) -> bool:
    return dish.price is not None and dish.price >= bound


def _price_at_most(dish: Dish, bound: float) -> bool:
    return dish.price is not None and dish.price <= bound


def filter_dishes(dishes: Iterable[Dish], predicates: DishFilter | None = None) -> list[Dish]:
    predicates = predicates or DishFilter()
    result = list(dishes)

    if predicates.search:
        needle = predicates.search.lower()
        result = [d for d in result if dish_matches_text(d, needle)]
    if predicates.category:
        result = [d for d in result if d.category == predicates.category]
    if predicates.min_price is not None:
        result = [d for d in result if _price_at_least(d, predicates.min_price)]
    if predicates.max_price is not None:
        result = [d for d in result if _price_at_most(d, predicates.max_price)]

    result.sort(key=lambda d: collation_key(d.name))
    return result


def split_terms(query: str) -> list[str]:
    return [term.strip().lower() for term in query.split(",") if term.strip()]


def unified_search(
    catalog: Catalog,
    query: str | None,
    scope: SearchScope = SearchScope.all,
    limit: int = SEARCH_LIMIT,
) -> SearchResults:
    """Match records against any of the comma-separated terms in ``query``."""
    if not query:
        raise invalid_request("Query parameter is required")

    terms = split_terms(query)
    results = SearchResults()

    if scope in (SearchScope.all, SearchScope.restaurants):
        results.restaurants = [
            r for r in catalog.restaurants
            if any(restaurant_matches_text(r, t) for t in terms)
        ][:limit]

    if scope in (SearchScope.all, SearchScope.dishes):
        results.dishes = [
            d for d in catalog.dishes
            if any(dish_matches_text(d, t) for t in terms)
        ][:limit]

    return results
