"""Read-only restaurant and dish collections.

A ``Catalog`` is built once by a loader and never mutated afterwards, so it
can be shared between concurrent requests without locking.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from restor.errors import not_found
from restor.schemas import Dish, Restaurant


def coerce_id(raw) -> int | None:
    """Path identifiers arrive as strings; anything non-numeric matches nothing."""
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return None


def _rating_key(restaurant: Restaurant):
    # unrated restaurants go last
    return (restaurant.rating is None, -(restaurant.rating or 0.0))


@dataclass(frozen=True)
class Catalog:
    restaurants: tuple[Restaurant, ...] = ()
    dishes: tuple[Dish, ...] = ()
    _restaurants_by_id: dict[int, Restaurant] = field(init=False, repr=False, compare=False)
    _dishes_by_id: dict[int, Dish] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "restaurants", tuple(self.restaurants))
        object.__setattr__(self, "dishes", tuple(self.dishes))
        object.__setattr__(self, "_restaurants_by_id", {r.id: r for r in self.restaurants})
        object.__setattr__(self, "_dishes_by_id", {d.id: d for d in self.dishes})

    def list_restaurants(self) -> list[Restaurant]:
        return sorted(self.restaurants, key=_rating_key)

    def get_restaurant(self, restaurant_id) -> Restaurant:
        restaurant = self.find_restaurant(restaurant_id)
        if restaurant is None:
            raise not_found("Restaurant not found")
        return restaurant

    def find_restaurant(self, restaurant_id) -> Restaurant | None:
        return self._restaurants_by_id.get(coerce_id(restaurant_id))

    def list_dishes(self) -> list[Dish]:
        return list(self.dishes)

    def get_dish(self, dish_id) -> Dish:
        dish = self.find_dish(dish_id)
        if dish is None:
            raise not_found("Dish not found")
        return dish

    def find_dish(self, dish_id) -> Dish | None:
        return self._dishes_by_id.get(coerce_id(dish_id))

    def counts(self) -> dict[str, int]:
        return {"restaurants": len(self.restaurants), "dishes": len(self.dishes)}
