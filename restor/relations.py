from restor.catalog import Catalog, coerce_id
from restor.schemas import Dish, Restaurant


def menu_for(catalog: Catalog, restaurant_id) -> list[Dish]:
    """Dishes served at a restaurant; unknown restaurants have an empty menu."""
    rid = coerce_id(restaurant_id)
    if rid is None:
        return []
    return [dish for dish in catalog.dishes if rid in dish.restaurants]


def restaurants_serving(catalog: Catalog, dish_id) -> list[Restaurant]:
    """Restaurants offering a dish.

    An unknown dish yields an empty list rather than NotFound, unlike
    ``Catalog.get_dish``. Dangling restaurant ids are skipped.
    """
    dish = catalog.find_dish(dish_id)
    if dish is None or not dish.restaurants:
        return []
    served = set(dish.restaurants)
    return [r for r in catalog.restaurants if r.id in served]
