"""Build a Catalog from the JSON snapshot or from the relational tables."""
from __future__ import annotations

import json
import logging
import random
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from restor import models
from restor.catalog import Catalog
from restor.config import FALLBACK_BBOX
from restor.schemas import Dish, Restaurant

logger = logging.getLogger(__name__)


def patch_coordinates(restaurant: Restaurant, bbox=FALLBACK_BBOX, rng=random) -> Restaurant:
    """Place a restaurant without coordinates somewhere inside ``bbox``.

    Passing ``bbox=None`` leaves the record untouched.
    """
    if restaurant.has_coordinates or bbox is None:
        return restaurant
    lat_min, lat_max, lng_min, lng_max = bbox
    return restaurant.model_copy(update={
        "latitude": rng.uniform(lat_min, lat_max),
        "longitude": rng.uniform(lng_min, lng_max),
    })


def build_restaurants(raw: Iterable, bbox=FALLBACK_BBOX, rng=random) -> list[Restaurant]:
    restaurants: list[Restaurant] = []
    seen: set[int] = set()
    for record in raw:
        if not isinstance(record, dict):
            logger.warning("Skipping restaurant record that is not an object: %r", record)
            continue
        try:
            restaurant = Restaurant.model_validate(record)
        except ValidationError as e:
            logger.warning("Skipping malformed restaurant %r: %s", record.get("id"), e)
            continue
        if restaurant.id in seen:
            logger.warning("Skipping duplicate restaurant id %s", restaurant.id)
            continue
        seen.add(restaurant.id)
        restaurants.append(patch_coordinates(restaurant, bbox, rng))
    return restaurants


def build_dishes(raw: Iterable) -> list[Dish]:
    dishes: list[Dish] = []
    seen: set[int] = set()
    for record in raw:
        if not isinstance(record, dict) or not record:
            logger.debug("Skipping empty dish record: %r", record)
            continue
        try:
            dish = Dish.model_validate(record)
        except ValidationError as e:
            logger.warning("Skipping malformed dish %r: %s", record.get("id"), e)
            continue
        if dish.id in seen:
            logger.warning("Skipping duplicate dish id %s", dish.id)
            continue
        seen.add(dish.id)
        dishes.append(dish)
    return dishes


def _read_json(path: Path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def load_snapshot(restaurants_path, dishes_path, bbox=FALLBACK_BBOX, rng=random) -> Catalog:
    raw_restaurants = _read_json(Path(restaurants_path))
    # the restaurants export wraps its list, the dishes export does not
    if isinstance(raw_restaurants, dict):
        raw_restaurants = raw_restaurants.get("restaurants") or []
    raw_dishes = _read_json(Path(dishes_path))
    if not isinstance(raw_dishes, list):
        raise ValueError(f"{dishes_path} does not contain a list of dishes")

    catalog = Catalog(
        restaurants=build_restaurants(raw_restaurants, bbox, rng),
        dishes=build_dishes(raw_dishes),
    )
    logger.info(
        "Loaded %d restaurants and %d dishes from JSON",
        len(catalog.restaurants), len(catalog.dishes),
    )
    return catalog


def _row_dict(row, columns: Iterable[str]) -> dict:
    return {name: getattr(row, name) for name in columns}


def load_database(session: Session, bbox=FALLBACK_BBOX, rng=random) -> Catalog:
    restaurant_rows = session.scalars(
        select(models.Restaurant).order_by(models.Restaurant.id)
    ).all()
    dish_rows = session.scalars(select(models.Dish).order_by(models.Dish.id)).all()
    links = session.execute(
        select(models.restaurant_dishes.c.dish_id, models.restaurant_dishes.c.restaurant_id)
    ).all()

    served_at: dict[int, list[int]] = defaultdict(list)
    for dish_id, restaurant_id in links:
        served_at[dish_id].append(restaurant_id)

    restaurant_columns = models.Restaurant.__table__.columns.keys()
    dish_columns = models.Dish.__table__.columns.keys()
    raw_dishes = []
    for row in dish_rows:
        record = _row_dict(row, dish_columns)
        record["restaurants"] = sorted(served_at.get(row.id, []))
        raw_dishes.append(record)

    catalog = Catalog(
        restaurants=build_restaurants(
            (_row_dict(row, restaurant_columns) for row in restaurant_rows), bbox, rng
        ),
        dishes=build_dishes(raw_dishes),
    )
    logger.info(
        "Loaded %d restaurants and %d dishes from the database",
        len(catalog.restaurants), len(catalog.dishes),
    )
    return catalog
