"""Copy the JSON snapshot into the configured database.

    python -m restor.seed [data_dir]
"""
import logging
import sys
from pathlib import Path

from sqlalchemy import insert, select
from sqlalchemy.orm import Session

from restor import config, db, models
from restor.catalog import Catalog
from restor.loaders import load_snapshot

logger = logging.getLogger(__name__)

RESTAURANT_FIELDS = ("id", "name", "address", "type", "rating", "latitude", "longitude")
DISH_FIELDS = ("id", "name", "description", "category", "price")


def seed_catalog(session: Session, catalog: Catalog) -> dict:
    """Insert records whose ids are not in the tables yet; existing rows are left alone."""
    existing_restaurants = set(session.scalars(select(models.Restaurant.id)))
    existing_dishes = set(session.scalars(select(models.Dish.id)))
    known_restaurants = existing_restaurants | {r.id for r in catalog.restaurants}

    added = {"restaurants": 0, "dishes": 0, "links": 0}
    for restaurant in catalog.restaurants:
        if restaurant.id in existing_restaurants:
            continue
        session.add(models.Restaurant(**{f: getattr(restaurant, f) for f in RESTAURANT_FIELDS}))
        added["restaurants"] += 1
    session.flush()

    for dish in catalog.dishes:
        if dish.id in existing_dishes:
            continue
        session.add(models.Dish(
            ingredients=list(dish.ingredients),
            **{f: getattr(dish, f) for f in DISH_FIELDS},
        ))
        added["dishes"] += 1
        links = [
            {"restaurant_id": rid, "dish_id": dish.id}
            for rid in dish.restaurants if rid in known_restaurants
        ]
        if links:
            session.flush()
            session.execute(insert(models.restaurant_dishes), links)
            added["links"] += len(links)

    session.commit()
    return added


def main(argv=None):
    config.configure_logging()
    argv = sys.argv[1:] if argv is None else argv
    data_dir = Path(argv[0]) if argv else config.DATA_DIR

    # missing coordinates stay NULL in the table and are patched when served
    catalog = load_snapshot(
        data_dir / config.RESTAURANTS_FILE, data_dir / config.DISHES_FILE, bbox=None
    )
    db.init_db()
    with db.get_sessionmaker()() as session:
        added = seed_catalog(session, catalog)
    logger.info(
        "Seeded %d restaurants, %d dishes, %d links",
        added["restaurants"], added["dishes"], added["links"],
    )
    return added


if __name__ == "__main__":
    main()
