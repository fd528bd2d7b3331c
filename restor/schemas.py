from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Restaurant(BaseModel):
    # snapshot records carry extra keys (phone, hours, ...) that the map UI reads
    model_config = ConfigDict(extra="allow", frozen=True)

    id: int
    name: str | None = None
    address: str | None = None
    type: str | None = None
    rating: float | None = None
    latitude: float | None = None
    longitude: float | None = None

    @field_validator("rating", mode="before")
    @classmethod
    def lenient_rating(cls, value):
        """Accept "4,5" as 4.5; an unreadable rating becomes None."""
        if value is None or isinstance(value, (int, float)):
            return value
        try:
            return float(str(value).strip().replace(",", "."))
        except ValueError:
            return None

    @property
    def has_coordinates(self) -> bool:
        return bool(self.latitude) and bool(self.longitude)


class Dish(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    id: int
    name: str = Field(..., min_length=1)
    description: str | None = None
    category: str | None = None
    price: float | None = Field(default=None, ge=0)
    ingredients: tuple[str, ...] = ()
    restaurants: tuple[int, ...] = ()

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("dish name is blank")
        return value

    @field_validator("ingredients", mode="before")
    @classmethod
    def keep_string_ingredients(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            return tuple(i.strip() for i in value.split(",") if i.strip())
        if isinstance(value, (list, tuple)):
            return tuple(i for i in value if isinstance(i, str))
        return value

    @field_validator("restaurants", mode="before")
    @classmethod
    def none_is_empty(cls, value):
        return () if value is None else value


class SearchScope(str, Enum):
    all = "all"
    restaurants = "restaurants"
    dishes = "dishes"


class DishFilter(BaseModel):
    search: str | None = None
    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None

    @field_validator("search", "category")
    @classmethod
    def empty_is_absent(cls, value: str | None) -> str | None:
        return value or None

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def blank_price_is_absent(cls, value):
        # form submissions send "min_price=" for an untouched field
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SearchResults(BaseModel):
    restaurants: list[Restaurant] | None = None
    dishes: list[Dish] | None = None

    def to_payload(self) -> dict:
        """Only the scopes that were searched appear in the response."""
        payload = {}
        for key in ("restaurants", "dishes"):
            items = getattr(self, key)
            if items is not None:
                payload[key] = [item.model_dump(mode="json") for item in items]
        return payload
