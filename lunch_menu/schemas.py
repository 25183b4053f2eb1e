import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, PositiveFloat, field_validator

from lunch_menu.core.errors import InvalidDateFormatError
from lunch_menu.fetch.utils import parse_iso_date


class MenuCategory(str, Enum):
    SOUP = "soup"
    MAIN = "main"
    SIDE = "side"
    DESSERT = "dessert"
    DRINK = "drink"
    OTHER = "other"


# Categories the LLM tends to answer with for Czech pages
CATEGORY_ALIASES = {
    "polévka": MenuCategory.SOUP,
    "polévky": MenuCategory.SOUP,
    "hlavní jídlo": MenuCategory.MAIN,
    "hlavní chod": MenuCategory.MAIN,
    "příloha": MenuCategory.SIDE,
    "přílohy": MenuCategory.SIDE,
    "dezert": MenuCategory.DESSERT,
    "nápoj": MenuCategory.DRINK,
    "nápoje": MenuCategory.DRINK,
    "ostatní": MenuCategory.OTHER,
}


ALLERGEN_SEPARATORS = re.compile(r"[,;\s()\[\]]+")


class MenuItem(BaseModel):
    name: str = Field(min_length=1)
    price: Optional[float] = Field(None, description="Price in CZK")
    allergens: Optional[List[str]] = Field(None, description="List of allergen codes")
    weight: Optional[str] = Field(None, description="Weight/portion size with unit")
    category: MenuCategory = MenuCategory.OTHER

    @field_validator("category", mode="before")
    @classmethod
    def map_category(cls, value):
        if isinstance(value, MenuCategory):
            return value
        key = str(value or "").strip().lower()
        try:
            return MenuCategory(key)
        except ValueError:
            return CATEGORY_ALIASES.get(key, MenuCategory.OTHER)

    @field_validator("allergens", mode="before")
    @classmethod
    def stringify_allergens(cls, value):
        if value is None:
            return None
        # "1, 3, 7" or "(14)" as a single string
        if isinstance(value, str):
            return [code for code in ALLERGEN_SEPARATORS.split(value) if code]
        if isinstance(value, int) and not isinstance(value, bool):
            return [str(value)]
        if not isinstance(value, (list, tuple)):
            raise ValueError("allergens must be a list of codes")
        return [str(code).strip() for code in value if str(code).strip()]


class ExtractionResult(BaseModel):
    model_config = {"frozen": True}

    items: List[MenuItem]


class RestaurantMenu(BaseModel):
    restaurant_name: str = Field(description="Name of the restaurant")
    date: str = Field(description="Date in YYYY-MM-DD format")
    day_of_week: str = Field(description="Czech weekday name derived from date")
    menu_items: List[MenuItem] = Field(default_factory=list)
    daily_menu: bool = Field(description="Whether a daily menu was found")
    recommendedMeal: Optional[str] = None


class Preferences(BaseModel):
    price: Optional[PositiveFloat] = Field(None, description="Maximum price")
    allergens: Optional[List[int]] = Field(None, description="Allergen codes to exclude")


class SummarizeRequest(BaseModel):
    url: str
    date: str
    preferences: Optional[Preferences] = None

    @field_validator("url")
    @classmethod
    def check_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("url must be a non-empty string")
        if not value.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return value

    @field_validator("date")
    @classmethod
    def check_date(cls, value: str) -> str:
        value = value.strip()
        try:
            parse_iso_date(value)
        except InvalidDateFormatError:
            raise ValueError("date must be a valid date in YYYY-MM-DD format")
        return value
