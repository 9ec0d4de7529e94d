"""TheMealDB client.

Meals come back flat: up to twenty numbered `strIngredientN`/`strMeasureN`
pairs instead of a list. That scan belongs to this provider only.
"""

import logging
from typing import Any

import httpx

from domain.errors import MalformedResponse, ProviderUnavailable, RecipeNotFound
from domain.models import Ingredient, Recipe


logger = logging.getLogger(__name__)


BASE_URL = "https://www.themealdb.com/api/json/v1/1/"
TIMEOUT = 20
INGREDIENT_SLOTS = 20


def meal_db_client_factory(
    base_url: str = BASE_URL,
    timeout: float = TIMEOUT,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=base_url, timeout=timeout)


def _text(meal: dict[str, Any], field: str) -> str | None:
    value = meal.get(field)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def parse_ingredients(meal: dict[str, Any]) -> list[Ingredient]:
    ingredients: list[Ingredient] = []
    for i in range(1, INGREDIENT_SLOTS + 1):
        name = _text(meal, f"strIngredient{i}")
        if name is None:
            continue
        ingredients.append(Ingredient(name, _text(meal, f"strMeasure{i}")))
    return ingredients


def parse_meal(meal: Any) -> Recipe:
    if not isinstance(meal, dict):
        raise MalformedResponse(f"Meal is not an object: {meal!r}")
    name = _text(meal, "strMeal")
    if name is None:
        raise MalformedResponse(f"Meal has no name: {meal.get('idMeal')}")
    tags = _text(meal, "strTags")
    return Recipe(
        id=_text(meal, "idMeal"),
        name=name,
        image_url=_text(meal, "strMealThumb") or "",
        instructions=_text(meal, "strInstructions") or "",
        ingredients=parse_ingredients(meal),
        category=_text(meal, "strCategory"),
        area=_text(meal, "strArea"),
        tags=[t.strip() for t in tags.split(",") if t.strip()] if tags else [],
        youtube_url=_text(meal, "strYoutube"),
        source_url=_text(meal, "strSource"),
    )


class MealDbClient:
    def __init__(self, http_client: httpx.AsyncClient | None = None) -> None:
        self.http_client = (
            meal_db_client_factory() if http_client is None else http_client
        )

    async def _meals(self, path: str, params: dict[str, str] | None = None) -> Any:
        logger.info("GET %s %s", path, params or "")
        try:
            resp = await self.http_client.get(path, params=params)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            logger.warning("TheMealDB request failed: %r", e)
            raise ProviderUnavailable(f"Problem calling {path}.") from e
        except ValueError as e:
            logger.warning("TheMealDB returned a non json body for %s.", path)
            raise ProviderUnavailable(f"Problem reading {path}.") from e

        if not isinstance(data, dict):
            raise MalformedResponse(f"Expecting an object. {data!r}")
        meals = data.get("meals")
        if not meals:
            raise RecipeNotFound(f"No meals from {path} {params or ''}")
        if not isinstance(meals, list):
            raise MalformedResponse(f"Expecting a list of meals. {meals!r}")
        return meals[0]

    async def fetch_random(self) -> Recipe:
        return parse_meal(await self._meals("random.php"))

    async def fetch_by_name(self, name: str) -> Recipe:
        # httpx percent-encodes query params.
        return parse_meal(await self._meals("search.php", params={"s": name}))

    async def close(self) -> None:
        await self.http_client.aclose()
