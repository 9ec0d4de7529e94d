import pytest

from domain.repository import FavouritesStore, MemoryStorage
from domain.services import RecipeViewer
from tests.fakes import TERIYAKI, completion, json_handler, llm, meal_db, meals


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def favourites(storage: MemoryStorage) -> FavouritesStore:
    return FavouritesStore(storage)


@pytest.fixture
def viewer(favourites: FavouritesStore) -> RecipeViewer:
    return RecipeViewer(
        recipes=meal_db(json_handler(meals(TERIYAKI))),
        favourites=favourites,
        llm=llm(json_handler(completion("  Teriyaki tacos!  "))),
    )
