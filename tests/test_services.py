import asyncio

import httpx
import pytest

from domain.errors import FailureKind
from domain.models import Recipe
from domain.repository import FavouritesStore
from domain.services import (
    Displayed,
    Error,
    Idle,
    Loading,
    RANDOM_FAILED,
    REMIX_CHECK_CONNECTION,
    REMIX_RETRY,
    RecipeViewer,
    RemixError,
    RemixIdle,
    Remixed,
    SAVED_FAILED,
    SAVED_NOT_FOUND,
)
from tests.fakes import TERIYAKI, json_handler, llm, meal_db, meals


def viewer_with(
    favourites: FavouritesStore,
    meal_handler=json_handler(meals(TERIYAKI)),
    llm_handler=json_handler({}),
) -> RecipeViewer:
    return RecipeViewer(
        recipes=meal_db(meal_handler),
        favourites=favourites,
        llm=llm(llm_handler),
    )


@pytest.mark.asyncio
async def test_start_displays_a_random_recipe(viewer: RecipeViewer) -> None:
    assert isinstance(viewer.state, Idle)
    state = await viewer.start()
    assert isinstance(state, Displayed)
    assert state.recipe.name == "Teriyaki Chicken Casserole"
    assert viewer.current_recipe is state.recipe


@pytest.mark.asyncio
async def test_random_failure(favourites: FavouritesStore) -> None:
    viewer = viewer_with(favourites, json_handler({}, status_code=500))
    state = await viewer.show_random()
    assert isinstance(state, Error)
    assert state.message == RANDOM_FAILED
    assert state.kind is FailureKind.network
    assert viewer.current_recipe is None


@pytest.mark.asyncio
async def test_show_saved_not_found(favourites: FavouritesStore) -> None:
    viewer = viewer_with(favourites, json_handler({"meals": None}))
    state = await viewer.show_saved("Unicorn Stew")
    assert isinstance(state, Error)
    assert state.message == SAVED_NOT_FOUND


@pytest.mark.asyncio
async def test_show_saved_network_failure(favourites: FavouritesStore) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    viewer = viewer_with(favourites, handler)
    state = await viewer.show_saved("Teriyaki Chicken Casserole")
    assert isinstance(state, Error)
    assert state.message == SAVED_FAILED


@pytest.mark.asyncio
async def test_failed_fetch_replaces_display(favourites: FavouritesStore) -> None:
    responses = [
        httpx.Response(200, json=meals(TERIYAKI)),
        httpx.Response(503),
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    viewer = viewer_with(favourites, handler)
    await viewer.show_random()
    await viewer.show_random()
    assert isinstance(viewer.state, Error)
    assert viewer.current_recipe is None


def test_save_requires_a_displayed_recipe(viewer: RecipeViewer) -> None:
    assert viewer.save() == []


@pytest.mark.asyncio
async def test_save_and_delete(viewer: RecipeViewer) -> None:
    await viewer.start()
    assert viewer.save() == ["Teriyaki Chicken Casserole"]
    assert viewer.save() == ["Teriyaki Chicken Casserole"]
    assert isinstance(viewer.state, Displayed)
    assert viewer.delete("Teriyaki Chicken Casserole") == []
    assert isinstance(viewer.state, Displayed)


@pytest.mark.asyncio
async def test_stale_response_does_not_overwrite_newer(
    favourites: FavouritesStore,
) -> None:
    first_sent = asyncio.Event()
    release_first = asyncio.Event()

    class SlowFirst(httpx.AsyncBaseTransport):
        def __init__(self) -> None:
            self.calls = 0

        async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
            self.calls += 1
            if self.calls == 1:
                first_sent.set()
                await release_first.wait()
                return httpx.Response(200, json=meals(TERIYAKI))
            return httpx.Response(200, json=meals({**TERIYAKI, "strMeal": "Kumpir"}))

    viewer = viewer_with(favourites)
    viewer.recipes.http_client = httpx.AsyncClient(
        base_url="https://meals.test/api/", transport=SlowFirst()
    )

    slow = asyncio.create_task(viewer.show_random())
    await first_sent.wait()
    assert isinstance(viewer.state, Loading)
    await viewer.show_saved("Kumpir")
    release_first.set()
    await slow

    assert isinstance(viewer.state, Displayed)
    assert viewer.state.recipe.name == "Kumpir"


@pytest.mark.asyncio
async def test_remix(viewer: RecipeViewer) -> None:
    await viewer.start()
    state = await viewer.remix("street food")
    assert isinstance(state, Remixed)
    assert state.text == "Teriyaki tacos!"
    assert isinstance(viewer.state, Displayed)


@pytest.mark.parametrize("theme", ("", "   "))
@pytest.mark.asyncio
async def test_remix_needs_a_theme(viewer: RecipeViewer, theme: str) -> None:
    await viewer.start()
    assert isinstance(await viewer.remix(theme), RemixIdle)


@pytest.mark.asyncio
async def test_remix_needs_a_recipe(viewer: RecipeViewer) -> None:
    assert isinstance(await viewer.remix("vegan"), RemixIdle)


@pytest.mark.asyncio
async def test_remix_missing_choices(favourites: FavouritesStore) -> None:
    viewer = viewer_with(favourites, llm_handler=json_handler({"id": "x"}))
    await viewer.start()
    state = await viewer.remix("vegan")
    assert isinstance(state, RemixError)
    assert state.kind is FailureKind.malformed_response
    assert state.hint == REMIX_RETRY


@pytest.mark.asyncio
async def test_remix_network_failure(favourites: FavouritesStore) -> None:
    viewer = viewer_with(favourites, llm_handler=json_handler({}, status_code=502))
    await viewer.start()
    state = await viewer.remix("vegan")
    assert isinstance(state, RemixError)
    assert state.hint == REMIX_CHECK_CONNECTION


def test_current_recipe_only_when_displayed(viewer: RecipeViewer) -> None:
    recipe = Recipe(name="Kumpir", image_url="", instructions="")
    viewer.state = Displayed(recipe)
    assert viewer.current_recipe is recipe
    viewer.state = Loading()
    assert viewer.current_recipe is None
