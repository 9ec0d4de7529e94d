"""The controller behind the routes.

`RecipeViewer` owns the view state (and so the current recipe) and the remix
state. Nothing else holds on to a recipe between requests.

Fetches are not cancelled. Each one takes a ticket and only the latest ticket
may update the view, so a slow response can not overwrite a newer one.
"""

import logging
from typing import TypeAlias

from domain.errors import FailureKind, RecipeViewerError
from domain.llm_service import LLMService
from domain.meal_db import MealDbClient
from domain.models import Recipe
from domain.repository import FavouritesStore


logger = logging.getLogger(__name__)


RANDOM_FAILED = "Sorry, couldn't load a recipe."
SAVED_NOT_FOUND = "Sorry, we couldn't find that recipe."
SAVED_FAILED = "Error loading saved recipe."
REMIX_FAILED = "Oops! Something went wrong while creating your remix."
REMIX_RETRY = "Please try again in a moment."
REMIX_CHECK_CONNECTION = "Please check your connection and try again."


class Idle:
    def __repr__(self) -> str:
        return "<Idle>"


class Loading:
    def __repr__(self) -> str:
        return "<Loading>"


class Displayed:
    def __init__(self, recipe: Recipe) -> None:
        self.recipe = recipe

    def __repr__(self) -> str:
        return f"<Displayed({self.recipe.name})>"


class Error:
    def __init__(self, message: str, kind: FailureKind) -> None:
        self.message = message
        self.kind = kind

    def __repr__(self) -> str:
        return f"<Error({self.kind.value})>"


ViewState: TypeAlias = Idle | Loading | Displayed | Error


class RemixIdle:
    def __repr__(self) -> str:
        return "<RemixIdle>"


class RemixLoading:
    def __repr__(self) -> str:
        return "<RemixLoading>"


class Remixed:
    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return "<Remixed>"


class RemixError:
    def __init__(self, message: str, hint: str, kind: FailureKind) -> None:
        self.message = message
        self.hint = hint
        self.kind = kind

    def __repr__(self) -> str:
        return f"<RemixError({self.kind.value})>"


RemixState: TypeAlias = RemixIdle | RemixLoading | Remixed | RemixError


class RecipeViewer:
    def __init__(
        self,
        *,
        recipes: MealDbClient,
        favourites: FavouritesStore,
        llm: LLMService,
    ) -> None:
        self.recipes = recipes
        self.favourites = favourites
        self.llm = llm
        self.state: ViewState = Idle()
        self.remix_state: RemixState = RemixIdle()
        self._fetch_ticket = 0
        self._remix_ticket = 0

    @property
    def current_recipe(self) -> Recipe | None:
        return self.state.recipe if isinstance(self.state, Displayed) else None

    async def start(self) -> ViewState:
        return await self.show_random()

    async def show_random(self) -> ViewState:
        self._fetch_ticket += 1
        ticket = self._fetch_ticket
        self.state = Loading()
        try:
            recipe = await self.recipes.fetch_random()
        except RecipeViewerError as e:
            return self._resolve(ticket, Error(RANDOM_FAILED, e.kind))
        return self._resolve(ticket, Displayed(recipe))

    async def show_saved(self, name: str) -> ViewState:
        self._fetch_ticket += 1
        ticket = self._fetch_ticket
        self.state = Loading()
        try:
            recipe = await self.recipes.fetch_by_name(name)
        except RecipeViewerError as e:
            message = (
                SAVED_NOT_FOUND if e.kind is FailureKind.not_found else SAVED_FAILED
            )
            return self._resolve(ticket, Error(message, e.kind))
        return self._resolve(ticket, Displayed(recipe))

    def _resolve(self, ticket: int, state: ViewState) -> ViewState:
        if ticket != self._fetch_ticket:
            logger.debug("Dropping stale %r, a newer fetch was issued.", state)
            return self.state
        self.state = state
        return state

    def saved(self) -> list[str]:
        return self.favourites.load()

    def save(self) -> list[str]:
        recipe = self.current_recipe
        if recipe is not None:
            self.favourites.add(recipe.name)
        return self.favourites.load()

    def delete(self, name: str) -> list[str]:
        self.favourites.remove(name)
        return self.favourites.load()

    async def remix(self, theme: str) -> RemixState:
        recipe = self.current_recipe
        theme = theme.strip()
        if recipe is None or not theme:
            return self.remix_state

        self._remix_ticket += 1
        ticket = self._remix_ticket
        self.remix_state = RemixLoading()
        state: RemixState
        try:
            text = await self.llm.remix(recipe, theme)
        except RecipeViewerError as e:
            hint = (
                REMIX_RETRY
                if e.kind is FailureKind.malformed_response
                else REMIX_CHECK_CONNECTION
            )
            state = RemixError(REMIX_FAILED, hint, e.kind)
        else:
            state = Remixed(text)

        if ticket != self._remix_ticket:
            logger.debug("Dropping stale %r, a newer remix was requested.", state)
            return self.remix_state
        self.remix_state = state
        return state

    async def close(self) -> None:
        await self.recipes.close()
        await self.llm.close()
