from jinja2 import Environment
from markdown2 import (  # pyright: ignore[reportMissingTypeStubs]
    markdown,  # pyright: ignore[reportUnknownVariableType]
)
from markupsafe import Markup

from domain.models import Recipe
from domain.services import Displayed, RemixState, Remixed, ViewState


class RecipeDetail:
    def __init__(
        self,
        state: ViewState,
        *,
        environment: Environment,
        template_name: str = "recipe-detail.html",
    ) -> None:
        self.state = state
        self.env = environment
        self.name = template_name

    @property
    def recipe(self) -> Recipe | None:
        return self.state.recipe if isinstance(self.state, Displayed) else None

    @property
    def title(self) -> str:
        return self.recipe.name if self.recipe else ""

    @property
    def subtitle(self) -> str:
        if self.recipe is None:
            return ""
        return " · ".join(p for p in (self.recipe.category, self.recipe.area) if p)

    @property
    def ingredients(self) -> list[str]:
        return [str(i) for i in self.recipe.ingredients] if self.recipe else []

    @property
    def instructions(self) -> list[str]:
        """Instruction lines, one per line break in the source text."""
        if self.recipe is None:
            return []
        return self.recipe.instructions.splitlines()

    def render(self) -> str:
        return self.env.get_template(self.name).render(detail=self, state=self.state)


class RemixOutput:
    def __init__(
        self,
        state: RemixState,
        *,
        environment: Environment,
        template_name: str = "remix-output.html",
    ) -> None:
        self.state = state
        self.env = environment
        self.name = template_name

    @property
    def content(self) -> str:
        if not isinstance(self.state, Remixed):
            return ""
        return Markup(
            markdown(  # pyright: ignore[reportUnknownArgumentType]
                self.state.text, extras=["fences", "tables"], safe_mode="escape"
            )
        )

    def render(self) -> str:
        return self.env.get_template(self.name).render(remix=self, state=self.state)


class SavedRecipes:
    def __init__(
        self,
        names: list[str],
        *,
        environment: Environment,
        template_name: str = "saved-recipes.html",
    ) -> None:
        self.names = names
        self.env = environment
        self.name = template_name

    def render(self) -> str:
        return self.env.get_template(self.name).render(names=self.names)
