import contextlib
import functools
import logging
from typing import Any, AsyncIterator, Awaitable, Callable

from jinja2 import Environment, FileSystemLoader, select_autoescape
from rich.logging import RichHandler
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import FileResponse, HTMLResponse
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from app import config
from app.html.recipe_detail import RecipeDetail, RemixOutput, SavedRecipes
from domain.llm_service import LLMService
from domain.meal_db import MealDbClient, meal_db_client_factory
from domain.repository import FavouritesStore, JsonFileStorage
from domain.services import RecipeViewer


logger = logging.getLogger(__name__)


CONFIG = config.Config()


TEMPLATES = Environment(
    loader=FileSystemLoader(CONFIG.html_dir),
    autoescape=select_autoescape(),
)


def recipe_viewer_factory(cfg: config.Config) -> RecipeViewer:
    token = (
        cfg.openai_api_key.get_secret_value()
        if cfg.openai_api_key is not None
        else None
    )
    return RecipeViewer(
        recipes=MealDbClient(
            meal_db_client_factory(cfg.meal_db_url, timeout=cfg.request_timeout)
        ),
        favourites=FavouritesStore(
            JsonFileStorage(cfg.storage_path), key=cfg.favourites_key
        ),
        llm=LLMService(
            token=token,
            base_url=cfg.openai_url,
            timeout=cfg.request_timeout,
            model=cfg.openai_model,
            max_tokens=cfg.remix_max_tokens,
            temperature=cfg.remix_temperature,
        ),
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def aHTMLResponse(route: Callable[..., Awaitable[str | tuple[str, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> HTMLResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        return HTMLResponse(html, status_code=code)

    return wrapper


def viewer(request: Request) -> RecipeViewer:
    return request.app.state.viewer


async def favicon(request: Request) -> FileResponse:
    return FileResponse(CONFIG.images_dir / "favicon.svg", media_type="image/svg+xml")


@aHTMLResponse
async def homepage(request: Request) -> str:
    v = viewer(request)
    return TEMPLATES.get_template("index.html").render(
        saved=SavedRecipes(v.saved(), environment=TEMPLATES),
        remix=RemixOutput(v.remix_state, environment=TEMPLATES),
    )


@aHTMLResponse
async def random_recipe(request: Request) -> str:
    state = await viewer(request).show_random()
    return RecipeDetail(state, environment=TEMPLATES).render()


@aHTMLResponse
async def saved_recipe(request: Request) -> str:
    name = request.path_params["name"]
    state = await viewer(request).show_saved(name)
    return RecipeDetail(state, environment=TEMPLATES).render()


@aHTMLResponse
async def save(request: Request) -> str:
    names = viewer(request).save()
    return SavedRecipes(names, environment=TEMPLATES).render()


@aHTMLResponse
async def delete(request: Request) -> str:
    names = viewer(request).delete(request.path_params["name"])
    return SavedRecipes(names, environment=TEMPLATES).render()


@aHTMLResponse
async def remix(request: Request) -> str:
    async with request.form() as form:
        theme = str(form.get("theme", ""))
    state = await viewer(request).remix(theme)
    return RemixOutput(state, environment=TEMPLATES).render()


def create_app(
    recipe_viewer: RecipeViewer | None = None,
    cfg: config.Config = CONFIG,
) -> Starlette:
    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        configure_logging(cfg.log_level)
        if cfg.openai_api_key is None:
            logger.warning("OPENAI_API_KEY is not set, remixes are disabled.")
        yield
        await app.state.viewer.close()

    app = Starlette(
        debug=True if cfg.env == config.Env.local else False,
        routes=[
            Route("/", homepage),
            Route("/recipes/random", random_recipe),
            Route("/recipes/saved/{name:path}", saved_recipe),
            Route("/saved", save, methods=["POST"]),
            Route("/saved/{name:path}", delete, methods=["DELETE"]),
            Route("/remix", remix, methods=["POST"]),
            Route("/favicon.ico", favicon),
            Mount("/assets", StaticFiles(directory="assets")),
        ],
        lifespan=lifespan,
    )
    app.state.viewer = (
        recipe_viewer_factory(cfg) if recipe_viewer is None else recipe_viewer
    )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.app:app", reload=CONFIG.env == config.Env.local)
