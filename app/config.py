from enum import Enum
from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: Env = Env.local
    log_level: str = "INFO"
    html_dir: Path = Path("assets/html")
    images_dir: Path = Path("assets/img")
    meal_db_url: str = "https://www.themealdb.com/api/json/v1/1/"
    openai_url: str = "https://api.openai.com/v1/"
    # Supplied by the deployment, never baked into the build.
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4.1"
    remix_max_tokens: int = 400
    remix_temperature: float = 0.8
    request_timeout: float = 20
    storage_path: Path = Path("saved-recipes.json")
    favourites_key: str = "savedRecipes"
