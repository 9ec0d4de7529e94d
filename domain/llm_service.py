import logging
from typing import Any

import httpx
from openai.types.chat import (
    ChatCompletionMessageParam,
    ChatCompletionSystemMessageParam,
    ChatCompletionUserMessageParam,
)

from domain.aopenai import (
    DEFAULT_MODEL,
    MAX_TOKENS,
    OPENAI_URL,
    TEMPERATURE,
    TIMEOUT,
    openai_client_factory,
)
from domain.errors import MalformedResponse, ProviderUnavailable
from domain.models import Recipe
from domain.prompts import SYSTEM_PROMPT, RemixPrompt


logger = logging.getLogger(__name__)


def completion_text(data: Any) -> str:
    """Trimmed content of the first choice of a chat completion."""
    if not isinstance(data, dict):
        raise MalformedResponse(f"Expecting an object. {data!r}")
    if "error" in data:
        raise MalformedResponse(f"Problem creating completion. {data['error']}")
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise MalformedResponse("Expecting a non empty 'choices' list.")
    choice = choices[0]
    message = choice.get("message") if isinstance(choice, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise MalformedResponse("Expecting text content in the first choice.")
    return content.strip()


class LLMService:
    def __init__(
        self,
        *,
        token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = OPENAI_URL,
        timeout: float = TIMEOUT,
        model: str = DEFAULT_MODEL,
        max_tokens: int = MAX_TOKENS,
        temperature: float = TEMPERATURE,
    ) -> None:
        if http_client is None and token is not None:
            http_client = openai_client_factory(
                token, base_url=base_url, timeout=timeout
            )
        self.http_client = http_client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    def payload(self, recipe: Recipe, theme: str) -> dict[str, Any]:
        system_message: ChatCompletionSystemMessageParam = {
            "role": "system",
            "content": SYSTEM_PROMPT,
        }
        user_message: ChatCompletionUserMessageParam = {
            "role": "user",
            "content": str(RemixPrompt(recipe, theme)),
        }
        messages: list[ChatCompletionMessageParam] = [system_message, user_message]
        return {
            "model": self.model,
            "messages": messages,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

    async def remix(self, recipe: Recipe, theme: str) -> str:
        if self.http_client is None:
            raise ProviderUnavailable("No OpenAI API key configured.")

        logger.info("Remixing %s as %r", recipe.name, theme)
        try:
            resp = await self.http_client.post(
                "chat/completions", json=self.payload(recipe, theme)
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            logger.warning("Chat completion request failed: %r", e)
            raise ProviderUnavailable("Problem calling chat/completions.") from e
        except ValueError as e:
            logger.warning("Chat completion returned a non json body.")
            raise ProviderUnavailable("Problem reading chat/completions.") from e

        try:
            return completion_text(data)
        except MalformedResponse as e:
            logger.warning("Unexpected chat completion: %s", e)
            raise

    async def close(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()
