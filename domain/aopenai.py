import os

import httpx


OPENAI_URL = "https://api.openai.com/v1/"
MAX_TOKENS = 400
TEMPERATURE = 0.8
TIMEOUT = 60 * 2
DEFAULT_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4.1")


def openai_client_factory(
    token: str,
    *,
    base_url: str = OPENAI_URL,
    timeout: float = TIMEOUT,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url,
        headers={
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        },
        timeout=timeout,
    )
