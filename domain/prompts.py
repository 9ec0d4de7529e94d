import json

from domain.models import Recipe


SYSTEM_PROMPT = "You are a creative chef assistant."


REMIX_PROMPT = """
You are a creative chef! Given this recipe (in JSON) and the remix theme,
create a short, fun, doable remix.
Highlight any changed ingredients or instructions.

Remix Theme: {theme}
Recipe JSON: {recipe}
""".strip()


class RemixPrompt:
    def __init__(
        self,
        recipe: Recipe,
        theme: str,
        content: str | None = None,
    ) -> None:
        self.recipe = recipe
        self.theme = theme
        self.content = REMIX_PROMPT if content is None else content

    def __str__(self) -> str:
        return self.content.format(
            theme=self.theme,
            recipe=json.dumps(self.recipe.to_dict(), ensure_ascii=False),
        )
