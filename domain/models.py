from typing import Any


class Ingredient:
    def __init__(self, name: str, measure: str | None = None) -> None:
        self.name = name
        self.measure = measure

    def __repr__(self) -> str:
        return f"<Ingredient(name={self.name}, measure={self.measure})>"

    def __str__(self) -> str:
        return f"{self.measure} {self.name}" if self.measure else self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return (self.name, self.measure) == (other.name, other.measure)

    def to_dict(self) -> dict[str, str | None]:
        return {"name": self.name, "measure": self.measure}


class Recipe:
    def __init__(
        self,
        *,
        name: str,
        image_url: str,
        instructions: str,
        ingredients: list[Ingredient] | None = None,
        id: str | None = None,
        category: str | None = None,
        area: str | None = None,
        tags: list[str] | None = None,
        youtube_url: str | None = None,
        source_url: str | None = None,
    ) -> None:
        self.name = name
        self.image_url = image_url
        self.instructions = instructions
        self.ingredients = tuple([] if ingredients is None else ingredients)
        self.id = id
        self.category = category
        self.area = area
        self.tags = tuple([] if tags is None else tags)
        self.youtube_url = youtube_url
        self.source_url = source_url

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, name={self.name})>"

    def __str__(self) -> str:
        return self.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "area": self.area,
            "tags": list(self.tags),
            "image_url": self.image_url,
            "ingredients": [i.to_dict() for i in self.ingredients],
            "instructions": self.instructions,
            "youtube_url": self.youtube_url,
            "source_url": self.source_url,
        }
