import json
import logging
from pathlib import Path
from typing import Protocol


logger = logging.getLogger(__name__)


FAVOURITES_KEY = "savedRecipes"


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    def __init__(self, slots: dict[str, str] | None = None) -> None:
        self.slots = {} if slots is None else slots

    def get(self, key: str) -> str | None:
        return self.slots.get(key)

    def set(self, key: str, value: str) -> None:
        self.slots[key] = value


class JsonFileStorage:
    """String slots kept together in a single json object on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _read(self) -> dict[str, str]:
        try:
            with open(self.path) as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s: %r", self.path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        slots = self._read()
        slots[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(slots, f, indent=2)


class FavouritesStore:
    """Saved recipe names held in one storage slot.

    Storage is the only source of truth so every operation reloads it.
    """

    def __init__(self, storage: KeyValueStorage, *, key: str = FAVOURITES_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> list[str]:
        raw = self.storage.get(self.key)
        if raw is None:
            return []
        try:
            names = json.loads(raw)
        except ValueError:
            logger.debug("Ignoring unparseable %s slot.", self.key)
            return []
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            logger.debug("Ignoring %s slot that is not a list of names.", self.key)
            return []
        return names

    def _write(self, names: list[str]) -> None:
        self.storage.set(self.key, json.dumps(names))

    def add(self, name: str) -> None:
        names = self.load()
        if name not in names:
            names.append(name)
            self._write(names)

    def remove(self, name: str) -> None:
        names = [n for n in self.load() if n != name]
        self._write(names)
