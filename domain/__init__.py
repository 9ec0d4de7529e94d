"""Describes the recipe viewer domain. Centres around the `RecipeViewer`.

Why is this thin?

- Recipes come from TheMealDB and are never modified locally.
- Remixes come from a chat completion api and are never stored.
- The only thing we own is a flat list of saved recipe names.
- The only invariant is that the list holds no duplicates.

Both apis sit behind httpx clients so tests can swap in a mock transport.
"""
