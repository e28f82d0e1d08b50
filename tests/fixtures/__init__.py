from .wardrobe import ScriptedProvider, basic_wardrobe, candidate, description, item

__all__ = [
    "ScriptedProvider",
    "basic_wardrobe",
    "candidate",
    "description",
    "item",
]
