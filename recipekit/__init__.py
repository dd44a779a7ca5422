"""
recipekit - a fluent builder DSL for recipes as structured data,
with similarity hashing and text/markdown views.
"""

from recipekit.models import (
    ActionType,
    Cue,
    GrillCookingMethod,
    MeatDoneness,
    Recipe,
    RecipeStep,
    SensoryFeedback,
    StoveHeat,
    appliance,
    celsius,
    container,
    fahrenheit,
    gas_mark,
    hours,
    ingredient,
    minutes,
    seconds,
    tool,
)
from recipekit.engine.hashing import hash_recipe, similarity
from recipekit.engine import unit_converter

__version__ = "0.1.0"

__all__ = [
    "Recipe",
    "RecipeStep",
    "ActionType",
    "Cue",
    "SensoryFeedback",
    "GrillCookingMethod",
    "StoveHeat",
    "MeatDoneness",
    "ingredient",
    "container",
    "tool",
    "appliance",
    "minutes",
    "seconds",
    "hours",
    "fahrenheit",
    "celsius",
    "gas_mark",
    "hash_recipe",
    "similarity",
    "unit_converter",
]
