"""
Recipe data model: entities, measurements, steps and recipes.
"""

from recipekit.models.enums import ActionType, Cue, EntityType, GrillCookingMethod, SensoryFeedback
from recipekit.models.schemas import (
    Action,
    Adjustment,
    CueCheck,
    Duration,
    Entity,
    MeatDoneness,
    SensoryCheck,
    StoveHeat,
    Substitution,
    Temperature,
    appliance,
    celsius,
    container,
    fahrenheit,
    format_quantity,
    gas_mark,
    hours,
    ingredient,
    minutes,
    seconds,
    tool,
)
from recipekit.models.step import RecipeStep
from recipekit.models.recipe import Recipe

__all__ = [
    # Enums
    "ActionType",
    "Cue",
    "EntityType",
    "GrillCookingMethod",
    "SensoryFeedback",
    "StoveHeat",
    "MeatDoneness",
    # Measurements
    "Duration",
    "Temperature",
    "minutes",
    "seconds",
    "hours",
    "fahrenheit",
    "celsius",
    "gas_mark",
    "format_quantity",
    # Entities
    "Entity",
    "ingredient",
    "container",
    "tool",
    "appliance",
    # Step records
    "Action",
    "CueCheck",
    "SensoryCheck",
    "Adjustment",
    "Substitution",
    # Builders
    "RecipeStep",
    "Recipe",
]
