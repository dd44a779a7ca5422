"""
Enumerations shared by the recipe data model.
"""
from enum import Enum


class EntityType(str, Enum):
    """Kinds of things a recipe refers to."""
    INGREDIENT = "ingredient"
    CONTAINER = "container"
    TOOL = "tool"
    APPLIANCE = "appliance"


class ActionType(str, Enum):
    """Action types in a recipe step."""
    ADD = "add"
    MIX = "mix"
    HEAT = "heat"
    TRANSFER = "transfer"
    PREPARE = "prepare"
    REST = "rest"
    EQUIPMENT_SETTING = "equipmentSetting"
    PREHEAT = "preheat"


class Cue(str, Enum):
    """Sensory cues a cook watches for."""
    COLOR = "color"
    CONSISTENCY = "consistency"
    SMELL = "smell"
    TASTE = "taste"
    TEXTURE = "texture"


# Sensory checks use the same vocabulary as cues
SensoryFeedback = Cue


class GrillCookingMethod(str, Enum):
    """Grill cooking methods."""
    DIRECT = "direct"
    INDIRECT = "indirect"
