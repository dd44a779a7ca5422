"""
Pydantic data models for the recipe DSL.

Entities, measurements and the per-step records (actions, cues, sensory
checks, adjustments). Python attributes are snake_case; the JSON form keeps
the camelCase keys used by existing recipe files through field aliases.
"""
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recipekit.models.enums import ActionType, Cue, EntityType, GrillCookingMethod


def format_quantity(value: Any) -> str:
    """
    Render a measurement value the way it appears in recipe text.

    Integral floats drop their fractional part so that 3.0 and 3 read the
    same ("3"), whether the recipe was built in code or loaded from JSON.
    """
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ============================================================================
# Measurements
# ============================================================================

class Duration(BaseModel):
    """A span of time, e.g. 3 minutes."""
    value: float = Field(..., ge=0, description="Duration value")
    unit: str = Field(..., description="Unit of the duration (seconds, minutes, hours)")

    def __str__(self) -> str:
        return f"{format_quantity(self.value)} {self.unit}"


class Temperature(BaseModel):
    """A temperature or heat level, e.g. 350 F or level 3."""
    value: float = Field(..., description="Temperature value")
    unit: str = Field(..., description="Unit (F, C, Gas Mark, level)")

    def __str__(self) -> str:
        return f"{format_quantity(self.value)}{self.unit}"


def minutes(value: float) -> Duration:
    return Duration(value=value, unit="minutes")


def seconds(value: float) -> Duration:
    return Duration(value=value, unit="seconds")


def hours(value: float) -> Duration:
    return Duration(value=value, unit="hours")


def fahrenheit(value: float) -> Temperature:
    return Temperature(value=value, unit="F")


def celsius(value: float) -> Temperature:
    return Temperature(value=value, unit="C")


def gas_mark(value: float) -> Temperature:
    return Temperature(value=value, unit="Gas Mark")


class StoveHeat(Enum):
    """Stove heat levels, expressed as level temperatures 1-5."""
    LOW = 1
    MEDIUM_LOW = 2
    MEDIUM = 3
    MEDIUM_HIGH = 4
    HIGH = 5

    @property
    def temperature(self) -> Temperature:
        return Temperature(value=self.value, unit="level")


class MeatDoneness(Enum):
    """Meat doneness levels with their internal temperature in Fahrenheit."""
    RARE = 125
    MEDIUM_RARE = 135
    MEDIUM = 145
    MEDIUM_WELL = 150
    WELL_DONE = 160

    @property
    def temperature(self) -> Temperature:
        return fahrenheit(self.value)


TemperatureLike = Union[Temperature, StoveHeat, MeatDoneness, str]


def resolve_temperature(temperature: Optional[TemperatureLike]) -> Any:
    """
    Turn the loose temperature arguments accepted by the builder into a Temperature.

    Strings are looked up by StoveHeat name ("medium", "medium-high");
    unknown strings are kept as free text.
    """
    if isinstance(temperature, (StoveHeat, MeatDoneness)):
        return temperature.temperature
    if isinstance(temperature, str):
        key = temperature.strip().upper().replace("-", "_").replace(" ", "_")
        if key in StoveHeat.__members__:
            return StoveHeat[key].temperature
    return temperature


# ============================================================================
# Entities
# ============================================================================

class Entity(BaseModel):
    """
    Something a recipe refers to: an ingredient, container, tool or appliance.

    Free-form properties (material, volume, ...) are kept as extra fields.
    """
    type: EntityType = Field(..., description="Kind of entity")
    name: str = Field(..., description="Display name of the entity")
    amount: Optional[float] = Field(None, description="Quantity, for ingredients")
    unit: Optional[str] = Field(None, description="Unit of the quantity")

    model_config = ConfigDict(extra="allow")

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Entity name cannot be empty")
        return v


def _entity_factory(entity_type: EntityType):
    def create(name: str, **properties: Any) -> Entity:
        return Entity(type=entity_type, name=name, **properties)

    create.__name__ = entity_type.value
    create.__doc__ = f"Create a {entity_type.value} entity."
    return create


ingredient = _entity_factory(EntityType.INGREDIENT)
container = _entity_factory(EntityType.CONTAINER)
tool = _entity_factory(EntityType.TOOL)
appliance = _entity_factory(EntityType.APPLIANCE)


# ============================================================================
# Step records
# ============================================================================

class Action(BaseModel):
    """A single typed action inside a recipe step."""
    type: ActionType
    ingredient: Optional[Entity] = None
    container: Optional[Entity] = None
    temperature: Optional[Union[Temperature, str]] = None
    duration: Optional[Duration] = None
    from_: Optional[Entity] = Field(None, alias="from")
    to: Optional[Entity] = None
    technique: Optional[str] = None
    equipment: Optional[Union[Entity, str]] = None
    setting: Optional[Any] = None
    appliance: Optional[Entity] = None
    method: Optional[Union[GrillCookingMethod, str]] = None
    target_temperature: Optional[Temperature] = Field(None, alias="targetTemperature")
    condition: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class CueCheck(BaseModel):
    """A cue to watch for before moving on ("golden brown")."""
    type: Cue
    description: str


class SensoryCheck(BaseModel):
    """A sensory check with the adjustment to make when it fails."""
    type: Cue
    description: str
    adjustment: Optional[str] = None


class Adjustment(BaseModel):
    """A conditional correction ("if too thick, add water")."""
    condition: str
    action: str


class Substitution(BaseModel):
    """An ingredient and a suggested alternative."""
    original: Entity
    alternative: Entity
