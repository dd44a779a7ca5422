"""
Fluent builder for recipe steps.

A RecipeStep collects typed actions plus the cues, adjustments and sensory
checks that tell the cook when to move on. Steps that happen at the same time
are nested as parallel threads, forming a tree.

Example:
    >>> step = (
    ...     RecipeStep()
    ...     .add(latte, espresso)
    ...     .to(mug)
    ...     .mix()
    ...     .until_cue(Cue.COLOR, "uniform light brown")
    ... )
"""
import weakref
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from recipekit.errors import StepBuilderError
from recipekit.models.enums import ActionType, Cue, GrillCookingMethod
from recipekit.models.schemas import (
    Action,
    Adjustment,
    CueCheck,
    Duration,
    Entity,
    SensoryCheck,
    TemperatureLike,
    resolve_temperature,
)


class RecipeStep(BaseModel):
    """
    A step in a recipe.

    Builder methods append actions and return the step itself so calls can
    be chained. The "current" ingredients and container carry context from
    one call to the next (add -> to -> mix) and are not serialized.
    """
    actions: List[Action] = Field(default_factory=list)
    threads: List["RecipeStep"] = Field(default_factory=list)
    cues: List[CueCheck] = Field(default_factory=list)
    adjustments: List[Adjustment] = Field(default_factory=list)
    sensory_checks: List[SensoryCheck] = Field(default_factory=list, alias="sensoryChecks")

    model_config = ConfigDict(populate_by_name=True)

    _current_ingredients: List[Entity] = PrivateAttr(default_factory=list)
    _current_container: Optional[Entity] = PrivateAttr(default=None)
    # weak references to the recipes holding this step, told about every change
    _owners: List[weakref.ref] = PrivateAttr(default_factory=list)

    def _attach(self, owner_ref: weakref.ref) -> None:
        """Register a recipe whose cached hash depends on this step and its threads."""
        owner = owner_ref()
        if all(ref() is not owner for ref in self._owners):
            self._owners.append(owner_ref)
        for thread in self.threads:
            thread._attach(owner_ref)

    def _touch(self) -> None:
        for ref in self._owners:
            owner = ref()
            if owner is not None:
                owner._invalidate_hash()

    def __eq__(self, other: Any) -> bool:
        # builder state and owners are not part of a step's content
        if not isinstance(other, RecipeStep):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def _last_action(self, operation: str) -> Action:
        if not self.actions:
            raise StepBuilderError(operation)
        return self.actions[-1]

    def add(self, *ingredients: Union[Entity, List[Entity]]) -> "RecipeStep":
        """Set the ingredients the next actions apply to."""
        current: List[Entity] = []
        for item in ingredients:
            if isinstance(item, (list, tuple)):
                current.extend(item)
            else:
                current.append(item)
        self._current_ingredients = current
        return self

    def to(self, container: Entity) -> "RecipeStep":
        """Add each current ingredient to a container, which becomes current."""
        for item in self._current_ingredients:
            self.actions.append(
                Action(type=ActionType.ADD, ingredient=item, container=container)
            )
        self._current_container = container
        self._touch()
        return self

    def mix(self) -> "RecipeStep":
        self.actions.append(Action(type=ActionType.MIX, container=self._current_container))
        self._touch()
        return self

    def heat(self, temperature: TemperatureLike) -> "RecipeStep":
        """Heat the current container. Strings resolve by stove level name."""
        self.actions.append(
            Action(
                type=ActionType.HEAT,
                container=self._current_container,
                temperature=resolve_temperature(temperature),
            )
        )
        self._touch()
        return self

    def for_(self, duration: Duration) -> "RecipeStep":
        """Set how long the last action lasts."""
        self._last_action("for").duration = duration
        self._touch()
        return self

    def transfer(self, to_container: Entity) -> "RecipeStep":
        self.actions.append(
            Action(type=ActionType.TRANSFER, from_=self._current_container, to=to_container)
        )
        self._current_container = to_container
        self._touch()
        return self

    def prepare(self, *techniques: str) -> "RecipeStep":
        """Apply preparation techniques (chop, peel, ...) to the first current ingredient."""
        first = self._current_ingredients[0] if self._current_ingredients else None
        for technique in techniques:
            self.actions.append(
                Action(type=ActionType.PREPARE, technique=technique, ingredient=first)
            )
        self._touch()
        return self

    def set_equipment(self, equipment: Union[Entity, str], setting: Any) -> "RecipeStep":
        self.actions.append(
            Action(type=ActionType.EQUIPMENT_SETTING, equipment=equipment, setting=setting)
        )
        self._touch()
        return self

    def rest(self, duration: Duration) -> "RecipeStep":
        self.actions.append(Action(type=ActionType.REST, duration=duration))
        self._touch()
        return self

    def preheat(self, appliance: Entity, temperature: TemperatureLike) -> "RecipeStep":
        self.actions.append(
            Action(
                type=ActionType.PREHEAT,
                appliance=appliance,
                temperature=resolve_temperature(temperature),
            )
        )
        self._touch()
        return self

    def grill_setup(
        self, temperature: TemperatureLike, method: GrillCookingMethod
    ) -> "RecipeStep":
        self.actions.append(
            Action(
                type=ActionType.EQUIPMENT_SETTING,
                equipment="grill",
                temperature=resolve_temperature(temperature),
                method=method,
            )
        )
        self._touch()
        return self

    def cook_to_temperature(self, target_temperature: TemperatureLike) -> "RecipeStep":
        """Cook until an internal temperature (e.g. MeatDoneness.MEDIUM) is reached."""
        self.actions.append(
            Action(
                type=ActionType.HEAT,
                target_temperature=resolve_temperature(target_temperature),
            )
        )
        self._touch()
        return self

    def parallel(self, callback: Callable[["RecipeStep"], Any]) -> "RecipeStep":
        """
        Describe work that happens at the same time as this step.

        The callback receives a fresh step to configure; it is appended to
        this step's threads.
        """
        thread = RecipeStep()
        callback(thread)
        self.threads.append(thread)
        for ref in self._owners:
            thread._attach(ref)
        self._touch()
        return self

    def until_condition(self, condition: str) -> "RecipeStep":
        self._last_action("until_condition").condition = condition
        self._touch()
        return self

    def until_cue(self, cue_type: Cue, description: str) -> "RecipeStep":
        self.cues.append(CueCheck(type=cue_type, description=description))
        self._touch()
        return self

    def adjust(self, condition: str, action: str) -> "RecipeStep":
        self.adjustments.append(Adjustment(condition=condition, action=action))
        self._touch()
        return self

    def check_sensory(
        self, feedback_type: Cue, description: str, adjustment: Optional[str] = None
    ) -> "RecipeStep":
        self.sensory_checks.append(
            SensoryCheck(type=feedback_type, description=description, adjustment=adjustment)
        )
        self._touch()
        return self

    def get_actions(self) -> Dict[str, Any]:
        """
        Get all actions in the step.

        Returns:
            Dict with the step's own actions (main_thread), the actions of each
            parallel thread, and the step's adjustments, sensory checks and cues.
        """
        return {
            "main_thread": self.actions,
            "parallel_threads": [
                thread.get_actions()["main_thread"] for thread in self.threads
            ],
            "adjustments": self.adjustments,
            "sensory_checks": self.sensory_checks,
            "cues": self.cues,
        }

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation using the camelCase wire keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecipeStep":
        return cls.model_validate(data)
