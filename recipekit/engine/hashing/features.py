"""
Feature extraction for recipe similarity hashing.

Walks a recipe's ingredients and step tree and yields the tokens that feed
the bucket histogram. Works on anything shaped like a Recipe (attributes
`ingredients` and `steps`, steps with `actions`, `cues`, `sensory_checks`
and `threads`).
"""
from enum import Enum
from typing import Any, Iterator, List, Optional

from recipekit.models.schemas import format_quantity


def normalize_token(value: Any) -> Optional[str]:
    """
    Convert a raw field value into a lowercase feature token.

    Returns None for missing values and empty text; those fields are skipped.
    """
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    text = format_quantity(value).lower()
    return text or None


def _name_of(entity: Any) -> Any:
    return getattr(entity, "name", None) if entity is not None else None


def _value_of(measurement: Any) -> Any:
    return getattr(measurement, "value", None) if measurement is not None else None


def _step_tokens(step: Any) -> Iterator[Any]:
    for action in step.actions:
        yield action.type
        yield _name_of(action.ingredient)
        yield _name_of(action.container)
        yield _value_of(action.temperature)
        yield _value_of(action.duration)

    for cue in step.cues:
        yield cue.type
        yield cue.description

    # Adjustments are free-form corrections and do not contribute tokens
    for check in step.sensory_checks:
        yield check.type
        yield check.description

    for thread in step.threads:
        yield from _step_tokens(thread)


def _raw_tokens(recipe: Any) -> Iterator[Any]:
    for item in recipe.ingredients:
        yield item.name
    for step in recipe.steps:
        yield from _step_tokens(step)


def extract_features(recipe: Any) -> List[str]:
    """
    Enumerate a recipe's feature tokens in a reproducible order.

    Order: ingredient names; then per step, each action's type, ingredient
    name, container name, temperature value and duration value; each cue's
    type and description; each sensory check's type and description; then
    the step's parallel threads, depth-first.

    Args:
        recipe: A Recipe (or any object with the same shape).

    Returns:
        List of lowercase tokens; missing fields are omitted.
    """
    tokens = []
    for raw in _raw_tokens(recipe):
        token = normalize_token(raw)
        if token is not None:
            tokens.append(token)
    return tokens
