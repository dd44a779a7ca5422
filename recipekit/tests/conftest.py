"""
Shared pytest fixtures for recipekit tests.

This module provides common fixtures for:
- Entities (ingredients, containers, tools)
- Steps and recipes built with the DSL
- Factory functions for recipe variants
"""
import pytest

from recipekit.models import (
    Cue,
    Recipe,
    RecipeStep,
    StoveHeat,
    container,
    ingredient,
    minutes,
    tool,
)


# ============================================================================
# Entity Fixtures
# ============================================================================

@pytest.fixture
def tazza():
    return container("Tazza", material="ceramic", volume=1)


@pytest.fixture
def latte():
    return ingredient("Latte", amount=1, unit="cup")


@pytest.fixture
def espresso():
    return ingredient("Espresso", amount=1, unit="shot")


@pytest.fixture
def sugar():
    return ingredient("Sugar", amount=1, unit="tablespoon")


@pytest.fixture
def cookie():
    return ingredient("Cookie", amount=1, unit="piece")


# ============================================================================
# Recipe Fixtures
# ============================================================================

@pytest.fixture
def make_latte_recipe(tazza, latte, espresso, sugar):
    """Factory for the latte recipe: add+mix, then heat for a minute.

    Each call builds fresh step and recipe objects so tests can mutate them.
    """
    def _make(name="Latte Caffe", extra_ingredients=()):
        step1 = RecipeStep().add(latte, espresso, sugar).to(tazza).mix()
        step2 = RecipeStep().heat(StoveHeat.MEDIUM).for_(minutes(1))
        return Recipe(
            name,
            ingredients=[latte, espresso, sugar, *extra_ingredients],
            tools=[tool("Spoon")],
            steps=[step1, step2],
            difficulty="very easy",
            estimated_time=minutes(3),
            tags=["beverage", "Italian", "breakfast"],
        )
    return _make


@pytest.fixture
def latte_recipe(make_latte_recipe):
    """The latte recipe."""
    return make_latte_recipe()


@pytest.fixture
def parallel_recipe(tazza, latte, espresso):
    """Recipe whose first step runs two parallel threads."""
    step = (
        RecipeStep()
        .add(latte)
        .to(tazza)
        .parallel(lambda t: t.add(espresso).to(container("Moka")).until_cue(Cue.SMELL, "Coffee aroma"))
        .parallel(lambda t: t.rest(minutes(2)))
    )
    return Recipe("Parallel Latte", ingredients=[latte, espresso], steps=[step])
