"""
Tests for the recipe DSL: entities, step builder, recipe operations,
JSON round-trip and hash caching.
"""
import base64
import copy
import gzip
import io
import json

import pytest
from unittest.mock import patch
from pydantic import ValidationError

import recipekit.models.recipe as recipe_module
from recipekit.engine.hashing import hash_recipe
from recipekit.errors import (
    ErrorCode,
    InvalidBucketCountError,
    RecipeValidationError,
    StepBuilderError,
)
from recipekit.models import (
    ActionType,
    Cue,
    EntityType,
    GrillCookingMethod,
    MeatDoneness,
    Recipe,
    RecipeStep,
    StoveHeat,
    Temperature,
    appliance,
    celsius,
    container,
    fahrenheit,
    gas_mark,
    hours,
    ingredient,
    minutes,
    seconds,
)


class TestEntities:
    """Tests for entity factories and measurements."""

    def test_ingredient_factory(self):
        item = ingredient("Latte", amount=1, unit="cup")
        assert item.type == EntityType.INGREDIENT
        assert item.name == "Latte"
        assert item.amount == 1
        assert item.unit == "cup"

    def test_extra_properties_are_kept(self):
        cup = container("Tazza", material="ceramic", volume=1)
        dumped = cup.model_dump()
        assert dumped["material"] == "ceramic"
        assert dumped["volume"] == 1

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            ingredient("   ")

    def test_measurement_helpers(self):
        assert minutes(3).unit == "minutes"
        assert seconds(30).unit == "seconds"
        assert hours(2).unit == "hours"
        assert fahrenheit(350).unit == "F"
        assert celsius(180).unit == "C"
        assert gas_mark(4).unit == "Gas Mark"

    def test_measurement_str(self):
        assert str(minutes(3)) == "3 minutes"
        assert str(fahrenheit(350)) == "350F"

    def test_stove_heat_levels(self):
        assert StoveHeat.MEDIUM.temperature == Temperature(value=3, unit="level")

    def test_meat_doneness_in_fahrenheit(self):
        assert MeatDoneness.MEDIUM_RARE.temperature == fahrenheit(135)


class TestRecipeStepBuilder:
    """Tests for the fluent step builder."""

    def test_add_to_creates_one_action_per_ingredient(self, tazza, latte, espresso):
        step = RecipeStep().add(latte, espresso).to(tazza)
        assert [a.type for a in step.actions] == [ActionType.ADD, ActionType.ADD]
        assert [a.ingredient.name for a in step.actions] == ["Latte", "Espresso"]
        assert all(a.container.name == "Tazza" for a in step.actions)

    def test_add_accepts_a_list(self, tazza, latte, espresso):
        step = RecipeStep().add([latte, espresso]).to(tazza)
        assert len(step.actions) == 2

    def test_mix_uses_current_container(self, tazza, latte):
        step = RecipeStep().add(latte).to(tazza).mix()
        assert step.actions[-1].type == ActionType.MIX
        assert step.actions[-1].container.name == "Tazza"

    def test_heat_resolves_stove_level_names(self):
        step = RecipeStep().heat("medium-high")
        assert step.actions[0].temperature == Temperature(value=4, unit="level")

    def test_heat_keeps_unknown_strings(self):
        step = RecipeStep().heat("blazing")
        assert step.actions[0].temperature == "blazing"

    def test_for_sets_duration_on_last_action(self):
        step = RecipeStep().heat(StoveHeat.LOW).for_(minutes(5))
        assert step.actions[-1].duration == minutes(5)

    def test_for_without_action_raises(self):
        with pytest.raises(StepBuilderError):
            RecipeStep().for_(minutes(5))

    def test_until_condition_without_action_raises(self):
        with pytest.raises(StepBuilderError):
            RecipeStep().until_condition("thick")

    def test_transfer_moves_current_container(self, tazza, latte):
        bowl = container("Bowl")
        step = RecipeStep().add(latte).to(tazza).transfer(bowl).mix()
        transfer = step.actions[1]
        assert transfer.from_.name == "Tazza"
        assert transfer.to.name == "Bowl"
        assert step.actions[2].container.name == "Bowl"

    def test_prepare_uses_first_ingredient(self, latte, sugar):
        step = RecipeStep().add(sugar, latte).prepare("sift", "weigh")
        assert [a.technique for a in step.actions] == ["sift", "weigh"]
        assert all(a.ingredient.name == "Sugar" for a in step.actions)

    def test_equipment_and_appliance_actions(self):
        oven = appliance("Oven")
        step = (
            RecipeStep()
            .preheat(oven, fahrenheit(350))
            .set_equipment(oven, "convection")
            .grill_setup(fahrenheit(450), GrillCookingMethod.DIRECT)
            .cook_to_temperature(MeatDoneness.MEDIUM)
            .rest(minutes(10))
        )
        types = [a.type for a in step.actions]
        assert types == [
            ActionType.PREHEAT,
            ActionType.EQUIPMENT_SETTING,
            ActionType.EQUIPMENT_SETTING,
            ActionType.HEAT,
            ActionType.REST,
        ]
        assert step.actions[2].equipment == "grill"
        assert step.actions[3].target_temperature == fahrenheit(145)

    def test_cues_adjustments_and_sensory_checks(self):
        step = (
            RecipeStep()
            .until_cue(Cue.COLOR, "golden")
            .adjust("too thick", "add milk")
            .check_sensory(Cue.TASTE, "sweet enough", "add sugar")
        )
        assert step.cues[0].description == "golden"
        assert step.adjustments[0].action == "add milk"
        assert step.sensory_checks[0].adjustment == "add sugar"

    def test_parallel_appends_thread(self, latte):
        step = RecipeStep().parallel(lambda t: t.add(latte).prepare("froth"))
        assert len(step.threads) == 1
        assert step.threads[0].actions[0].technique == "froth"

    def test_get_actions(self, parallel_recipe):
        actions = parallel_recipe.steps[0].get_actions()
        assert len(actions["main_thread"]) == 1
        assert len(actions["parallel_threads"]) == 2
        assert actions["parallel_threads"][1][0].type == ActionType.REST

    def test_step_dict_round_trip(self, parallel_recipe):
        data = parallel_recipe.steps[0].to_dict()
        assert "sensoryChecks" in data
        restored = RecipeStep.from_dict(data)
        assert restored.to_dict() == data


class TestRecipeOperations:
    """Tests for recipe-level operations."""

    def test_create(self, latte):
        recipe = Recipe.create("Latte", ingredients=[latte], servings=2)
        assert recipe.name == "Latte"
        assert recipe.servings == 2
        assert recipe.difficulty == "medium"

    def test_create_step_appends(self, latte, tazza):
        recipe = Recipe("Latte")
        recipe.create_step(latte).to(tazza)
        assert len(recipe.steps) == 1
        assert recipe.steps[0].actions[0].ingredient.name == "Latte"

    def test_chained_setters(self):
        recipe = (
            Recipe("Latte")
            .set_difficulty("easy")
            .set_estimated_time(minutes(5))
            .add_nutrition_info({"calories": 120})
            .add_mise_en_place(["warm the cup"])
            .add_serving_suggestion("with biscotti")
            .add_tags("beverage", "Italian")
        )
        assert recipe.difficulty == "easy"
        assert recipe.estimated_time == minutes(5)
        assert recipe.nutrition_info == {"calories": 120}
        assert recipe.mise_en_place == ["warm the cup"]
        assert recipe.serving_suggestions == ["with biscotti"]
        assert recipe.tags == ["beverage", "Italian"]

    def test_scale(self, latte):
        salt = ingredient("Salt")
        recipe = Recipe("Latte", ingredients=[latte, salt], servings=1).scale(2)
        assert recipe.ingredients[0].amount == 2
        assert recipe.ingredients[1].amount is None
        assert recipe.servings == 2
        assert latte.amount == 1

    def test_suggest_substitution(self, latte):
        oat = ingredient("Oat milk")
        recipe = Recipe("Latte").suggest_substitution(latte, oat)
        assert recipe.substitutions[0].alternative.name == "Oat milk"

    def test_validate_recipe_passes(self, latte_recipe):
        latte_recipe.validate_recipe()

    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"name": " "}, "name"),
            ({"name": "x"}, "ingredient"),
        ],
    )
    def test_validate_recipe_failures(self, kwargs, message):
        with pytest.raises(RecipeValidationError) as exc_info:
            Recipe(**kwargs).validate_recipe()
        assert message in exc_info.value.message

    def test_validate_requires_steps(self, latte):
        with pytest.raises(RecipeValidationError):
            Recipe("x", ingredients=[latte]).validate_recipe()


class TestRecipeSerialization:
    """Tests for JSON and QR payload round trips."""

    def test_json_uses_camel_case_keys(self, latte_recipe):
        data = json.loads(latte_recipe.to_json())
        assert "estimatedTime" in data
        assert data["steps"][0]["actions"][0]["type"] == "add"
        assert "sensoryChecks" in data["steps"][0]

    def test_transfer_serializes_from_key(self, latte, tazza):
        recipe = Recipe("r", steps=[RecipeStep().add(latte).to(tazza).transfer(container("Bowl"))])
        action = json.loads(recipe.to_json())["steps"][0]["actions"][1]
        assert action["from"]["name"] == "Tazza"

    def test_json_round_trip_preserves_hash(self, latte_recipe):
        restored = Recipe.from_json(latte_recipe.to_json())
        assert restored.to_dict() == latte_recipe.to_dict()
        assert restored.cook() == latte_recipe.cook()

    def test_from_json_accepts_original_format(self):
        payload = {
            "name": "Latte Caffe",
            "ingredients": [{"type": "ingredient", "name": "Latte", "amount": 1, "unit": "cup"}],
            "tools": [],
            "appliances": [],
            "steps": [{
                "actions": [{"type": "heat", "temperature": {"value": 3, "unit": "level"}}],
                "threads": [],
                "cues": [],
                "adjustments": [],
                "sensoryChecks": [{"type": "smell", "description": "Aroma", "adjustment": "wait"}],
            }],
            "servings": 1,
            "difficulty": "very easy",
            "estimatedTime": {"value": 3, "unit": "minutes"},
            "nutritionInfo": None,
            "miseEnPlace": [],
            "servingSuggestions": [],
            "substitutions": [],
            "tags": ["beverage"],
        }
        recipe = Recipe.from_json(json.dumps(payload))
        assert recipe.steps[0].sensory_checks[0].type == Cue.SMELL
        assert recipe.estimated_time == minutes(3)

    def test_qr_payload_round_trip(self, latte_recipe):
        restored = Recipe.from_qr_payload(latte_recipe.to_qr_payload())
        assert restored.name == latte_recipe.name
        assert restored.cook() == latte_recipe.cook()

    def test_qr_code_draws_payload(self, latte_recipe):
        out = io.StringIO()
        payload = latte_recipe.to_qr_code(out=out)
        assert payload == latte_recipe.to_qr_payload()
        drawing = out.getvalue()
        assert len(drawing.splitlines()) > 10
        assert Recipe.from_qr_payload(payload).name == "Latte Caffe"

    @pytest.mark.parametrize("payload", ["not-base64!!", "aGVsbG8gd29ybGQ=", None])
    def test_malformed_qr_payload(self, payload):
        with pytest.raises(RecipeValidationError) as exc_info:
            Recipe.from_qr_payload(payload)
        assert exc_info.value.error_code == ErrorCode.RECIPE_INVALID_DATA

    def test_qr_payload_with_invalid_recipe(self):
        payload = base64.b64encode(gzip.compress(b'{"steps": []}')).decode()
        with pytest.raises(RecipeValidationError):
            Recipe.from_qr_payload(payload)


class TestHashCaching:
    """Tests for memoized hashes and their invalidation."""

    @pytest.fixture
    def counting_hash(self):
        with patch.object(recipe_module, "hash_recipe", wraps=recipe_module.hash_recipe) as mock:
            yield mock

    def test_cook_is_memoized(self, latte_recipe, counting_hash):
        first = latte_recipe.cook()
        second = latte_recipe.cook()
        assert first == second
        assert counting_hash.call_count == 1

    def test_cache_is_per_bucket_count(self, latte_recipe, counting_hash):
        assert latte_recipe.cook(64) != latte_recipe.cook(256)
        assert counting_hash.call_count == 2

    def test_mutating_methods_invalidate(self, latte_recipe, counting_hash):
        latte_recipe.cook()
        latte_recipe.add_tags("sweet")
        latte_recipe.cook()
        assert counting_hash.call_count == 2

    def test_field_assignment_invalidates(self, latte_recipe, cookie):
        before = latte_recipe.cook()
        latte_recipe.ingredients = [*latte_recipe.ingredients, cookie]
        assert latte_recipe.cook() != before

    def test_create_step_invalidates(self, latte_recipe, cookie, tazza):
        before = latte_recipe.cook()
        latte_recipe.create_step(cookie).to(tazza)
        assert latte_recipe.cook() != before

    @pytest.mark.parametrize("value", [0, -4, 1.5])
    def test_invalid_bucket_count(self, latte_recipe, value):
        with pytest.raises(InvalidBucketCountError):
            latte_recipe.cook(value)

    def test_copy_gets_its_own_hash(self, latte_recipe, cookie):
        """A copy with different ingredients must not reuse the original's hash."""
        original_hash = latte_recipe.cook()
        variant = latte_recipe.model_copy(
            update={"ingredients": [*latte_recipe.ingredients, cookie]}
        )

        assert variant.cook() == hash_recipe(variant)
        assert variant.cook() != original_hash
        assert variant.compare_to(latte_recipe) < 1.0

    def test_copy_does_not_share_cache(self, latte_recipe):
        latte_recipe.cook()
        variant = latte_recipe.model_copy()
        variant.cook(64)
        assert 64 not in latte_recipe._hash_cache

    @pytest.mark.parametrize("copier", [copy.copy, copy.deepcopy])
    def test_stdlib_copies_start_empty(self, latte_recipe, copier):
        latte_recipe.cook()
        assert copier(latte_recipe)._hash_cache == {}

    def test_deep_copy_tracks_its_own_steps(self, latte_recipe, cookie, tazza):
        variant = latte_recipe.model_copy(deep=True)
        before = variant.cook()
        variant.steps[0].add(cookie).to(tazza)
        assert variant.cook() == hash_recipe(variant)
        assert variant.cook() != before

    def test_builder_calls_on_created_step_invalidate(self, tazza):
        """Steps handed out by create_step keep the recipe hash current."""
        recipe = Recipe("Salted", ingredients=[ingredient("Salt")])
        step = recipe.create_step(ingredient("Salt"))
        recipe.cook()

        step.to(tazza).mix()

        assert recipe.cook() == hash_recipe(recipe)

    def test_builder_calls_on_constructor_steps_invalidate(self, latte_recipe):
        before = latte_recipe.cook()
        latte_recipe.steps[1].until_cue(Cue.SMELL, "Toasty")
        assert latte_recipe.cook() != before
        assert latte_recipe.cook() == hash_recipe(latte_recipe)

    def test_builder_calls_on_threads_invalidate(self, parallel_recipe):
        before = parallel_recipe.cook()
        parallel_recipe.steps[0].threads[1].until_condition("cooled")
        parallel_recipe.steps[0].threads[0].check_sensory(Cue.TASTE, "Bitter")
        assert parallel_recipe.cook() != before
        assert parallel_recipe.cook() == hash_recipe(parallel_recipe)

    def test_new_thread_on_attached_step_invalidates(self, latte_recipe):
        before = latte_recipe.cook()
        latte_recipe.steps[0].parallel(lambda t: t.rest(minutes(1)))
        assert latte_recipe.cook() != before
        latte_recipe.cook()
        latte_recipe.steps[0].threads[0].until_cue(Cue.COLOR, "Pale")
        assert latte_recipe.cook() == hash_recipe(latte_recipe)

    def test_reassigned_steps_are_tracked(self, latte_recipe, make_latte_recipe):
        latte_recipe.steps = make_latte_recipe().steps
        before = latte_recipe.cook()
        latte_recipe.steps[0].rest(minutes(1))
        assert latte_recipe.cook() != before

    def test_step_shared_by_two_recipes_invalidates_both(self, latte_recipe):
        step = latte_recipe.steps[0]
        other = Recipe("Other", ingredients=latte_recipe.ingredients, steps=[step])
        first, second = latte_recipe.cook(), other.cook()
        step.rest(minutes(1))
        assert latte_recipe.cook() != first
        assert other.cook() != second


class TestRecipeStepEquality:
    """Steps compare by content."""

    def test_equal_steps(self, latte, tazza):
        assert RecipeStep().add(latte).to(tazza) == RecipeStep().add(latte).to(tazza)

    def test_attached_step_equals_detached_copy(self, latte_recipe):
        step = latte_recipe.steps[0]
        assert step == RecipeStep.from_dict(step.to_dict())

    def test_different_steps(self, latte, tazza):
        assert RecipeStep().add(latte).to(tazza) != RecipeStep().add(latte).to(tazza).mix()
