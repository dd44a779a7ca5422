"""
The Recipe aggregate: entities, steps and recipe-level metadata.
"""
import base64
import binascii
import gzip
import logging
import weakref
import zlib
from typing import Any, Dict, List, Optional, TextIO, Union

import qrcode
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from recipekit.config import settings
from recipekit.engine.hashing import hash_recipe, similarity, validate_bucket_count
from recipekit.engine.rendering import render_markdown, render_text
from recipekit.errors import RecipeValidationError
from recipekit.models.schemas import Duration, Entity, Substitution
from recipekit.models.step import RecipeStep

logger = logging.getLogger(__name__)


class Recipe(BaseModel):
    """
    A complete recipe.

    Mutating methods return the recipe so calls can be chained. The
    similarity hash computed by cook() is cached per bucket count and
    dropped whenever the recipe is changed through its own methods, through
    the builder methods of its steps (and their threads), or by assigning
    one of its fields. Copies start with an empty cache. Edits that bypass
    the builders, such as appending to a list attribute directly, are not
    tracked; use hash_recipe() for an uncached hash.

    Example:
        >>> recipe = Recipe(
        ...     "Latte Caffe",
        ...     ingredients=[latte, espresso, sugar],
        ...     steps=[step1, step2],
        ... )
        >>> recipe.cook()
        'H4sIAAAAAAAA...'
    """
    name: str
    ingredients: List[Entity] = Field(default_factory=list)
    tools: List[Entity] = Field(default_factory=list)
    appliances: List[Entity] = Field(default_factory=list)
    steps: List[RecipeStep] = Field(default_factory=list)
    servings: Union[int, float] = 1
    difficulty: str = "medium"
    estimated_time: Optional[Duration] = Field(None, alias="estimatedTime")
    nutrition_info: Optional[Dict[str, Any]] = Field(None, alias="nutritionInfo")
    mise_en_place: List[str] = Field(default_factory=list, alias="miseEnPlace")
    serving_suggestions: List[str] = Field(default_factory=list, alias="servingSuggestions")
    substitutions: List[Substitution] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    # bucket count -> encoded hash
    _hash_cache: Dict[int, str] = PrivateAttr(default_factory=dict)

    def __init__(self, name: Optional[str] = None, /, **data: Any):
        if name is not None:
            data["name"] = name
        super().__init__(**data)

    def model_post_init(self, __context: Any) -> None:
        self._watch_steps()

    def __setattr__(self, attr: str, value: Any) -> None:
        super().__setattr__(attr, value)
        if attr in type(self).model_fields:
            if attr == "steps":
                self._watch_steps()
            self._invalidate_hash()

    def __copy__(self) -> "Recipe":
        copied = super().__copy__()
        copied._hash_cache = {}
        copied._watch_steps()
        return copied

    def __deepcopy__(self, memo: Optional[Dict[int, Any]] = None) -> "Recipe":
        copied = super().__deepcopy__(memo)
        copied._hash_cache = {}
        copied._watch_steps()
        return copied

    def model_copy(self, *, update: Optional[Dict[str, Any]] = None, deep: bool = False) -> "Recipe":
        """Copy the recipe. The copy starts with an empty hash cache."""
        copied = super().model_copy(update=update, deep=deep)
        # update bypasses __setattr__, so steps may be new
        copied._watch_steps()
        return copied

    def _watch_steps(self) -> None:
        owner_ref = weakref.ref(self)
        for step in self.steps:
            step._attach(owner_ref)

    def _invalidate_hash(self) -> None:
        if self._hash_cache:
            logger.debug(f"Invalidating cached hash for recipe '{self.name}'")
            self._hash_cache = {}

    @classmethod
    def create(cls, name: str, **options: Any) -> "Recipe":
        return cls(name, **options)

    # ------------------------------------------------------------------
    # Builder methods
    # ------------------------------------------------------------------

    def create_step(self, *ingredients: Union[Entity, List[Entity]]) -> RecipeStep:
        """Create a step starting with the given ingredients and append it."""
        step = RecipeStep().add(*ingredients)
        step._attach(weakref.ref(self))
        self.steps.append(step)
        self._invalidate_hash()
        return step

    def set_difficulty(self, level: str) -> "Recipe":
        self.difficulty = level
        return self

    def set_estimated_time(self, time: Duration) -> "Recipe":
        self.estimated_time = time
        return self

    def add_nutrition_info(self, info: Dict[str, Any]) -> "Recipe":
        self.nutrition_info = info
        return self

    def add_mise_en_place(self, steps: List[str]) -> "Recipe":
        self.mise_en_place = list(steps)
        return self

    def scale(self, factor: float) -> "Recipe":
        """Scale ingredient amounts and servings by a factor."""
        self.ingredients = [
            ing.model_copy(update={"amount": ing.amount * factor})
            if ing.amount is not None else ing
            for ing in self.ingredients
        ]
        self.servings = self.servings * factor
        return self

    def suggest_substitution(self, ingredient: Entity, alternative: Entity) -> "Recipe":
        self.substitutions.append(Substitution(original=ingredient, alternative=alternative))
        self._invalidate_hash()
        return self

    def add_serving_suggestion(self, suggestion: str) -> "Recipe":
        self.serving_suggestions.append(suggestion)
        self._invalidate_hash()
        return self

    def add_tags(self, *new_tags: str) -> "Recipe":
        self.tags.extend(new_tags)
        self._invalidate_hash()
        return self

    def validate_recipe(self) -> None:
        """
        Check that the recipe is complete enough to cook.

        Raises:
            RecipeValidationError: If the recipe has no name, ingredients or steps.
        """
        if not self.name or not self.name.strip():
            raise RecipeValidationError("Recipe must have a name")
        if not self.ingredients:
            raise RecipeValidationError("Recipe must have at least one ingredient", self.name)
        if not self.steps:
            raise RecipeValidationError("Recipe must have at least one step", self.name)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to JSON using the camelCase keys of the recipe file format."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)

    @classmethod
    def from_json(cls, json_str: Union[str, bytes]) -> "Recipe":
        return cls.model_validate_json(json_str)

    def to_qr_payload(self) -> str:
        """Compressed, base64-encoded JSON of the recipe, compact enough for a QR code."""
        raw = self.to_json().encode(settings.qr_payload_encoding)
        return base64.b64encode(gzip.compress(raw, mtime=0)).decode("ascii")

    def to_qr_code(self, out: Optional[TextIO] = None) -> str:
        """
        Draw the recipe as a QR code in the terminal.

        Args:
            out: Stream to draw on. Defaults to stdout.

        Returns:
            The QR payload (see to_qr_payload) encoded in the drawn code.
        """
        payload = self.to_qr_payload()
        qr = qrcode.QRCode(border=1)
        qr.add_data(payload)
        qr.make(fit=True)
        logger.debug(f"Drawing QR code version {qr.version} for recipe '{self.name}'")
        qr.print_ascii(out=out)
        return payload

    @classmethod
    def from_qr_payload(cls, payload: str) -> "Recipe":
        """
        Rebuild a recipe from a QR payload.

        Raises:
            RecipeValidationError: If the payload is not valid base64 gzip
                data or does not hold a valid recipe.
        """
        try:
            raw = gzip.decompress(base64.b64decode(payload, validate=True))
            return cls.from_json(raw.decode(settings.qr_payload_encoding))
        except (binascii.Error, ValueError, TypeError, OSError, EOFError, zlib.error) as e:
            raise RecipeValidationError(f"Invalid QR payload: {e}") from e

    # ------------------------------------------------------------------
    # Similarity hashing
    # ------------------------------------------------------------------

    def cook(self, num_buckets: Optional[int] = None) -> str:
        """
        Calculate (or return the cached) similarity hash of the recipe.

        Args:
            num_buckets: Histogram size. Defaults to settings.hash_num_buckets.

        Returns:
            The encoded hash string.
        """
        num_buckets = validate_bucket_count(num_buckets)
        cached = self._hash_cache.get(num_buckets)
        if cached is not None:
            logger.debug(f"Hash cache hit for recipe '{self.name}' ({num_buckets} buckets)")
            return cached

        encoded = hash_recipe(self, num_buckets)
        self._hash_cache[num_buckets] = encoded
        return encoded

    def compare_to(self, other: Union["Recipe", str]) -> float:
        """
        Similarity between this recipe and another recipe or encoded hash.

        Returns:
            A value between 0 and 1, where 1 means identical.

        Raises:
            HashDecodeError: If other is a hash string that cannot be decoded.
            HistogramLengthMismatchError: If other was hashed with a different bucket count.
        """
        return similarity(self, other)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def to_text(self) -> str:
        return render_text(self)

    def to_markdown(self) -> str:
        return render_markdown(self)
