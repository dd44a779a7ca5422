"""
Similarity scoring between recipes and/or encoded hashes.
"""
import logging
from typing import Any, Optional, Union

from recipekit.config import settings
from recipekit.engine.hashing.buckets import Histogram, build_histogram, validate_bucket_count
from recipekit.engine.hashing.codec import decode_hash, encode_histogram
from recipekit.engine.hashing.features import extract_features
from recipekit.errors import (
    HistogramLengthMismatchError,
    InvalidBucketDeltaError,
    InvalidHashOperandError,
)

logger = logging.getLogger(__name__)

# A recipe object, or a hash string produced by encode_histogram
HashOperand = Union[Any, str]


def hash_recipe(recipe: Any, num_buckets: Optional[int] = None) -> str:
    """
    Compute a recipe's encoded similarity hash.

    Pure function of the recipe's current content; nothing is cached.
    Recipe.cook() wraps this with a per-instance cache.
    """
    num_buckets = validate_bucket_count(num_buckets)
    tokens = extract_features(recipe)
    encoded = encode_histogram(build_histogram(tokens, num_buckets))
    logger.debug(f"Hashed {len(tokens)} tokens into {num_buckets} buckets")
    return encoded


def _resolve_hash(operand: HashOperand, num_buckets: Optional[int]) -> str:
    if isinstance(operand, str):
        return operand
    cook = getattr(operand, "cook", None)
    if callable(cook):
        return cook(num_buckets)
    if hasattr(operand, "ingredients") and hasattr(operand, "steps"):
        return hash_recipe(operand, num_buckets)
    raise InvalidHashOperandError(operand)


def validate_max_bucket_delta(max_bucket_delta: Optional[int]) -> int:
    """
    Resolve and check the per-bucket delta used to normalize distances.

    None falls back to settings.hash_max_bucket_delta. Anything other than a
    positive int (bools included) raises InvalidBucketDeltaError.
    """
    if max_bucket_delta is None:
        max_bucket_delta = settings.hash_max_bucket_delta
    if (
        isinstance(max_bucket_delta, bool)
        or not isinstance(max_bucket_delta, int)
        or max_bucket_delta <= 0
    ):
        raise InvalidBucketDeltaError(max_bucket_delta)
    return max_bucket_delta


def histogram_distance(left: Histogram, right: Histogram) -> int:
    """
    Sum of absolute per-bucket differences.

    Raises:
        HistogramLengthMismatchError: If the histograms differ in bucket count.
    """
    if len(left) != len(right):
        raise HistogramLengthMismatchError(len(left), len(right))
    return sum(abs(a - b) for a, b in zip(left, right))


def similarity(
    left: HashOperand,
    right: HashOperand,
    num_buckets: Optional[int] = None,
    max_bucket_delta: Optional[int] = None,
) -> float:
    """
    Score how similar two recipes (or their hashes) are.

    Each operand is either a recipe or an encoded hash string. Recipes are
    hashed with num_buckets (default settings.hash_num_buckets).

    The score is 1 - distance / (max_bucket_delta * buckets), clamped to
    [0, 1]. max_bucket_delta defaults to settings.hash_max_bucket_delta (16),
    which keeps scores comparable with previously computed ones.

    Raises:
        HashDecodeError: If a hash string cannot be decoded.
        HistogramLengthMismatchError: If the two hashes use different bucket counts.
        InvalidBucketDeltaError: If max_bucket_delta is not a positive integer.
        InvalidHashOperandError: If an operand is neither a recipe nor a string.
    """
    max_bucket_delta = validate_max_bucket_delta(max_bucket_delta)

    left_histogram = decode_hash(_resolve_hash(left, num_buckets))
    right_histogram = decode_hash(_resolve_hash(right, num_buckets))

    distance = histogram_distance(left_histogram, right_histogram)
    score = 1 - distance / (max_bucket_delta * len(left_histogram))
    return max(0.0, min(1.0, score))
