"""
Similarity hashing for recipes.

A recipe's ingredients and step tree are reduced to feature tokens, counted
into a fixed-size bucket histogram, and compressed into a short text hash.
Two hashes (or recipes) are compared by total per-bucket difference.

Pipeline:
1. extract_features - ordered feature tokens
2. build_histogram - MD5 bucket counts
3. encode_histogram / decode_hash - gzip + base64 codec
4. similarity - normalized score in [0, 1]
"""

from recipekit.engine.hashing.buckets import Histogram, build_histogram, bucket_index, validate_bucket_count
from recipekit.engine.hashing.codec import (
    HASH_FORMAT,
    decode_hash,
    encode_histogram,
    hex_to_histogram,
    histogram_to_hex,
)
from recipekit.engine.hashing.features import extract_features, normalize_token
from recipekit.engine.hashing.similarity import (
    hash_recipe,
    histogram_distance,
    similarity,
    validate_max_bucket_delta,
)

__all__ = [
    # Features
    "extract_features",
    "normalize_token",
    # Buckets
    "Histogram",
    "build_histogram",
    "bucket_index",
    "validate_bucket_count",
    # Codec
    "HASH_FORMAT",
    "encode_histogram",
    "decode_hash",
    "histogram_to_hex",
    "hex_to_histogram",
    # Comparison
    "hash_recipe",
    "histogram_distance",
    "similarity",
    "validate_max_bucket_delta",
]
