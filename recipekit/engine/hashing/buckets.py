"""
Bucket hashing: project feature tokens onto a fixed-size count histogram.
"""
import hashlib
from typing import Iterable, Optional, Tuple

from recipekit.config import settings
from recipekit.errors import InvalidBucketCountError

Histogram = Tuple[int, ...]


def validate_bucket_count(num_buckets: Optional[int]) -> int:
    """
    Resolve and check a bucket count.

    None falls back to the configured default. Anything other than a
    positive int (bools included) raises InvalidBucketCountError.
    """
    if num_buckets is None:
        num_buckets = settings.hash_num_buckets
    if isinstance(num_buckets, bool) or not isinstance(num_buckets, int) or num_buckets <= 0:
        raise InvalidBucketCountError(num_buckets)
    return num_buckets


def bucket_index(token: str, num_buckets: int) -> int:
    """MD5 of the lowercase token; first 4 bytes as big-endian uint32, mod N."""
    digest = hashlib.md5(token.lower().encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big") % num_buckets


def build_histogram(tokens: Iterable[str], num_buckets: Optional[int] = None) -> Histogram:
    """
    Count tokens per bucket.

    Args:
        tokens: Feature tokens (see extract_features).
        num_buckets: Histogram size. Defaults to settings.hash_num_buckets.

    Returns:
        Tuple of num_buckets counters.
    """
    num_buckets = validate_bucket_count(num_buckets)
    buckets = [0] * num_buckets
    for token in tokens:
        buckets[bucket_index(token, num_buckets)] += 1
    return tuple(buckets)
