"""
Histogram codec: histogram <-> compact, text-safe hash string.

Format (HASH_FORMAT): bucket counters as two hex digits each (one byte per
bucket), gzip-compressed, base64-encoded. Bucket indices come from MD5, so
hashes are only comparable with hashes built the same way. Hashes carry no
version prefix; existing hashes in this format stay comparable.
"""
import base64
import binascii
import gzip
import logging
import zlib

from recipekit.engine.hashing.buckets import Histogram
from recipekit.errors import HashDecodeError

logger = logging.getLogger(__name__)

HASH_FORMAT = "md5-u8-gzip-b64"

# Largest count a two-hex-digit field can hold
MAX_BUCKET_COUNT = 0xFF


def histogram_to_hex(histogram: Histogram) -> str:
    """
    Render counters as zero-padded two-digit hex, in bucket order.

    Counters above 255 saturate at "ff".
    """
    saturated = [i for i, count in enumerate(histogram) if count > MAX_BUCKET_COUNT]
    if saturated:
        logger.warning(
            f"{len(saturated)} bucket(s) exceed {MAX_BUCKET_COUNT} and were clamped "
            f"(first index {saturated[0]})"
        )
    return "".join(f"{min(count, MAX_BUCKET_COUNT):02x}" for count in histogram)


def hex_to_histogram(hex_string: str) -> Histogram:
    """Parse every two hex characters as one bucket's count."""
    return tuple(int(hex_string[i:i + 2], 16) for i in range(0, len(hex_string), 2))


def encode_histogram(histogram: Histogram) -> str:
    """
    Compress a histogram into an encoded hash.

    mtime is pinned so equal histograms always give byte-identical hashes.
    """
    raw = bytes.fromhex(histogram_to_hex(histogram))
    compressed = gzip.compress(raw, mtime=0)
    return base64.b64encode(compressed).decode("ascii")


def decode_hash(encoded: str) -> Histogram:
    """
    Decode an encoded hash back into its histogram.

    Raises:
        HashDecodeError: If the input is not a string, not valid base64, not a
            valid gzip stream, or decodes to an empty histogram.
    """
    if not isinstance(encoded, str):
        raise HashDecodeError(f"expected a string, got {type(encoded).__name__}")

    try:
        compressed = base64.b64decode(encoded.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise HashDecodeError(f"not valid base64 ({e})", encoded) from e

    try:
        raw = gzip.decompress(compressed)
    except (OSError, EOFError, zlib.error) as e:
        raise HashDecodeError(f"unable to decompress ({e})", encoded) from e

    if not raw:
        raise HashDecodeError("hash contains no buckets", encoded)

    return hex_to_histogram(raw.hex())
