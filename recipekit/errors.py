"""
Custom exceptions and error codes for recipekit.

This module provides:
- Structured error codes for categorized error handling
- Custom exception classes for specific failure scenarios
- Error response schema for consistent CLI/JSON output
"""
from enum import Enum
from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """
    Library-wide error codes for categorized error handling.

    Format: CATEGORY_SPECIFIC_ERROR
    Categories:
    - HASH_*: Similarity hashing errors
    - RECIPE_*: Recipe model errors
    - STEP_*: Step builder errors
    - UNIT_*: Unit conversion errors
    """

    # Hash-related errors
    HASH_DECODE_FAILED = "HASH_DECODE_FAILED"
    HASH_LENGTH_MISMATCH = "HASH_LENGTH_MISMATCH"
    HASH_INVALID_BUCKET_COUNT = "HASH_INVALID_BUCKET_COUNT"
    HASH_INVALID_BUCKET_DELTA = "HASH_INVALID_BUCKET_DELTA"
    HASH_INVALID_OPERAND = "HASH_INVALID_OPERAND"

    # Recipe-related errors
    RECIPE_INVALID_DATA = "RECIPE_INVALID_DATA"

    # Step builder errors
    STEP_NO_ACTION = "STEP_NO_ACTION"

    # Unit conversion errors
    UNIT_CONVERSION_UNSUPPORTED = "UNIT_CONVERSION_UNSUPPORTED"

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """Structured error payload for CLI and JSON consumers."""
    error_code: ErrorCode
    message: str
    details: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(use_enum_values=True)


class RecipeKitError(Exception):
    """
    Base exception for all recipekit errors.

    Provides structured error information for consistent error handling.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Convert exception to ErrorResponse for output."""
        return ErrorResponse(
            error_code=self.error_code,
            message=self.message,
            details=self.details if self.details else None,
        )


# Hash-related exceptions

class HashDecodeError(RecipeKitError):
    """Raised when an encoded hash is not valid base64 or not a valid gzip payload."""

    def __init__(self, reason: str, value: Any = None):
        details = {"reason": reason}
        if isinstance(value, str):
            details["hash_prefix"] = value[:32]
        super().__init__(
            message=f"Invalid hash format: {reason}",
            error_code=ErrorCode.HASH_DECODE_FAILED,
            details=details,
        )


class HistogramLengthMismatchError(RecipeKitError):
    """Raised when two histograms with different bucket counts are compared."""

    def __init__(self, left_buckets: int, right_buckets: int):
        super().__init__(
            message=(
                f"Hashes must be of equal length: {left_buckets} buckets "
                f"vs {right_buckets} buckets"
            ),
            error_code=ErrorCode.HASH_LENGTH_MISMATCH,
            details={
                "left_buckets": left_buckets,
                "right_buckets": right_buckets,
            },
        )


class InvalidBucketCountError(RecipeKitError):
    """Raised when a non-positive or non-integer bucket count is requested."""

    def __init__(self, num_buckets: Any):
        super().__init__(
            message=f"Bucket count must be a positive integer, got {num_buckets!r}",
            error_code=ErrorCode.HASH_INVALID_BUCKET_COUNT,
            details={"num_buckets": repr(num_buckets)},
        )


class InvalidBucketDeltaError(RecipeKitError):
    """Raised when a non-positive or non-integer max bucket delta is requested."""

    def __init__(self, max_bucket_delta: Any):
        super().__init__(
            message=f"Max bucket delta must be a positive integer, got {max_bucket_delta!r}",
            error_code=ErrorCode.HASH_INVALID_BUCKET_DELTA,
            details={"max_bucket_delta": repr(max_bucket_delta)},
        )


class InvalidHashOperandError(RecipeKitError):
    """Raised when a similarity operand is neither a recipe nor a hash string."""

    def __init__(self, operand: Any):
        super().__init__(
            message=f"Expected a recipe or an encoded hash string, got {type(operand).__name__}",
            error_code=ErrorCode.HASH_INVALID_OPERAND,
            details={"operand_type": type(operand).__name__},
        )


# Recipe-related exceptions

class RecipeValidationError(RecipeKitError):
    """Raised when a recipe fails validation."""

    def __init__(self, reason: str, recipe_name: str = None):
        details = {"reason": reason}
        if recipe_name:
            details["recipe_name"] = recipe_name
        super().__init__(
            message=reason,
            error_code=ErrorCode.RECIPE_INVALID_DATA,
            details=details,
        )


class StepBuilderError(RecipeKitError):
    """Raised when a step modifier is applied before any action exists."""

    def __init__(self, operation: str):
        super().__init__(
            message=f"Cannot apply '{operation}': the step has no actions yet",
            error_code=ErrorCode.STEP_NO_ACTION,
            details={"operation": operation},
        )


# Unit conversion exceptions

class UnsupportedConversionError(RecipeKitError):
    """Raised when no conversion exists between two units."""

    def __init__(self, from_unit: str, to_unit: str):
        super().__init__(
            message=f"Conversion from {from_unit} to {to_unit} is not supported",
            error_code=ErrorCode.UNIT_CONVERSION_UNSUPPORTED,
            details={"from_unit": from_unit, "to_unit": to_unit},
        )
