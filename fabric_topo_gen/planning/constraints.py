from __future__ import annotations
from typing import Any


class LayoutConstraintViolation(ValueError):
    pass


def validate_cluster_count(cluster_count: Any) -> int:
    """Reject anything that is not a non-negative int.

    Booleans and floats (even integral ones) are refused rather than coerced;
    callers are expected to pass validated integers.
    """
    if isinstance(cluster_count, bool) or not isinstance(cluster_count, int):
        raise LayoutConstraintViolation(
            f"cluster_count must be an integer, got {type(cluster_count).__name__}: {cluster_count!r}"
        )
    if cluster_count < 0:
        raise LayoutConstraintViolation(f"cluster_count must be >= 0, got {cluster_count}")
    return cluster_count


def validate_flag(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise LayoutConstraintViolation(f"{name} must be a bool, got {type(value).__name__}: {value!r}")
    return value
