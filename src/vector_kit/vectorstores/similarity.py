# src/vector_kit/vectorstores/similarity.py

"""Vector math shared by the search engine and the similarity endpoint.

All functions are pure and compute in float64. Inputs may be any sequence of
real numbers, including numpy arrays.
"""

import numbers
from collections.abc import Iterable, Sequence

import numpy as np

from .errors import DimensionMismatchError, InvalidInputError


def validate_values(values: Iterable[float]) -> tuple[float, ...]:
    """Return `values` as an immutable tuple of floats.

    Raises:
        InvalidInputError: If `values` is empty, is not a sequence of real
            numbers, or contains NaN or infinity.
    """
    if isinstance(values, (str, bytes)):
        raise InvalidInputError("Vector must be a sequence of numbers")
    try:
        items = tuple(values)
    except TypeError as exc:
        raise InvalidInputError("Vector must be a sequence of numbers") from exc

    if not items:
        raise InvalidInputError("Vector must not be empty")

    for item in items:
        # bool is an int subclass, but True/False is never a coordinate
        if isinstance(item, bool) or not isinstance(item, numbers.Real):
            raise InvalidInputError(f"Vector contains a non-numeric value: {item!r}")

    try:
        result = tuple(float(item) for item in items)
    except OverflowError as exc:
        raise InvalidInputError("Vector must contain only finite values") from exc
    if not np.isfinite(result).all():
        raise InvalidInputError("Vector must contain only finite values")
    return result


def _as_array(values: Sequence[float] | np.ndarray) -> np.ndarray:
    return np.asarray(values, dtype=np.float64)


def _check_dimensions(a: np.ndarray, b: np.ndarray) -> None:
    if a.shape[0] != b.shape[0]:
        raise DimensionMismatchError(expected=a.shape[0], actual=b.shape[0])


def _max_abs(v: np.ndarray) -> float:
    return float(np.max(np.abs(v))) if v.size else 0.0


def _unit(v: np.ndarray) -> np.ndarray | None:
    """`v` scaled to length 1, or None for the zero vector.

    Dividing by the largest component first keeps the norm of very small or
    very large finite vectors from underflowing to 0 or overflowing to inf.
    """
    scale = _max_abs(v)
    if scale == 0.0:
        return None
    scaled = v / scale
    return scaled / np.linalg.norm(scaled)


def dot(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    va, vb = _as_array(a), _as_array(b)
    _check_dimensions(va, vb)
    return float(np.dot(va, vb))


def l2_norm(a: Sequence[float] | np.ndarray) -> float:
    va = _as_array(a)
    scale = _max_abs(va)
    if scale == 0.0:
        return 0.0
    return float(scale * np.linalg.norm(va / scale))


def cosine_similarity(
    a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray
) -> float:
    """
    Cosine similarity of two equal-length vectors.

    A zero vector on either side has no direction; its similarity is 0.0 so
    that NaN never reaches a ranking. Any other finite vector is scored,
    however small or large its components.

    Raises:
        DimensionMismatchError: If the vectors differ in length.
    """
    va, vb = _as_array(a), _as_array(b)
    _check_dimensions(va, vb)

    unit_a = _unit(va)
    unit_b = _unit(vb)
    if unit_a is None or unit_b is None:
        return 0.0

    similarity = np.dot(unit_a, unit_b)
    return float(np.clip(similarity, -1.0, 1.0))
