"""Vector and matrix operations over plain nested sequences.

Every public function accepts a vector (a sequence of real numbers) or a
matrix (a sequence of equal-length rows), resolves the rank once through
:func:`vecmat.shapes.as_operand` and dispatches on the result. Results are
freshly allocated ``float`` or ``list`` values; caller input is never mutated.

``sum``, ``min`` and ``pow`` shadow the builtins of the same name inside this
module; the builtins are reached through :mod:`builtins`.
"""
from __future__ import annotations

import builtins
import math
from typing import Iterable, List, Optional, Sequence, Union

from .errors import DimensionMismatchError, EmptyInputError
from .shapes import Matrix, Operand, Vector, as_matrix, as_operand, as_vector, to_real

ArrayLike = Union[Sequence[float], Sequence[Sequence[float]], Vector, Matrix]
DistanceMatrix = List[List[Optional[float]]]


def gather(source: ArrayLike, indices: Iterable[int]) -> Union[List[float], List[List[float]]]:
    """Keep the elements (or matrix rows) whose position is in ``indices``.

    Output follows the order of ``source``; the order and duplicates of
    ``indices`` are irrelevant and positions outside ``source`` never match.
    """

    operand = as_operand(source)
    wanted = set(indices)
    if isinstance(operand, Matrix):
        return [list(row) for idx, row in enumerate(operand.rows) if idx in wanted]
    return [value for idx, value in enumerate(operand.values) if idx in wanted]


def mean(x: ArrayLike) -> Union[float, List[float]]:
    """Arithmetic mean of a vector, or the per-column means of a matrix."""

    operand = as_operand(x)
    if isinstance(operand, Matrix):
        if not operand.rows:
            raise EmptyInputError("cannot take the mean of a matrix without rows")
        count = operand.n_rows
        return [_row_sum(column) / count for column in zip(*operand.rows)]
    if not operand.values:
        raise EmptyInputError("cannot take the mean of an empty vector")
    return _row_sum(operand.values) / len(operand.values)


def sum(x: ArrayLike) -> float:
    operand = as_operand(x)
    if isinstance(operand, Matrix):
        return builtins.sum((_row_sum(row) for row in operand.rows), 0.0)
    return _row_sum(operand.values)


def min(x: ArrayLike) -> float:
    values = _flatten(as_operand(x))
    if not values:
        raise EmptyInputError("cannot take the minimum of an empty input")
    if any(math.isnan(value) for value in values):
        return math.nan
    return builtins.min(values)


def sub(a: ArrayLike, b: ArrayLike) -> Union[List[float], List[List[float]]]:
    """Element-wise ``a - b``; a vector ``b`` is broadcast over every row of a matrix ``a``."""

    left = as_operand(a)
    right = as_operand(b)
    if not isinstance(right, Vector):
        raise DimensionMismatchError("only a vector can be subtracted")
    if isinstance(left, Matrix):
        return [_sub_row(row, right.values) for row in left.rows]
    return _sub_row(left.values, right.values)


def pow(x: ArrayLike, exponent: float) -> Union[List[float], List[List[float]]]:
    """Raise every element to ``exponent`` with IEEE semantics; never raises for domain errors."""

    operand = as_operand(x)
    p = to_real(exponent)
    if isinstance(operand, Matrix):
        return [[_power(value, p) for value in row] for row in operand.rows]
    return [_power(value, p) for value in operand.values]


def dot(a: ArrayLike, b: ArrayLike) -> float:
    left = as_vector(a)
    right = as_vector(b)
    _check_lengths(left.values, right.values)
    return builtins.sum((x * y for x, y in zip(left.values, right.values)), 0.0)


def dist(a: ArrayLike, b: ArrayLike) -> Union[float, List[float]]:
    """Euclidean distance to ``b``, or the distance of every row of a matrix ``a`` to ``b``."""

    left = as_operand(a)
    if not len(left):
        raise EmptyInputError("cannot measure distance from an empty input")
    right = as_operand(b)
    if not isinstance(right, Vector):
        raise DimensionMismatchError("distance reference must be a vector")
    if isinstance(left, Matrix):
        return [_euclidean(row, right.values) for row in left.rows]
    return _euclidean(left.values, right.values)


def dist_matrix(m: ArrayLike) -> DistanceMatrix:
    """All-pairs row distances as an n x n upper-triangular table.

    Entry ``[i][j]`` holds ``dist(m[i], m[j])`` for ``j > i``; the diagonal
    and everything below it is ``None``.
    """

    rows = as_matrix(m).rows
    n = len(rows)
    result: DistanceMatrix = [[None] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            result[i][j] = _euclidean(rows[i], rows[j])
    return result


def ess(m: ArrayLike) -> float:
    """Ward error sum of squares: ``sum((m - mean(m)) ** 2) / rows(m)``."""

    matrix = as_matrix(m)
    centred = sub(matrix, mean(matrix))
    return sum(pow(centred, 2)) / matrix.n_rows


def _row_sum(values: Iterable[float]) -> float:
    return builtins.sum(values, 0.0)


def _flatten(operand: Operand) -> List[float]:
    if isinstance(operand, Matrix):
        return [value for row in operand.rows for value in row]
    return list(operand.values)


def _check_lengths(left: Sequence[float], right: Sequence[float]) -> None:
    if len(left) != len(right):
        raise DimensionMismatchError(f"length {len(left)} does not match length {len(right)}")


def _sub_row(row: Sequence[float], other: Sequence[float]) -> List[float]:
    _check_lengths(row, other)
    return [x - y for x, y in zip(row, other)]


def _euclidean(row: Sequence[float], other: Sequence[float]) -> float:
    _check_lengths(row, other)
    total = 0.0
    for x, y in zip(row, other):
        diff = x - y
        total += diff * diff
    return math.sqrt(total)


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value.is_integer() and int(value) % 2 == 1


def _power(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except ValueError:
        # math.pow rejects 0 ** negative and negative ** fractional
        if base == 0.0:
            if math.copysign(1.0, base) < 0 and _is_odd_integer(exponent):
                return -math.inf
            return math.inf
        return math.nan
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
