"""Vector and matrix value types and the coercion used at the API boundary."""
from __future__ import annotations

import collections.abc
import math
import numbers
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple, Union

from .errors import InvalidInputError, InvalidShapeError


@dataclass(frozen=True)
class Vector:
    """Ordered, fixed-length sequence of floats; elements are checked and coerced on construction."""

    values: Tuple[float, ...]

    rank = 1

    def __post_init__(self) -> None:
        if not _is_sequence(self.values):
            raise InvalidInputError(f"expected a sequence of numbers, got {type(self.values).__name__}")
        elements: List[float] = []
        for value in self.values:
            if _is_sequence(value):
                raise InvalidShapeError("expected a number, got a nested sequence")
            elements.append(to_real(value))
        object.__setattr__(self, "values", tuple(elements))

    @classmethod
    def from_sequence(cls, values: Sequence[object]) -> "Vector":
        return cls(tuple(values))  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    def __getitem__(self, index: int) -> float:
        return self.values[index]

    def tolist(self) -> List[float]:
        return list(self.values)


@dataclass(frozen=True)
class Matrix:
    """Rows of equal length; elements and rectangularity are checked on construction."""

    rows: Tuple[Tuple[float, ...], ...]

    rank = 2

    def __post_init__(self) -> None:
        if not _is_sequence(self.rows):
            raise InvalidInputError(f"expected a sequence of rows, got {type(self.rows).__name__}")
        converted: List[Tuple[float, ...]] = []
        for idx, row in enumerate(self.rows):
            if not _is_sequence(row):
                raise InvalidShapeError(f"element {idx} is not a row; matrices cannot mix rows and numbers")
            converted.append(Vector(tuple(row)).values)
        if converted:
            width = len(converted[0])
            for idx, row in enumerate(converted):
                if len(row) != width:
                    raise InvalidShapeError(f"row {idx} has length {len(row)}, expected {width}")
        object.__setattr__(self, "rows", tuple(converted))

    @classmethod
    def from_rows(cls, rows: Sequence[object]) -> "Matrix":
        return cls(tuple(rows))  # type: ignore[arg-type]

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def n_columns(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Vector]:
        return (Vector(row) for row in self.rows)

    def row(self, index: int) -> Vector:
        return Vector(self.rows[index])

    def tolist(self) -> List[List[float]]:
        return [list(row) for row in self.rows]


Operand = Union[Vector, Matrix]


def to_real(value: object) -> float:
    # bool is a numbers.Real subclass but never a meaningful coordinate
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInputError(f"expected a real number, got {type(value).__name__}")
    try:
        return float(value)
    except OverflowError:
        # integers beyond the double range round to a signed infinity
        return math.inf if value > 0 else -math.inf  # type: ignore[operator]


def as_operand(value: object) -> Operand:
    """Resolve ``value`` to a :class:`Vector` or :class:`Matrix`.

    A sequence whose first element is itself a sequence is a matrix, anything
    else is a vector. An empty sequence carries no rank information and is
    treated as an empty vector.
    """

    if isinstance(value, (Vector, Matrix)):
        return value
    if not _is_sequence(value):
        raise InvalidInputError(f"expected a vector or matrix, got {type(value).__name__}")
    if len(value) and _is_sequence(value[0]):  # type: ignore[arg-type,index]
        return Matrix.from_rows(value)  # type: ignore[arg-type]
    return Vector.from_sequence(value)  # type: ignore[arg-type]


def as_vector(value: object) -> Vector:
    operand = as_operand(value)
    if isinstance(operand, Matrix):
        raise InvalidShapeError("expected a vector, got a matrix")
    return operand


def as_matrix(value: object) -> Matrix:
    operand = as_operand(value)
    if isinstance(operand, Vector):
        if len(operand):
            raise InvalidShapeError("expected a matrix, got a vector")
        return Matrix(())
    return operand


def _is_sequence(value: object) -> bool:
    if isinstance(value, (Vector, Matrix)):
        return True
    return isinstance(value, collections.abc.Sequence) and not isinstance(value, (str, bytes, bytearray))
