"""Exceptions raised by the vector and matrix operations."""
from __future__ import annotations


class InvalidInputError(ValueError):
    """Base class for every rejected operand."""


class EmptyInputError(InvalidInputError):
    """The operand holds no elements or rows."""


class DimensionMismatchError(InvalidInputError):
    """Operand lengths disagree and no broadcast rule applies."""


class InvalidShapeError(InvalidInputError):
    """The operand is ragged, nested too deep, or of a rank the operation rejects."""
