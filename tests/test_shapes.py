from __future__ import annotations

import math

import pytest

from vecmat.errors import InvalidInputError, InvalidShapeError
from vecmat.shapes import Matrix, Vector, as_matrix, as_operand, as_vector, to_real


def test_rank_is_resolved_from_the_first_element():
    assert isinstance(as_operand([1, 2]), Vector)
    assert isinstance(as_operand([[1, 2]]), Matrix)
    assert isinstance(as_operand(()), Vector)
    assert as_operand([[1, 2], (3, 4)]).rank == 2


def test_values_are_stored_as_floats():
    vector = as_operand([1, 2])
    assert vector.values == (1.0, 2.0)
    assert all(isinstance(value, float) for value in vector)


def test_matrix_shape_properties():
    matrix = as_matrix([[1, 2, 3], [4, 5, 6]])
    assert matrix.n_rows == 2
    assert matrix.n_columns == 3
    assert matrix.row(1) == Vector((4.0, 5.0, 6.0))
    assert [row.tolist() for row in matrix] == [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]


def test_empty_input_is_an_empty_matrix_when_a_matrix_is_expected():
    matrix = as_matrix([])
    assert matrix.n_rows == 0
    assert matrix.n_columns == 0


def test_tolist_returns_fresh_lists():
    matrix = as_matrix([[1, 2]])
    rows = matrix.tolist()
    rows[0][0] = 9.0
    assert matrix.tolist() == [[1.0, 2.0]]


def test_ragged_rows_are_rejected():
    with pytest.raises(InvalidShapeError):
        as_operand([[1, 2], [3]])
    with pytest.raises(InvalidShapeError):
        Matrix(((1.0,), (2.0, 3.0)))


def test_mixed_and_deep_nesting_are_rejected():
    with pytest.raises(InvalidShapeError):
        as_operand([[1], 2])
    with pytest.raises(InvalidShapeError):
        as_operand([1, [2]])
    with pytest.raises(InvalidShapeError):
        as_operand([[[1]]])


@pytest.mark.parametrize("value", ["a", None, True, 1 + 2j])
def test_non_real_elements_are_rejected(value):
    with pytest.raises(InvalidInputError):
        as_operand([1.0, value])


def test_scalars_and_strings_are_not_operands():
    with pytest.raises(InvalidInputError):
        as_operand(3.0)
    with pytest.raises(InvalidInputError):
        as_operand("12")


def test_rank_specific_coercions():
    with pytest.raises(InvalidShapeError):
        as_vector([[1, 2]])
    with pytest.raises(InvalidShapeError):
        as_matrix([1, 2])
    assert to_real(3) == 3.0


def test_value_types_check_their_elements():
    with pytest.raises(InvalidInputError):
        Matrix((("x",),))
    with pytest.raises(InvalidInputError):
        Vector(("1", 2.0))
    with pytest.raises(InvalidShapeError):
        Matrix((1.0, 2.0))
    with pytest.raises(InvalidShapeError):
        Vector(((1.0,),))


def test_value_types_coerce_to_floats():
    assert Vector((1, 2)).values == (1.0, 2.0)
    matrix = Matrix(([1, 2], (3, 4)))
    assert matrix.rows == ((1.0, 2.0), (3.0, 4.0))
    assert all(isinstance(value, float) for row in matrix.rows for value in row)


def test_integers_beyond_double_range_become_infinite():
    assert to_real(10 ** 400) == math.inf
    assert to_real(-(10 ** 400)) == -math.inf
