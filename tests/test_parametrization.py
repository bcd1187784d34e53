import pytest

from minpress.errors import ArithmeticOverflow, NoSolution, UnsupportedStructure
from minpress.matrix import Matrix, build_matrix, eliminate
from minpress.parametrization import (
    Parametrization,
    ScaledExpression,
    build_parametrization,
    find_free_columns,
    upper_bounds,
)
from minpress.rational import INT64_MAX, ONE, Rational
from minpress.search import BoundedSearch


def _parametrize(targets, masks, **kwargs):
    matrix = build_matrix(targets, masks)
    pivots = eliminate(matrix)
    return build_parametrization(matrix, pivots, targets, masks, **kwargs)


def test_free_columns_are_the_non_pivot_columns():
    assert find_free_columns([0, 2, None], 4) == [1, 3]


def test_upper_bound_is_smallest_touched_target():
    assert upper_bounds([5, 2, 9], [{0, 2}, {0, 1}, set()], [0, 1, 2]) == [5, 2, 16]


def test_parametrization_of_small_machine():
    parametrization = _parametrize([2, 3], [{0}, {1}, {0, 1}])

    assert parametrization.free_columns == (2,)
    assert parametrization.bounds == (2,)
    assert parametrization.expressions == (
        ScaledExpression(column=0, scale=1, base=2, coefficients=(-1,)),
        ScaledExpression(column=1, scale=1, base=3, coefficients=(-1,)),
    )


def test_scaled_expression_uses_common_denominator():
    # Pivots solve to (1 - x3)/2, (1 + x3)/2 and (1 - x3)/2.
    parametrization = _parametrize([1, 1, 1], [{0, 1}, {1, 2}, {0, 2}, {0}])

    assert parametrization.free_columns == (3,)
    for expr in parametrization.expressions:
        assert expr.scale == 2
    values = {expr.column: expr.numerator([1]) for expr in parametrization.expressions}
    assert values == {0: 0, 1: 2, 2: 0}


def test_too_many_free_variables_is_rejected():
    masks = [{0}, {1}, {2}, {0, 1}, {0, 2}, {1, 2}, {0, 1, 2}]

    with pytest.raises(UnsupportedStructure):
        _parametrize([1, 1, 1], masks)

    parametrization = _parametrize([1, 1, 1], masks, max_free_variables=4)
    assert parametrization.dimension == 4


def test_search_finds_minimum_and_assignment():
    result = BoundedSearch(_parametrize([2, 3], [{0}, {1}, {0, 1}])).run()

    assert result.total == 3
    assert result.free_values == {2: 2}
    assert result.pivot_values == {0: 0, 1: 1}
    assert result.column_values == {0: 0, 1: 1, 2: 2}
    assert result.statistics["leavesVisited"] >= 1


def test_search_without_free_variables_evaluates_single_point():
    result = BoundedSearch(_parametrize([4], [{0}])).run()

    assert result.total == 4
    assert result.free_values == {}


def test_search_rejects_fractional_point():
    with pytest.raises(NoSolution):
        BoundedSearch(_parametrize([1, 1, 1], [{0, 1}, {1, 2}, {0, 2}])).run()


def test_search_rejects_negative_pivots():
    # x0 + x1 = 1 and x1 = 3 forces x0 = -2.
    with pytest.raises(NoSolution):
        BoundedSearch(_parametrize([1, 3], [{0}, {0, 1}])).run()


def test_search_prunes_branches_that_cannot_beat_best():
    # Pivot = 1 - x: x = 0 gives total 1, after which every x >= 1 starts at the best total.
    parametrization = Parametrization(
        free_columns=(1,),
        bounds=(3,),
        expressions=(ScaledExpression(column=0, scale=1, base=1, coefficients=(-1,)),),
    )

    result = BoundedSearch(parametrization).run()

    assert result.total == 1
    assert result.free_values == {1: 0}
    assert result.statistics["branchesPruned"] == 3


def test_search_prunes_branches_with_negative_pivots():
    # Pivot = x - 1: x = 0 leaves the pivot at -1 and is cut before reaching a leaf.
    parametrization = Parametrization(
        free_columns=(1,),
        bounds=(3,),
        expressions=(ScaledExpression(column=0, scale=1, base=-1, coefficients=(1,)),),
    )

    result = BoundedSearch(parametrization).run()

    assert result.total == 1
    assert result.free_values == {1: 1}
    assert result.pivot_values == {0: 0}
    assert result.statistics["leavesVisited"] == 1
    assert result.statistics["branchesPruned"] == 3


def test_scaled_expression_outside_64_bit_range_overflows():
    # Scaling INT64_MAX/2 and 1/3 to the common denominator 6 exceeds 64 bits.
    matrix = Matrix(rows=[[ONE, Rational(1, 3)]], rhs=[Rational(INT64_MAX, 2)])

    with pytest.raises(ArithmeticOverflow):
        build_parametrization(matrix, [0], [1], [{0}, {0}])
