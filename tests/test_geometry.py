import math

import pytest

from dungeonai.geometry import Position, dist, dist_sq, sqr


def test_sqr_of_integer():
    assert sqr(3) == 9


def test_sqr_matches_multiplication_for_floats():
    assert sqr(-2.5) == -2.5 * -2.5


def test_dist_of_three_four_triangle():
    assert dist(Position(0, 0), Position(3, 4)) == pytest.approx(5.0)


@pytest.mark.parametrize(
    "a, b",
    [(Position(1, 2), Position(4, -2)), (Position(-3, 7), Position(0, 0)), (Position(5, 5), Position(5, 5))],
)
def test_dist_sq_is_square_of_dist_and_symmetric(a, b):
    assert dist_sq(a, b) == pytest.approx(dist(a, b) ** 2)
    assert dist(a, b) == dist(b, a)
    assert isinstance(dist_sq(a, b), float) and dist_sq(a, b) >= 0.0


def test_dist_to_self_is_zero():
    p = Position(-4, 9)
    assert dist(p, p) == 0.0


def test_default_position_is_origin():
    assert Position() == Position(0, 0)


def test_subtraction_and_addition_round_trip():
    a = Position(7, -3)
    b = Position(-2, 5)
    assert (a - b) + b == a


def test_subtraction_components():
    delta = Position(7, -3) - Position(2, 5)
    assert (delta.x, delta.y) == (7 - 2, -3 - 5)


def test_equal_positions_hash_equal():
    assert hash(Position(3, 4)) == hash(Position(3, 4))
    assert len({Position(1, 1), Position(1, 1), Position(1, 2)}) == 2


def test_ordering_is_x_then_y():
    a, b, c = Position(0, 5), Position(1, -1), Position(1, 3)
    assert sorted([c, a, b]) == [a, b, c]
    assert a < b < c


def test_position_is_immutable():
    p = Position(1, 2)
    with pytest.raises(AttributeError):
        p.x = 5  # type: ignore[misc]
    assert (p.x, p.y) == (1, 2)
    assert p == Position(1, 2)


def test_not_equal_to_unrelated_object():
    assert (Position(1, 2) == (1, 2)) is False


def test_dist_accepts_any_xy_object():
    class Point:
        def __init__(self, x, y):
            self.x = x
            self.y = y

    assert dist(Point(1, 1), Position(1, 1)) == 0.0
    assert dist(Point(0, 0), Position(2, 0)) == pytest.approx(math.sqrt(dist_sq(Point(0, 0), Position(2, 0))))