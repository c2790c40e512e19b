import pytest

from evosim.utils import Vec2, clamp, wrap_coord


def test_normalize_zero_vector_is_zero():
    assert Vec2(0, 0).normalized() == Vec2(0, 0)


def test_normalize_and_limit():
    v = Vec2(3, 4)
    assert v.magnitude() == pytest.approx(5.0)
    n = v.normalized()
    assert (n.x, n.y) == pytest.approx((0.6, 0.8))
    assert v.limit(1.0).magnitude() == pytest.approx(1.0)
    assert v.limit(10.0) == v


def test_vector_arithmetic():
    a, b = Vec2(1, 2), Vec2(3, -1)
    assert a + b == Vec2(4, 1)
    assert a - b == Vec2(-2, 3)
    assert a * 2 == Vec2(2, 4)
    assert 2 * a == Vec2(2, 4)
    assert a.dot(b) == 1
    assert a.perpendicular() == Vec2(-2, 1)
    assert a.distance_sq_to(b) == 8


def test_wrap_coord_edges():
    assert wrap_coord(800.0, 800.0) == 0.0
    assert wrap_coord(-0.001, 800.0) == 800.0
    assert wrap_coord(400.0, 800.0) == 400.0


def test_clamp():
    assert clamp(5, 0, 1) == 1.0
    assert clamp(-5, 0, 1) == 0.0
