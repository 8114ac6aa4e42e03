import math

import pytest

from datastructures import Vec2


def test_arithmetic():
    a = Vec2(1.0, 2.0)
    b = Vec2(3.0, -1.0)

    assert a + b == Vec2(4.0, 1.0)
    assert a - b == Vec2(-2.0, 3.0)
    assert a * 2 == Vec2(2.0, 4.0)
    assert 2 * a == Vec2(2.0, 4.0)
    assert a.dot(b) == pytest.approx(1.0)


def test_magnitude():
    assert Vec2(3.0, 4.0).magnitude() == pytest.approx(5.0)
    assert Vec2().magnitude() == 0.0
    assert Vec2(1.0, 1.0).magnitude() == pytest.approx(math.sqrt(2.0))


def test_immutable_and_iterable():
    v = Vec2(1.5, -2.5)
    with pytest.raises(AttributeError):
        v.x = 0.0
    x, y = v
    assert (x, y) == (1.5, -2.5)
