from core.scoring import points
from settings import MIN_SCORE


def test_spawn_height_at_speed_two():
    # 8 * 1.1 * 1.4 = 12.32
    assert points(-10.0, 2) == 13


def test_top_of_field():
    assert points(0.0, 2) == 12


def test_floor_gives_minimum():
    assert points(100.0, 5) == MIN_SCORE


def test_never_below_minimum():
    for y in range(-10, 101):
        assert points(float(y), 1) >= MIN_SCORE


def test_non_increasing_in_height():
    values = [points(y / 2.0, 3) for y in range(-20, 201)]
    assert all(a >= b for a, b in zip(values, values[1:]))


def test_strictly_lower_further_down():
    assert points(0.0, 2) > points(50.0, 2) > points(90.0, 2)


def test_faster_speed_scores_at_least_as_much():
    for y in (-10.0, 0.0, 25.0, 60.0, 99.0):
        assert points(y, 5) >= points(y, 1)
