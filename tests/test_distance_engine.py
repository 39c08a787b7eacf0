import pytest

from arcball.controller.distance_engine import DEFAULT_DISTANCE_STEP, DistanceEngine


def test_scroll_moves_target_against_direction():
    engine = DistanceEngine(5.0)
    assert engine.scroll(3.0)
    assert engine.target == pytest.approx(5.0 - DEFAULT_DISTANCE_STEP)
    assert engine.scroll(-0.1)
    assert engine.target == pytest.approx(5.0)


def test_zero_scroll_is_ignored():
    engine = DistanceEngine(5.0)
    assert engine.scroll(0) is False
    assert engine.target == 5.0


def test_scroll_clamps_into_range():
    engine = DistanceEngine(5.0, step=0.5, minimum=4.0, maximum=6.0)
    for _ in range(20):
        engine.scroll(1)
        assert 4.0 <= engine.target <= 6.0
    assert engine.target == 4.0

    for _ in range(20):
        engine.scroll(-1)
        assert 4.0 <= engine.target <= 6.0
    assert engine.target == 6.0


def test_step_approaches_without_overshoot():
    engine = DistanceEngine(5.0)
    engine.target = 4.0
    previous = engine.distance
    for _ in range(200):
        distance = engine.step(0.175)
        assert distance <= previous
        assert distance >= 4.0
        previous = distance
    assert engine.distance == pytest.approx(4.0)


def test_zoom_flag_is_true_when_distance_unchanged():
    engine = DistanceEngine(5.0)
    engine.step(0.175)
    assert engine.zoom is True

    engine.scroll(1)
    engine.step(0.175)
    assert engine.zoom is False
