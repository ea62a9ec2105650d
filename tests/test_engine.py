import math

import pytest

from fractals.config import ConfigurationError, EngineSettings
from fractals.engine import ACTIONS, FractalEngine, apply_input, parse_actions, zoom_step


def test_facade_operations():
    engine = FractalEngine()
    assert engine.get_size() == (3.0, 3.0)
    assert engine.get_max_iterations() == 50

    engine.increment_iterations()
    assert engine.get_max_iterations() == 51
    engine.decrement_iterations()
    engine.decrement_iterations()
    assert engine.get_max_iterations() == 49

    engine.set_image_factor(2.0)
    frame = engine.generate_image()
    assert (frame.width, frame.height) == (6, 6)


def test_fit_to_window():
    engine = FractalEngine()
    engine.fit_to_window(900)
    assert engine.viewport.image_factor == 300.0


def test_set_size_for_pixels():
    engine = FractalEngine()
    engine.set_size_for_pixels((300, 150), 100.0)
    assert engine.get_size() == (3.0, 1.5)
    with pytest.raises(ConfigurationError):
        engine.set_size_for_pixels((0, 150), 100.0)


@pytest.mark.parametrize("factor", [0.0, -1.0])
def test_image_factor_must_be_positive(factor):
    engine = FractalEngine()
    with pytest.raises(ConfigurationError):
        engine.set_image_factor(factor)
    assert engine.viewport.image_factor == 1.0


def test_zoom_cannot_collapse_scale():
    engine = FractalEngine()
    with pytest.raises(ConfigurationError):
        engine.zoom(-1.0)
    engine.zoom(-0.5)
    assert engine.viewport.scale == (0.5, 0.5)


def test_settings_reach_the_pipeline():
    engine = FractalEngine(EngineSettings(backend="tensorflow", workers=2, continuous=True,
                                          max_iterations=0, fallback_color=(9, 9, 9, 255)))
    assert engine.pipeline.backend == "tensorflow"
    assert engine.pipeline.continuous
    assert engine.generate_image().pixels == bytes((9, 9, 9, 255)) * 9


def test_apply_input_pans_with_velocity():
    engine = FractalEngine()
    held = {"right", "up"}
    apply_input(engine, held, delta_time=0.5, rate=2.0)
    assert engine.viewport.offset == (1.0, -1.0)
    assert held == {"right", "up"}


def test_apply_input_zoom_directions():
    engine = FractalEngine()
    apply_input(engine, {"zoom_in"}, delta_time=0.25)
    assert engine.viewport.scale == pytest.approx((math.exp(-0.25),) * 2)
    apply_input(engine, {"zoom_out"}, delta_time=1.0)
    assert engine.viewport.scale == pytest.approx((math.exp(0.75),) * 2)


def test_zoom_step_matches_small_velocities():
    assert zoom_step(0.01) == pytest.approx(0.01, rel=1e-2)
    assert zoom_step(-0.01) == pytest.approx(-0.01, rel=1e-2)
    assert zoom_step(-1000.0) > -1.0


def test_long_frame_with_zoom_in_held_still_renders():
    engine = FractalEngine()
    held = {"right", "zoom_in", "more_iterations"}
    apply_input(engine, held, delta_time=1.5)
    scale = engine.viewport.scale
    assert 0 < scale[0] == pytest.approx(math.exp(-1.5))
    assert engine.viewport.offset[0] == pytest.approx(1.5 + 0.5 * 3.0 * (1 - math.exp(-1.5)))
    assert engine.get_max_iterations() == 51
    frame = engine.generate_image()
    assert (frame.width, frame.height) == (3, 3)


@pytest.mark.parametrize("held, delta_time", [
    ({"right", "zoom_in", "more_iterations", "jump"}, 0.5),
    ({"right", "zoom_out", "more_iterations"}, 1e6),
    ({"left", "zoom_in"}, math.inf),
])
def test_rejected_input_leaves_viewport_unchanged(held, delta_time):
    engine = FractalEngine()
    before = engine.viewport.snapshot()
    with pytest.raises(ConfigurationError):
        apply_input(engine, held, delta_time=delta_time)
    assert engine.viewport.snapshot() == before
    assert engine.get_max_iterations() == 50


def test_iteration_actions_fire_once():
    engine = FractalEngine()
    held = {"more_iterations", "left"}
    apply_input(engine, held, delta_time=0.1)
    apply_input(engine, held, delta_time=0.1)
    assert engine.get_max_iterations() == 51
    assert held == {"left"}

    held = {"fewer_iterations"}
    apply_input(engine, held, delta_time=0.1)
    assert engine.get_max_iterations() == 50
    assert held == set()


def test_apply_input_rejects_unknown_action():
    with pytest.raises(ConfigurationError):
        apply_input(FractalEngine(), {"jump"}, delta_time=0.1)


def test_parse_actions():
    assert parse_actions(["Zoom-In", "left,right", " "]) == {"zoom_in", "left", "right"}
    assert set(ACTIONS) == parse_actions(ACTIONS)
    with pytest.raises(ConfigurationError):
        parse_actions(["sideways"])
