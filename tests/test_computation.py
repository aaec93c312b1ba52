"""Escape-time evaluator, hue gradient and per-pixel colour."""

import numpy as np
import pytest
from mandelbmp.computation import (
    MAX_ITER,
    escape_time,
    gradient_hue,
    ground_color_mix,
    pixel_color,
)
from mandelbmp.config import default_render_config


class TestEscapeTime:
    def test_origin_never_escapes(self):
        assert escape_time(0.0, 0.0) == MAX_ITER

    def test_far_point_escapes_after_one_iteration(self):
        # z1 = 2 + 2i, |z1|^2 = 8
        assert escape_time(2.0, 2.0) == 1

    def test_hand_computed_escape(self):
        # z1 = 1, z2 = 2, z3 = 5
        assert escape_time(1.0, 0.0) == 3

    @pytest.mark.parametrize("x, y", [(-1.0, 0.0), (0.25, 0.0), (-0.1, 0.1)])
    def test_points_in_set(self, x, y):
        assert escape_time(x, y) == MAX_ITER

    def test_magnitude_of_exactly_two_does_not_escape(self):
        # -2 -> 2 -> 2 -> ... keeps |z|^2 == 4
        assert escape_time(-2.0, 0.0) == MAX_ITER

    def test_custom_cap(self):
        assert escape_time(0.0, 0.0, 5) == 5
        assert escape_time(2.0, 2.0, 0) == 0

    def test_stays_within_cap(self):
        xs = np.linspace(-2.5, 1.5, 41)
        ys = np.linspace(-1.5, 1.5, 31)
        for x in xs:
            for y in ys:
                count = escape_time(float(x), float(y), 50)
                assert 0 <= count <= 50


class TestGroundColorMix:
    def test_red_at_zero_hue(self):
        assert ground_color_mix(0.0, 1.0, 255.0) == pytest.approx((255.0, 1.0, 1.0))

    def test_hue_180_follows_sector_formula(self):
        # Fourth sector: green = -(max - min) / 60 * x + 4 * max + min
        assert ground_color_mix(180.0, 1.0, 255.0) == pytest.approx((1.0, 259.0, 255.0))

    @pytest.mark.parametrize(
        "hue, expected",
        [
            (30.0, (255.0, 127.5, 0.0)),
            (90.0, (127.5, 255.0, 0.0)),
            (150.0, (0.0, 255.0, 127.5)),
            (210.0, (0.0, 127.5, 255.0)),
            (270.0, (127.5, 0.0, 255.0)),
            (330.0, (255.0, 0.0, 127.5)),
        ],
    )
    def test_sector_midpoints(self, hue, expected):
        assert ground_color_mix(hue, 0.0, 255.0) == pytest.approx(expected)

    @pytest.mark.parametrize("boundary", [60.0, 120.0, 180.0, 240.0, 300.0])
    def test_continuous_at_boundaries_with_zero_floor(self, boundary):
        before = ground_color_mix(boundary - 1e-9, 0.0, 255.0)
        after = ground_color_mix(boundary, 0.0, 255.0)
        assert after == pytest.approx(before, abs=1e-6)

    @pytest.mark.parametrize("boundary", [60.0, 120.0, 180.0, 240.0, 300.0])
    def test_bounded_jump_at_boundaries_with_floor(self, boundary):
        before = ground_color_mix(boundary - 1e-9, 1.0, 255.0)
        after = ground_color_mix(boundary, 1.0, 255.0)
        assert max(abs(a - b) for a, b in zip(before, after)) <= 6.0

    def test_last_sector_has_no_floor_term(self):
        red, green, blue = ground_color_mix(330.0, 1.0, 255.0)
        assert (red, green) == (255.0, 1.0)
        assert blue == pytest.approx(-254.0 / 60.0 * 330.0 + 6.0 * 255.0)
        assert blue == pytest.approx(133.0)

    def test_out_of_range_hues_use_outer_sectors(self):
        assert ground_color_mix(-30.0, 0.0, 255.0) == pytest.approx((255.0, -127.5, 0.0))
        assert ground_color_mix(400.0, 0.0, 255.0) == pytest.approx((255.0, 0.0, -170.0))


class TestGradientHue:
    @pytest.mark.parametrize(
        "iteration, expected",
        [(0, 240.0), (500, 125.0), (1000, 10.0)],
    )
    def test_hue_range(self, iteration, expected):
        assert gradient_hue(iteration, 1000, 240.0, 230.0) == pytest.approx(expected)

    def test_single_precision_ratio(self):
        ratio = float(np.float32(42) / np.float32(1000))
        assert gradient_hue(42, 1000, 240.0, 230.0) == 240.0 - ratio * 230.0


class TestPixelColor:
    config = default_render_config()

    def test_centre_pixel(self):
        col, row = self.config.center_pixel
        assert self.config.plane_coordinate(col, row) == (self.config.x_center, self.config.y_center)
        # The view centre sits just outside the set.
        assert pixel_color(self.config, col, row) == (42, (1, 45, 255))

    def test_corner_pixels(self):
        assert pixel_color(self.config, 0, 0) == (7, (1, 11, 255))
        assert pixel_color(self.config, 1919, 1079) == (MAX_ITER, (255, 43, 1))

    def test_channels_are_clipped(self):
        # Hue 180.2 gives a green of about 258 before clipping.
        config = default_render_config(colour_max=180.2, gradient_colour_max=0.0)
        _, rgb = pixel_color(config, 0, 0)
        assert rgb == (1, 255, 255)
