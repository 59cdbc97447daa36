"""Tests for the configuration bundle and option setters."""

from __future__ import annotations

import dataclasses
import math

import pytest

from sirds.color import Color
from sirds.config import (
    StereogramConfig,
    build_config,
    with_color_palette,
    with_depth_of_field,
    with_eye_separation_ratio,
    with_mask_transparent_color,
    with_output_dpi,
    with_seed,
    with_workers,
)
from sirds.errors import ConfigError


class TestDefaults:
    def test_documented_defaults(self):
        cfg = StereogramConfig()
        assert cfg.mu == pytest.approx(1 / 3)
        assert cfg.dpi == 72
        assert cfg.e_ratio == 2.5
        assert cfg.palette == ()
        assert cfg.mask_transparent_color is None
        assert cfg.seed is None

    def test_eye_separation(self):
        assert StereogramConfig().eye_separation == 180
        assert StereogramConfig(dpi=300, e_ratio=2.51).eye_separation == math.ceil(2.51 * 300)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            StereogramConfig().dpi = 10

    def test_color_likes_are_normalized(self):
        cfg = StereogramConfig(palette=["#FF0000", (0, 0, 255)], mask_transparent_color="#ffffff")
        assert cfg.palette == (Color(255, 0, 0), Color(0, 0, 255))
        assert cfg.mask_transparent_color == Color(255, 255, 255, 255)


class TestOptions:
    def test_each_setter(self):
        cfg = StereogramConfig().apply(
            with_mask_transparent_color("#00718d"),
            with_color_palette("#000000", "#cfcfcf"),
            with_output_dpi(196),
            with_eye_separation_ratio(2.0),
            with_depth_of_field(0.25),
            with_seed(9),
            with_workers(2),
        )
        assert cfg.mask_transparent_color == Color(0x00, 0x71, 0x8D)
        assert cfg.palette == (Color(0, 0, 0), Color(0xCF, 0xCF, 0xCF))
        assert (cfg.dpi, cfg.e_ratio, cfg.mu, cfg.seed, cfg.workers) == (196, 2.0, 0.25, 9, 2)

    def test_order_insensitive(self):
        opts = [with_output_dpi(100), with_color_palette("#123456"), with_depth_of_field(0.5)]
        assert StereogramConfig().apply(*opts) == StereogramConfig().apply(*reversed(opts))

    def test_apply_leaves_original_untouched(self):
        base = StereogramConfig()
        base.apply(with_output_dpi(10))
        assert base.dpi == 72

    def test_build_config_overrides_win(self):
        cfg = build_config([with_output_dpi(100)], dpi=50)
        assert cfg.dpi == 50

    def test_empty_palette_setter(self):
        cfg = StereogramConfig(palette=["#FF0000"]).apply(with_color_palette())
        assert cfg.palette == ()


class TestValidation:
    def test_defaults_are_valid(self):
        assert StereogramConfig().validate() == StereogramConfig()

    @pytest.mark.parametrize("dpi", [0, -72, 72.5, True])
    def test_rejects_bad_dpi(self, dpi):
        with pytest.raises(ConfigError):
            StereogramConfig(dpi=dpi).validate()

    @pytest.mark.parametrize("ratio", [0, -1.0, float("inf"), float("nan")])
    def test_rejects_bad_eye_ratio(self, ratio):
        with pytest.raises(ConfigError):
            StereogramConfig(e_ratio=ratio).validate()

    @pytest.mark.parametrize("mu", [0, 1, 1.5, -0.1, float("nan")])
    def test_rejects_bad_mu(self, mu):
        with pytest.raises(ConfigError):
            StereogramConfig(mu=mu).validate()

    def test_rejects_bad_workers(self):
        with pytest.raises(ConfigError):
            StereogramConfig(workers=0).validate()

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            StereogramConfig(dpi=0).validate()
