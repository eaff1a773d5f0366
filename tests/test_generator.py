"""Tests for random map generation and presets."""

from __future__ import annotations

import random

import numpy as np
import pytest

from fourcolor.diagnostics import validate_coloring, validate_region_map
from fourcolor.generator import (
    POSTER_MAP,
    SMALL_MAP,
    TERMINAL_MAP,
    MapConfig,
    generate_colored_map,
    generate_map,
    random_pivots,
)


class TestRandomPivots:
    def test_in_bounds(self) -> None:
        pivots = random_pivots(30, 10, 25, random.Random(7))
        assert all(0 <= x < 30 and 0 <= y < 10 for x, y in pivots)

    def test_duplicates_dropped(self) -> None:
        pivots = random_pivots(2, 2, 50, random.Random(7))
        assert len(pivots) == len(set(pivots)) <= 4

    def test_deterministic_with_seeded_rng(self) -> None:
        assert random_pivots(50, 50, 10, random.Random(3)) == random_pivots(
            50, 50, 10, random.Random(3)
        )

    @pytest.mark.parametrize("width, height, count", [(0, 5, 3), (5, 0, 3), (5, 5, 0)])
    def test_invalid(self, width, height, count) -> None:
        with pytest.raises(ValueError):
            random_pivots(width, height, count)


class TestMapConfig:
    def test_defaults_match_terminal(self) -> None:
        assert MapConfig() == TERMINAL_MAP

    def test_with_seed(self) -> None:
        cfg = SMALL_MAP.with_seed(11)
        assert cfg.seed == 11
        assert SMALL_MAP.seed is None
        assert cfg.width == SMALL_MAP.width

    @pytest.mark.parametrize(
        "kwargs",
        [{"width": 0}, {"height": -2}, {"n_regions": 0}, {"boundary_mode": "exact"}],
    )
    def test_validate(self, kwargs) -> None:
        with pytest.raises(ValueError):
            MapConfig(**kwargs).validate()


class TestGenerate:
    def test_same_seed_same_map(self) -> None:
        cfg = MapConfig(width=30, height=12, n_regions=6, seed=5)
        a = generate_map(cfg)
        b = generate_map(cfg)
        assert np.array_equal(a.raster, b.raster)

    def test_region_count_bounded(self) -> None:
        rm = generate_map(MapConfig(width=30, height=12, n_regions=6, seed=5))
        assert 1 <= len(rm) <= 6

    @pytest.mark.parametrize("preset", [TERMINAL_MAP, SMALL_MAP])
    def test_presets_generate_valid_colored_maps(self, preset) -> None:
        rm, coloring = generate_colored_map(preset.with_seed(42))
        assert validate_region_map(rm).ok
        assert coloring is not None
        assert validate_coloring(rm, coloring).ok

    def test_poster_preset_uses_midpoints(self) -> None:
        rm = generate_map(POSTER_MAP.with_seed(1))
        assert rm.boundary_mode == "midpoint"
        assert (rm.width, rm.height) == (320, 200)

    def test_packed_config(self) -> None:
        cfg = MapConfig(width=25, height=10, n_regions=7, seed=8)
        _, plain = generate_colored_map(cfg)
        _, packed = generate_colored_map(MapConfig(width=25, height=10, n_regions=7, seed=8, packed=True))
        assert plain == packed
