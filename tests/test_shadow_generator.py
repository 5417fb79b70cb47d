from concurrent.futures import ThreadPoolExecutor
import math

import pytest

from shadows.errors import OutOfRangeElevationError, ShadowConfigError
from shadows.generator import (
    ShadowLayerGenerator,
    cache_info,
    generate,
    layer_count,
    max_elevation,
    round_half_away,
    single_layer,
)


def _triples(layers):
    return [(layer.y_offset, layer.blur) for layer in layers]


def test_elevation_four_layers():
    result = generate(4)
    assert layer_count(4) == 3
    assert _triples(result.base) == [(1, 1), (2, 4), (4, 6)]
    assert result.base[0].alpha == pytest.approx(0.14)
    assert result.base[1].alpha == pytest.approx(0.095)
    assert result.base[2].alpha == pytest.approx(0.05)


def test_high_layer_count_collapses_emphasized_stack():
    result = generate(4)
    assert _triples(result.emphasized) == [(2, 5), (5, 8)]
    assert [layer.alpha for layer in result.emphasized] == [0.16, 0.08]


def test_two_layer_emphasized_scales_base_layers():
    result = generate(2)
    assert _triples(result.base) == [(0, 1), (2, 3)]
    # factors 1.2 and 1.3 applied to offset and blur, alpha kept
    assert _triples(result.emphasized) == [(0, 1), (3, 4)]
    assert [l.alpha for l in result.emphasized] == [l.alpha for l in result.base]


# Design elevation scale; guards the layer formulas against unintended edits.
DESIGN_SCALE_LAYERS = {
    1: ([(0, 0), (1, 2)], [(0, 0), (1, 3)]),
    6: ([(1, 2), (3, 4), (4, 7), (6, 9)], [(4, 8), (7, 12)]),
    12: (
        [(2, 4), (4, 6), (6, 9), (8, 12), (10, 15), (12, 18)],
        [(7, 16), (14, 24)],
    ),
    24: (
        [(4, 7), (8, 13), (12, 19), (16, 24), (20, 30), (24, 36)],
        [(14, 31), (29, 48)],
    ),
}


@pytest.mark.parametrize("elevation", sorted(DESIGN_SCALE_LAYERS))
def test_design_scale_layers(elevation):
    base, emphasized = DESIGN_SCALE_LAYERS[elevation]
    result = generate(elevation)
    assert _triples(result.base) == base
    assert _triples(result.emphasized) == emphasized


def test_design_scale_alphas():
    assert [l.alpha for l in generate(6).base] == pytest.approx([0.14, 0.11, 0.08, 0.05])
    assert [l.alpha for l in generate(12).base] == pytest.approx(
        [0.14, 0.122, 0.104, 0.086, 0.068, 0.05]
    )
    assert [l.alpha for l in generate(1).emphasized] == pytest.approx([0.14, 0.05])
    assert [l.alpha for l in generate(24).emphasized] == [0.16, 0.08]


def test_blur_multiplier_only_affects_blur():
    plain = generate(6)
    wide = generate(6, 2)
    assert [l.y_offset for l in plain.base] == [l.y_offset for l in wide.base]
    assert all(w.blur >= p.blur for p, w in zip(plain.base, wide.base))


@pytest.mark.parametrize("blur", [0.5, 1, 1.2, 3])
def test_zero_elevation_is_no_shadow(blur):
    result = generate(0, blur)
    assert result.base == ()
    assert result.emphasized == ()


def test_layer_count_monotonic_and_bounded():
    elevations = [k * 0.5 for k in range(1, 80)]
    counts = [layer_count(e) for e in elevations]
    assert counts == sorted(counts)
    assert min(counts) == 2 and max(counts) == 6
    assert layer_count(12) == 6
    assert layer_count(100) == 6


def test_layers_ordered_tightest_first():
    base = generate(16).base
    assert len(base) == 6
    assert [l.y_offset for l in base] == sorted(l.y_offset for l in base)
    assert [l.alpha for l in base] == sorted((l.alpha for l in base), reverse=True)


def test_generate_is_deterministic_and_cached():
    first = generate(8, 1.2)
    second = generate(8, 1.2)
    assert first is second
    info = cache_info()
    assert (info.hits, info.misses, info.size) == (1, 1, 1)


def test_cache_transparency():
    cached = generate(10, 1.5)
    fresh = ShadowLayerGenerator().generate(10, 1.5)
    assert fresh == cached
    assert fresh is not cached


def test_generator_clear_resets_counters():
    gen = ShadowLayerGenerator()
    gen.generate(3)
    gen.generate(3)
    gen.clear()
    info = gen.cache_info()
    assert (info.hits, info.misses, info.size) == (0, 0, 0)


@pytest.mark.parametrize("bad", [-1, -0.01, math.nan, math.inf])
def test_out_of_range_elevation_rejected(bad):
    with pytest.raises(OutOfRangeElevationError):
        generate(bad)


@pytest.mark.parametrize("blur", [0, -1])
def test_non_positive_blur_rejected(blur):
    with pytest.raises(ShadowConfigError):
        generate(4, blur)


def test_round_half_away_from_zero():
    assert round_half_away(2.5) == 3
    assert round_half_away(0.5) == 1
    assert round_half_away(-2.5) == -3
    assert round_half_away(0.4) == 0
    assert round_half_away(-0.4) == 0


def test_single_layer_variant():
    layer = single_layer(10)
    assert (layer.y_offset, layer.blur, layer.spread) == (5, 15, -1)
    assert layer.alpha == pytest.approx(0.12)
    halves = single_layer(5)
    assert (halves.y_offset, halves.blur, halves.spread) == (3, 8, -1)
    assert single_layer(0) is None


def test_concurrent_misses_store_single_entry():
    gen = ShadowLayerGenerator()
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: gen.generate(7, 1.5), range(8)))
    assert all(r == results[0] for r in results)
    info = gen.cache_info()
    assert (info.misses, info.size) == (1, 1)
    assert info.hits == 7


@pytest.mark.parametrize("blur", [math.inf, math.nan, "2", True])
def test_non_finite_or_non_numeric_blur_rejected(blur):
    with pytest.raises(ShadowConfigError):
        ShadowLayerGenerator().generate(4, blur)


@pytest.mark.parametrize("elevation,blur", [(1e308, 1), (1e300, 1e10), (10**400, 1)])
def test_overflowing_elevation_rejected(elevation, blur):
    gen = ShadowLayerGenerator()
    with pytest.raises(OutOfRangeElevationError):
        gen.generate(elevation, blur)
    assert gen.cache_info().size == 0


def test_max_elevation_still_generates():
    top = max_elevation()
    assert len(generate(top).base) == 6
    with pytest.raises(OutOfRangeElevationError) as excinfo:
        single_layer(1e308)
    assert excinfo.value.context["max_elevation"] == top
