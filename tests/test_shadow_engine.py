import logging

import pytest

from shadows import settings
from shadows.config import EffectiveConfig, StateParameters
from shadows.engine import ShadowRequest, ShadowResolutionEngine, resolve_shadow
from shadows.generator import generate, single_layer
from shadows.layers import ShadowLayer, WHITE
from shadows.motion import TransitionSpec, temporarily_reduced_motion
from shadows.presets import BUILTIN_PRESETS, PresetRegistry
from shadows.state import InteractionFlags
from shadows.tables import color_layers, inner_layer, size_layers


@pytest.fixture
def engine():
    return ShadowResolutionEngine(presets=PresetRegistry(BUILTIN_PRESETS))


def test_elevation_beats_color_and_size(engine):
    resolved = engine.resolve(
        ShadowRequest(state="default", defaults={"elevation": 4, "color": "purple", "size": "lg"})
    )
    assert resolved.descriptor.base_layers == generate(4).base
    assert resolved.descriptor.emphasized_layers == generate(4).emphasized
    assert resolved.descriptor.base_layers != color_layers("purple")


def test_color_beats_size(engine):
    resolved = engine.resolve(ShadowRequest(state="default", defaults={"color": "blue", "size": "lg"}))
    assert resolved.descriptor.base_layers == color_layers("blue")


def test_size_table_is_last_resort(engine):
    resolved = engine.resolve(ShadowRequest(state="default"))
    base, emphasized = size_layers("md")
    assert resolved.descriptor.base_layers == base
    assert resolved.descriptor.emphasized_layers == emphasized


def test_merge_precedence_inline_over_preset_over_flat(engine):
    flat = {"elevation": 1}
    inline = engine.resolve(
        ShadowRequest(state="hover", config="card", states={"hover": {"elevation": 7}}, defaults=flat)
    )
    preset = engine.resolve(ShadowRequest(state="hover", config="card", defaults=flat))
    bare = engine.resolve(ShadowRequest(state="hover", defaults=flat))
    assert inline.parameters.elevation == 7
    assert preset.parameters.elevation == 4
    assert bare.parameters.elevation == 1


def test_unrelated_fields_survive_from_lower_layers():
    ambient = EffectiveConfig(states={"hover": {"elevation": 5, "opacity": 0.8}})
    engine = ShadowResolutionEngine(presets=PresetRegistry(BUILTIN_PRESETS), ambient=ambient)
    resolved = engine.resolve(ShadowRequest(state="hover", config="card"))
    assert resolved.parameters.elevation == 4
    assert resolved.parameters.opacity == 0.8


def test_state_without_entries_falls_back_to_builtins(engine):
    resolved = engine.resolve(ShadowRequest(state="pulsing", config="card"))
    params = resolved.parameters
    assert params.elevation is None
    assert params.size.value == settings.DEFAULT_SIZE
    assert params.opacity == 1
    assert params.blur == 1
    assert params.inner_shadow is False


def test_auto_state_priority(engine):
    flags = InteractionFlags(active=True, hovered=True, focused=True)
    resolved = engine.resolve(ShadowRequest(config="card", flags=flags))
    assert resolved.state == "active"
    assert resolved.parameters.elevation == 1


def test_auto_detect_disabled_reports_default():
    cfg = EffectiveConfig(states={"hover": {"elevation": 9}}, auto_detect=False)
    engine = ShadowResolutionEngine(presets=PresetRegistry())
    resolved = engine.resolve(ShadowRequest(config=cfg, flags=InteractionFlags(hovered=True)))
    assert resolved.state == "default"


def test_ambient_auto_detect_does_not_leak_into_named_config():
    ambient = EffectiveConfig(auto_detect=False)
    engine = ShadowResolutionEngine(presets=PresetRegistry(BUILTIN_PRESETS), ambient=ambient)
    flags = InteractionFlags(hovered=True)
    assert engine.resolve(ShadowRequest(config="modal", flags=flags)).state == "hover"
    # without a config of its own the ambient flag is the resolved one
    assert engine.resolve(ShadowRequest(flags=flags)).state == "default"


def test_explicit_state_ignores_flags(engine):
    resolved = engine.resolve(
        ShadowRequest(state="disabled", config="card", flags=InteractionFlags(active=True))
    )
    assert resolved.state == "disabled"
    assert resolved.descriptor.base_layers == ()


def test_focus_color_loses_to_elevation(engine):
    resolved = engine.resolve(ShadowRequest(state="focus", config="button"))
    assert resolved.parameters.color.value == "blue"
    assert resolved.descriptor.base_layers == generate(2).base


def test_preset_blur_multiplier_used(engine):
    resolved = engine.resolve(ShadowRequest(state="animating", config="floating"))
    assert resolved.descriptor.base_layers == generate(10, 1.2).base


def test_opacity_attenuates_every_layer(engine):
    full = engine.resolve(ShadowRequest(state="default", states={"default": {"elevation": 4}}))
    half = engine.resolve(
        ShadowRequest(
            state="default",
            states={"default": {"elevation": 4, "opacity": 0.5, "inner_shadow": True}},
        )
    )
    assert len(half.descriptor.base_layers) == len(full.descriptor.base_layers)
    for a, b in zip(full.descriptor.base_layers, half.descriptor.base_layers):
        assert b.alpha == pytest.approx(a.alpha * 0.5)
        assert (b.y_offset, b.blur) == (a.y_offset, a.blur)
    for a, b in zip(full.descriptor.emphasized_layers, half.descriptor.emphasized_layers):
        assert b.alpha == pytest.approx(a.alpha * 0.5)
    assert half.descriptor.inner_layer.alpha == pytest.approx(inner_layer("md").alpha * 0.5)


def test_zero_elevation_has_empty_stacks(engine):
    resolved = engine.resolve(
        ShadowRequest(state="default", defaults={"elevation": 0, "color": "purple", "size": "xl"})
    )
    assert resolved.descriptor.base_layers == ()
    assert resolved.descriptor.emphasized_layers == ()
    assert resolved.descriptor.is_empty


def test_inner_shadow_from_size_table(engine):
    resolved = engine.resolve(ShadowRequest(state="default", defaults={"size": "lg", "inner_shadow": True}))
    assert resolved.descriptor.inner_layer == inner_layer("lg")


def test_explicit_inner_layer_passed_verbatim(engine):
    custom = ShadowLayer(y_offset=1, blur=3, alpha=0.4, color=WHITE, inset=True)
    resolved = engine.resolve(
        ShadowRequest(state="default", states={"default": StateParameters(inner_shadow=custom)})
    )
    assert resolved.descriptor.inner_layer is custom


def test_unknown_preset_falls_back_to_ambient(caplog):
    ambient = EffectiveConfig(states={"default": {"elevation": 3}})
    engine = ShadowResolutionEngine(presets=PresetRegistry(), ambient=ambient)
    with caplog.at_level(logging.WARNING, logger="shadows.merge"):
        resolved = engine.resolve(ShadowRequest(state="default", config="no-such-preset"))
    assert resolved.parameters.elevation == 3
    assert "no-such-preset" in caplog.text


def test_transition_precedence(engine):
    own = TransitionSpec(duration_ms=90, easing="linear")
    assert engine.resolve(ShadowRequest(config="card", transition=own)).transition == own
    assert engine.resolve(ShadowRequest(config="card")).transition == TransitionSpec(200, "ease-out")
    default = engine.resolve(ShadowRequest()).transition
    assert default.duration_ms == settings.DEFAULT_TRANSITION_MS


def test_ambient_transition_used_without_config():
    ambient = EffectiveConfig(transition={"duration_ms": 120, "easing": "ease-in"})
    engine = ShadowResolutionEngine(presets=PresetRegistry(), ambient=ambient)
    assert engine.resolve(ShadowRequest()).transition == TransitionSpec(120, "ease-in")


def test_reduced_motion_collapses_duration(engine):
    with temporarily_reduced_motion():
        transition = engine.resolve(ShadowRequest(config="modal")).transition
    assert transition.duration_ms == 0
    assert transition.easing == "ease-in-out"


def test_lightweight_single_layer_path(engine):
    resolved = engine.resolve(ShadowRequest(defaults={"elevation": 10}, use_box_shadow=True))
    assert resolved.descriptor.base_layers == (single_layer(10),)
    assert resolved.parameters is None
    zero = engine.resolve(ShadowRequest(defaults={"elevation": 0}, use_box_shadow=True))
    assert zero.descriptor.is_empty


def test_with_ambient_shares_generator(engine):
    child = engine.with_ambient(EffectiveConfig(states={"default": {"elevation": 6}}))
    assert child.generator is engine.generator
    assert child.resolve(ShadowRequest(state="default")).parameters.elevation == 6


def test_resolve_is_idempotent(engine):
    request = ShadowRequest(config="floating", flags=InteractionFlags(hovered=True))
    assert engine.resolve(request) == engine.resolve(request)


def test_module_level_resolve_shadow():
    resolved = resolve_shadow(config="card", state="hover")
    assert resolved.state == "hover"
    assert resolved.descriptor.base_layers == generate(4).base
