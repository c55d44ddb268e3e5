"""Tests for wcgen.styles."""

from __future__ import annotations

import json

from wcgen.models import DEFAULT_MODE, Component, StyleMode
from wcgen.styles import (
    STYLE_ID_PLACEHOLDER,
    STYLE_PLACEHOLDER,
    ModeExpander,
    get_all_modes,
    replace_style_placeholders,
)

DARK = StyleMode.named("dark")
IOS = StyleMode.named("ios")


def _template(*components: Component) -> str:
    return "\n".join(
        f"{STYLE_ID_PLACEHOLDER.format(tag=cmp.tag_name)}={STYLE_PLACEHOLDER.format(tag=cmp.tag_name)}"
        for cmp in components
    )


def test_unstyled_component_has_default_mode_only() -> None:
    assert get_all_modes([Component(tag_name="plain-box")]) == [DEFAULT_MODE]


def test_modes_are_collected_across_components_in_stable_order() -> None:
    components = [
        Component(tag_name="a-b", styles={IOS: "x", DARK: "y"}),
        Component(tag_name="c-d", styles={DEFAULT_MODE: "z"}),
    ]
    assert get_all_modes(components) == [DEFAULT_MODE, DARK, IOS]


def test_named_only_components_do_not_add_default_mode() -> None:
    components = [Component(tag_name="a-b", styles={IOS: "x"})]
    assert get_all_modes(components) == [IOS]


def test_no_components_yield_no_modes() -> None:
    assert get_all_modes([]) == []


def test_replace_uses_mode_css_and_escapes_it() -> None:
    cmp = Component(tag_name="my-button", styles={DEFAULT_MODE: 'a{content:"x"}', DARK: "a{color:#fff}"})

    default_text = replace_style_placeholders([cmp], DEFAULT_MODE, _template(cmp))
    dark_text = replace_style_placeholders([cmp], DARK, _template(cmp))

    assert default_text == '"my-button"=' + json.dumps('a{content:"x"}')
    assert '\\"x\\"' in default_text
    assert dark_text == '"my-button-dark"="a{color:#fff}"'


def test_replace_falls_back_to_default_css_then_empty() -> None:
    styled = Component(tag_name="my-card", styles={DEFAULT_MODE: "card{}"})
    unstyled = Component(tag_name="my-icon")

    text = replace_style_placeholders([styled, unstyled], DARK, _template(styled, unstyled))

    assert text.splitlines() == ['"my-card-dark"="card{}"', '"my-icon-dark"=""']


def test_mode_expander_produces_one_variant_per_mode() -> None:
    cmp = Component(tag_name="my-button", styles={DEFAULT_MODE: "a{}", DARK: "b{}"})
    variants = ModeExpander().expand([cmp], _template(cmp))

    assert list(variants) == [DEFAULT_MODE, DARK]
    assert variants[DEFAULT_MODE] == '"my-button"="a{}"'
    assert variants[DARK] == '"my-button-dark"="b{}"'


def test_mode_expander_accepts_injected_collaborators() -> None:
    calls: list[StyleMode] = []

    def substitute(components, mode, text):
        calls.append(mode)
        return f"{text}:{mode}"

    expander = ModeExpander(enumerate_modes=lambda components: [IOS, DEFAULT_MODE], substitute=substitute)
    variants = expander.expand([], "t")

    assert variants == {DEFAULT_MODE: "t:$", IOS: "t:ios"}
    assert calls == [DEFAULT_MODE, IOS]
