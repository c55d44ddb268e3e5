"""Tests for wcgen.models."""

from __future__ import annotations

import pytest

from wcgen.models import DEFAULT_MODE, Component, StyleMode, sort_modes


def test_default_mode_has_no_suffix() -> None:
    assert DEFAULT_MODE.is_default
    assert DEFAULT_MODE.suffix() == ""
    assert DEFAULT_MODE.suffix(lowercase=True) == ""
    assert str(DEFAULT_MODE) == "$"


def test_named_mode_suffix_respects_case_option() -> None:
    mode = StyleMode.named("Ios")
    assert not mode.is_default
    assert mode.suffix() == ".Ios"
    assert mode.suffix(lowercase=True) == ".ios"


def test_parse_maps_dollar_to_default_mode() -> None:
    assert StyleMode.parse("$") == DEFAULT_MODE
    assert StyleMode.parse("dark") == StyleMode.named("dark")


def test_named_mode_rejects_default_sentinel() -> None:
    with pytest.raises(ValueError):
        StyleMode.named("$")
    with pytest.raises(ValueError):
        StyleMode.named("")


@pytest.mark.parametrize("name", ["..", "../x", "a/b", "a\\b", "dark\n", "dark.ios", " dark"])
def test_named_mode_rejects_names_unsafe_for_file_names(name: str) -> None:
    with pytest.raises(ValueError):
        StyleMode.named(name)


def test_sort_modes_puts_default_first_and_dedupes() -> None:
    modes = [StyleMode.named("md"), DEFAULT_MODE, StyleMode.named("ios"), StyleMode.named("md")]
    assert sort_modes(modes) == [DEFAULT_MODE, StyleMode.named("ios"), StyleMode.named("md")]


def test_component_class_name_and_modes() -> None:
    cmp = Component(
        tag_name="my-fancy-button",
        styles={StyleMode.named("dark"): "a{}", DEFAULT_MODE: "b{}"},
    )
    assert cmp.class_name == "MyFancyButton"
    assert cmp.style_modes == (DEFAULT_MODE, StyleMode.named("dark"))
