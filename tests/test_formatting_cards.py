"""Tests for the built-in formatting cards and gate semantics."""

from __future__ import annotations

import pytest

from formatting.cards import (
    CARD_FACTORIES,
    Card,
    average_line_card,
    color_selector_card,
    direct_edit_card,
    enable_axis_card,
    general_view_card,
)
from formatting.primitives import (
    ColorPicker,
    FontControl,
    ItemDropdown,
    NumUpDown,
    TextInput,
    ToggleSwitch,
    VisualEnumerationInstanceKind,
)

pytestmark = pytest.mark.unit


def _names(card: Card) -> list[str]:
    return [s.name for s in card.slices]


def test_card_factories_are_in_display_order() -> None:
    """The five cards keep their stable machine names and order."""

    names = [factory().name for factory in CARD_FACTORIES]
    assert names == ["enableAxis", "colorSelector", "generalView", "averageLine", "directEdit"]


def test_factories_return_independent_cards() -> None:
    """Each call builds new slices, so instances never share state."""

    first = enable_axis_card()
    second = enable_axis_card()
    first.slices[1].value = "#FF0000"
    assert second.slices[1].value == "#000000"


def test_enable_axis_card() -> None:
    """Axis card: unlabeled off gate plus the axis color."""

    card = enable_axis_card()
    assert card.display_name == "Enable Axis"
    assert card.top_level_slice == "show"
    assert _names(card) == ["show", "fill"]
    assert card.gate is not None
    assert card.gate.value is False
    assert card.gate.display_name is None
    assert card.is_enabled is False
    fill = card.get_slice("fill")
    assert isinstance(fill, ColorPicker)
    assert fill.value == "#000000"


def test_color_selector_card() -> None:
    """Data colors card: rule-capable default color and the show-all toggle, no gate."""

    card = color_selector_card()
    assert card.display_name == "Data Colors"
    assert card.top_level_slice is None
    assert card.gate is None
    assert card.is_enabled is True
    assert _names(card) == ["defaultColor", "showAllDataPoints"]

    default_color = card.get_slice("defaultColor")
    assert isinstance(default_color, ColorPicker)
    assert default_color.value == "#01B8AA"
    assert default_color.instance_kind is VisualEnumerationInstanceKind.CONSTANT_OR_RULE
    assert default_color.selector == {"data": [{"dataViewWildcard": {"matchingOption": 0}}]}
    assert default_color.alt_constant_selector is None

    show_all = card.get_slice("showAllDataPoints")
    assert isinstance(show_all, ToggleSwitch)
    assert show_all.value is False


def test_general_view_card() -> None:
    """General view: bounded opacity, help toggle, and the help-link color constant."""

    card = general_view_card()
    assert card.top_level_slice is None
    assert _names(card) == ["opacity", "showHelpLink"]

    opacity = card.get_slice("opacity")
    assert isinstance(opacity, NumUpDown)
    assert opacity.value == 100
    assert opacity.options.min_value == 0
    assert opacity.options.max_value == 100
    assert card.constants == {"helpLinkColor": "#80B0E0"}


def test_average_line_card_lists_its_gate_once() -> None:
    """Average line: gate listed once, analytics grouping."""

    card = average_line_card()
    assert card.analytics_pane is True
    assert _names(card) == ["show", "fill", "showDataLabel"]
    assert card.gate is card.slices[0]
    assert card.is_enabled is False
    assert card.get_slice("fill").value == "#888888"


def test_direct_edit_card_defaults() -> None:
    """Direct edit: gate on by default, font with minimum size, position dropdown."""

    card = direct_edit_card()
    assert card.is_enabled is True
    assert _names(card) == ["show", "textProperty", "font", "fontColor", "background", "position"]

    text = card.get_slice("textProperty")
    assert isinstance(text, TextInput)
    assert text.value == "What is your quest?"

    font = card.get_slice("font")
    assert isinstance(font, FontControl)
    assert font.font_size.value == 11
    assert font.font_size.options.min_value == 8
    assert font.font_size.options.max_value is None
    assert font.value.bold is True
    assert font.value.italic is True
    assert font.value.underline is True
    assert font.font_family.value.startswith("Segoe UI")

    assert card.get_slice("fontColor").value == "#000000"
    assert card.get_slice("background").value == "#FFFFFF"

    position = card.get_slice("position")
    assert isinstance(position, ItemDropdown)
    assert [item.value for item in position.items] == ["Right", "Left"]
    assert position.value.value == "Right"


def test_only_direct_edit_gate_defaults_on() -> None:
    """Every other gated card starts disabled."""

    gated = [factory() for factory in CARD_FACTORIES if factory().top_level_slice is not None]
    enabled = [card.name for card in gated if card.is_enabled]
    assert enabled == ["directEdit"]


def test_switching_gate_off_keeps_sibling_values() -> None:
    """A gate only affects enablement; stored values are untouched."""

    card = direct_edit_card()
    before = {s.name: getattr(s, "value") for s in card.gated_slices()}

    card.gate.value = False

    assert card.is_enabled is False
    after = {s.name: getattr(s, "value") for s in card.gated_slices()}
    assert after == before
    assert all(s.visible for s in card.gated_slices())


def test_gated_slices_excludes_the_gate() -> None:
    """Gated slices are every slice other than the gate."""

    card = average_line_card()
    assert [s.name for s in card.gated_slices()] == ["fill", "showDataLabel"]


def test_card_rejects_missing_or_duplicated_gate() -> None:
    """The gate must be listed exactly once."""

    show = ToggleSwitch(name="show")
    with pytest.raises(ValueError):
        Card(name="broken", display_name="Broken", slices=[show, show], top_level_slice="show")
    with pytest.raises(ValueError):
        Card(name="broken", display_name="Broken", slices=[], top_level_slice="show")


def test_get_slice_returns_none_for_unknown_names() -> None:
    """Lookups for unknown names do not raise."""

    assert general_view_card().get_slice("missing") is None
