"""Card definitions for the bar chart formatting pane.

A card is a named, ordered group of slices shown together by the host. Cards
are plain values: each built-in card comes from a constructor function rather
than a subclass, so adding a card never means extending a class hierarchy.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Final

from .primitives import (
    ColorPicker,
    DataViewWildcardMatchingOption,
    EnumMember,
    FontControl,
    FontPicker,
    ItemDropdown,
    NumericValidators,
    NumUpDown,
    Slice,
    TextInput,
    ToggleSwitch,
    VisualEnumerationInstanceKind,
    create_wildcard_selector,
)

ENABLE_AXIS: Final[str] = "enableAxis"
COLOR_SELECTOR: Final[str] = "colorSelector"
GENERAL_VIEW: Final[str] = "generalView"
AVERAGE_LINE: Final[str] = "averageLine"
DIRECT_EDIT: Final[str] = "directEdit"

DEFAULT_FONT_FAMILY: Final[str] = "Segoe UI, wf_segoe-ui_normal, helvetica, arial, sans-serif"
MIN_FONT_SIZE: Final[int] = 8
DEFAULT_FONT_SIZE: Final[int] = 11

POSITION_OPTIONS: Final[tuple[EnumMember, ...]] = (
    EnumMember(display_name="Right", value="Right"),
    EnumMember(display_name="Left", value="Left"),
)


@dataclass(slots=True)
class Card:
    """A named group of slices.

    Args:
        name: Stable machine key (the host's object name).
        display_name: Card title in the formatting pane.
        slices: Slices in display order.
        top_level_slice: Name of the gate toggle, if the card has one. The gate
            is always part of `slices`; a missing gate is prepended.
        analytics_pane: Whether the host lists the card under analytics rather
            than plain formatting.
        constants: Non-editable values the card carries for the host's use.
    """

    name: str
    display_name: str
    slices: list[Slice]
    top_level_slice: str | None = None
    analytics_pane: bool = False
    constants: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.top_level_slice is None:
            return
        matches = [s for s in self.slices if s.name == self.top_level_slice]
        if len(matches) != 1:
            raise ValueError(
                f"Card[{self.name}] must list its top-level slice {self.top_level_slice!r} exactly once, "
                f"found {len(matches)}."
            )

    @property
    def gate(self) -> ToggleSwitch | None:
        if self.top_level_slice is None:
            return None
        gate = self.get_slice(self.top_level_slice)
        if not isinstance(gate, ToggleSwitch):
            return None
        return gate

    @property
    def is_enabled(self) -> bool:
        """Return False when the card's gate is switched off."""

        gate = self.gate
        return True if gate is None else gate.value

    def get_slice(self, name: str) -> Slice | None:
        """Return the first slice named `name`, or None."""

        for slice_ in self.slices:
            if slice_.name == name:
                return slice_
        return None

    def gated_slices(self) -> Iterator[Slice]:
        """Yield every slice other than the gate."""

        for slice_ in self.slices:
            if self.top_level_slice is not None and slice_.name == self.top_level_slice:
                continue
            yield slice_


def _gated_card(
    *,
    name: str,
    display_name: str,
    gate: ToggleSwitch,
    slices: list[Slice],
    analytics_pane: bool = False,
) -> Card:
    # The gate is both the card toggle and a regular slice, listed once.
    if all(s is not gate for s in slices):
        slices = [gate, *slices]
    return Card(
        name=name,
        display_name=display_name,
        slices=slices,
        top_level_slice=gate.name,
        analytics_pane=analytics_pane,
    )


def enable_axis_card() -> Card:
    """Axis visibility: an off-by-default gate plus the axis line color."""

    show = ToggleSwitch(name="show", display_name=None, value=False)
    fill = ColorPicker(name="fill", display_name="Color", value="#000000")
    return _gated_card(name=ENABLE_AXIS, display_name="Enable Axis", gate=show, slices=[fill])


def color_selector_card() -> Card:
    """Data colors: the default color, the "show all" toggle, then one color per category.

    Only the default color supports rule-based (conditional) formatting; per
    category colors are plain constants.
    """

    default_color = ColorPicker(
        name="defaultColor",
        display_name="Default color",
        value="#01B8AA",
        instance_kind=VisualEnumerationInstanceKind.CONSTANT_OR_RULE,
        selector=create_wildcard_selector(DataViewWildcardMatchingOption.INSTANCES_AND_TOTALS),
        alt_constant_selector=None,
        visible=True,
    )
    show_all = ToggleSwitch(name="showAllDataPoints", display_name="Show all", value=False, visible=True)
    return Card(name=COLOR_SELECTOR, display_name="Data Colors", slices=[default_color, show_all])


def general_view_card() -> Card:
    opacity = NumUpDown(
        name="opacity",
        display_name="Bars Opacity",
        value=100,
        options=NumericValidators(min_value=0, max_value=100),
    )
    show_help_link = ToggleSwitch(name="showHelpLink", display_name="Show Help Button", value=False)
    return Card(
        name=GENERAL_VIEW,
        display_name="General View",
        slices=[opacity, show_help_link],
        constants={"helpLinkColor": "#80B0E0"},
    )


def average_line_card() -> Card:
    """Average line overlay, listed in the analytics pane."""

    show = ToggleSwitch(name="show", display_name=None, value=False)
    fill = ColorPicker(name="fill", display_name="Color", value="#888888")
    show_data_label = ToggleSwitch(name="showDataLabel", display_name="Data Label", value=False)
    return _gated_card(
        name=AVERAGE_LINE,
        display_name="Average Line",
        gate=show,
        slices=[show, fill, show_data_label],
        analytics_pane=True,
    )


def direct_edit_card() -> Card:
    """Direct-edit text overlay; the only card whose gate starts switched on."""

    show = ToggleSwitch(name="show", display_name=None, value=True)
    text_property = TextInput(
        name="textProperty",
        display_name="Text Property",
        value="What is your quest?",
        placeholder="",
    )
    font = FontControl(
        name="font",
        display_name="Font",
        font_family=FontPicker(name="fontFamily", display_name="Font Family", value=DEFAULT_FONT_FAMILY),
        font_size=NumUpDown(
            name="fontSize",
            display_name="Font Size",
            value=DEFAULT_FONT_SIZE,
            options=NumericValidators(min_value=MIN_FONT_SIZE),
        ),
        bold=ToggleSwitch(name="bold", display_name="bold", value=True),
        italic=ToggleSwitch(name="italic", display_name="italic", value=True),
        underline=ToggleSwitch(name="underline", display_name="underline", value=True),
    )
    font_color = ColorPicker(name="fontColor", display_name="Color", value="#000000")
    background = ColorPicker(name="background", display_name="Background Color", value="#FFFFFF")
    position = ItemDropdown(name="position", display_name="Position", items=POSITION_OPTIONS)
    return _gated_card(
        name=DIRECT_EDIT,
        display_name="Direct Edit",
        gate=show,
        slices=[text_property, font, font_color, background, position],
    )


CARD_FACTORIES: Final[tuple[Callable[[], Card], ...]] = (
    enable_axis_card,
    color_selector_card,
    general_view_card,
    average_line_card,
    direct_edit_card,
)
