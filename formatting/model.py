"""Root formatting settings model and data-color reconciliation.

One `SettingsModel` exists per visual instance. It is created with the five
built-in cards, then grown in place by `populate_color_selector` on every data
refresh so each newly seen category gets its own color slice. The model never
shrinks: categories that leave the dataset keep their slices until the model
is rebuilt.

The host serializes update callbacks, so the model does no locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

from .cards import (
    Card,
    average_line_card,
    color_selector_card,
    direct_edit_card,
    enable_axis_card,
    general_view_card,
)
from .primitives import ColorPicker, Selector, Slice, ToggleSwitch

logger = logging.getLogger(__name__)

CATEGORY_COLOR_SLICE_NAME = "fill"


class SelectionId(Protocol):
    """Opaque scoping token produced by the data layer for one data element."""

    def get_selector(self) -> Selector: ...


@dataclass(frozen=True, slots=True)
class CategorySelectionId:
    """Selection id for one value of a category column.

    Args:
        query_name: Fully qualified column name, e.g. "Sales.Region".
        category: Category value the selection targets.
    """

    query_name: str
    category: str

    def get_selector(self) -> Selector:
        return {"data": [{"scopeId": {"queryName": self.query_name, "value": self.category}}]}


@dataclass(frozen=True, slots=True)
class DataPoint:
    """One category row reported by the data layer.

    Args:
        category: Category label; doubles as the color slice identity.
        color: Color assigned by the data layer.
        selection_id: Token used to scope the category's color slice.
    """

    category: str
    color: str
    selection_id: SelectionId


def reconcile(
    current_slices: Sequence[Slice],
    data_points: Iterable[DataPoint] | None,
    *,
    show_all: bool,
) -> list[Slice]:
    """Return `current_slices` extended with a color slice per unseen category.

    Existing slices are kept as-is, even when the data layer now reports a
    different color for their category. A category is "seen" when a category
    color slice (named `fill`) is labelled with it; static slices such as the
    default color never count, whatever their label. The first occurrence in
    `data_points` wins.

    Args:
        current_slices: Slices of the data colors card.
        data_points: Rows from the current data refresh, or None.
        show_all: Visibility given to newly created slices.

    Returns:
        A new list; `current_slices` is not modified.
    """

    slices = list(current_slices)
    if not data_points:
        return slices

    seen = {
        s.display_name for s in slices if isinstance(s, ColorPicker) and s.name == CATEGORY_COLOR_SLICE_NAME
    }
    for data_point in data_points:
        if data_point.category in seen:
            continue
        seen.add(data_point.category)
        slices.append(
            ColorPicker(
                name=CATEGORY_COLOR_SLICE_NAME,
                display_name=data_point.category,
                value=data_point.color,
                selector=data_point.selection_id.get_selector(),
                visible=show_all,
            )
        )
    return slices


class SettingsModel:
    """Ordered set of formatting cards for one visual instance."""

    def __init__(self) -> None:
        self.enable_axis: Card = enable_axis_card()
        self.color_selector: Card = color_selector_card()
        self.general_view: Card = general_view_card()
        self.average_line: Card = average_line_card()
        self.direct_edit: Card = direct_edit_card()
        self.cards: list[Card] = [
            self.enable_axis,
            self.color_selector,
            self.general_view,
            self.average_line,
            self.direct_edit,
        ]
        self._static_color_slice_count = len(self.color_selector.slices)

    def __repr__(self) -> str:
        return f"SettingsModel(cards={[card.name for card in self.cards]!r})"

    def get_card(self, name: str) -> Card:
        """Return the card whose machine name is `name`.

        Raises:
            KeyError: When no card has that name.
        """

        for card in self.cards:
            if card.name == name:
                return card
        raise KeyError(name)

    @property
    def show_all_data_points(self) -> ToggleSwitch:
        toggle = self.color_selector.get_slice("showAllDataPoints")
        if not isinstance(toggle, ToggleSwitch):
            raise LookupError(f"Card[{self.color_selector.name}] has no showAllDataPoints toggle.")
        return toggle

    def category_slices(self) -> list[Slice]:
        """Return the per-category color slices appended by data refreshes."""

        return self.color_selector.slices[self._static_color_slice_count :]

    def populate_color_selector(self, data_points: Iterable[DataPoint] | None) -> None:
        """Append a color slice for every category not yet present.

        The card's slice list is updated in place so references the host holds
        stay valid. New slices take their visibility from the current "show
        all" toggle; later toggle changes do not touch them.
        """

        slices = self.color_selector.slices
        before = len(slices)
        slices[:] = reconcile(slices, data_points, show_all=self.show_all_data_points.value)
        added = len(slices) - before
        if added:
            logger.debug("Added %d category color slice(s); %d total.", added, len(self.category_slices()))
