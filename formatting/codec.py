"""Encoding/decoding helpers between the settings model and the host.

Outbound, the host reads the whole card list as a JSON-serializable payload.
Inbound, it hands over the data layer's category rows and any property values
it already stores for the visual.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .cards import Card
from .model import CategorySelectionId, DataPoint, SettingsModel
from .primitives import (
    ColorPicker,
    FontControl,
    FontPicker,
    ItemDropdown,
    NumUpDown,
    Selector,
    Slice,
    TextInput,
    ToggleSwitch,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _SelectorToken:
    """Selection id whose selector was supplied verbatim by the host."""

    selector: Selector

    def get_selector(self) -> Selector:
        return self.selector


def encode_settings_model(model: SettingsModel) -> dict[str, Any]:
    """Encode the model's cards into a JSON-serializable dictionary.

    Args:
        model: SettingsModel to encode.

    Returns:
        Dict payload with a `cards` list in display order.
    """

    return {"cards": [encode_card(card) for card in model.cards]}


def encode_card(card: Card) -> dict[str, Any]:
    """Encode one card, including its gate as `topLevelToggle`."""

    slices = [encode_slice(card, idx, slice_) for idx, slice_ in enumerate(card.slices)]
    top_level = None
    if card.top_level_slice is not None:
        top_level = next((payload for payload in slices if payload["name"] == card.top_level_slice), None)
    return {
        "uid": f"{card.name}_card",
        "name": card.name,
        "displayName": card.display_name,
        "analyticsPane": card.analytics_pane,
        "topLevelToggle": top_level,
        "slices": slices,
        "constants": dict(card.constants),
    }


def encode_slice(card: Card, idx: int, slice_: Slice) -> dict[str, Any]:
    """Encode one slice with its type-specific keys."""

    payload: dict[str, Any] = {
        "uid": f"{card.name}_{slice_.name}_{idx}",
        "name": slice_.name,
        "displayName": slice_.display_name,
        "type": type(slice_).__name__,
        "visible": slice_.visible,
        "selector": _plain(slice_.selector),
    }
    if isinstance(slice_, FontControl):
        for key, member in (
            ("fontFamily", slice_.font_family),
            ("fontSize", slice_.font_size),
            ("bold", slice_.bold),
            ("italic", slice_.italic),
            ("underline", slice_.underline),
        ):
            payload[key] = encode_slice(card, idx, member) if member is not None else None
        return payload

    if isinstance(slice_, ItemDropdown):
        payload["value"] = slice_.value.value if slice_.value is not None else None
        payload["items"] = [{"displayName": item.display_name, "value": item.value} for item in slice_.items]
        return payload

    payload["value"] = slice_.value  # type: ignore[attr-defined]
    if isinstance(slice_, ColorPicker):
        payload["instanceKind"] = int(slice_.instance_kind) if slice_.instance_kind is not None else None
        payload["altConstantSelector"] = _plain(slice_.alt_constant_selector)
    elif isinstance(slice_, NumUpDown):
        payload["options"] = {"minValue": slice_.options.min_value, "maxValue": slice_.options.max_value}
    elif isinstance(slice_, TextInput):
        payload["placeholder"] = slice_.placeholder
    return payload


def decode_data_points(payload: object, *, query_name: str) -> list[DataPoint]:
    """Decode data-layer category rows.

    Each row is `{"category": str, "color": str, "selectionKey": ...}`. A
    mapping `selectionKey` is used verbatim as the selector; any other value
    (or a missing key) scopes the row to its category column value.

    Args:
        payload: Decoded JSON list of rows, or None.
        query_name: Category column name used to build selection ids.

    Returns:
        DataPoints in input order.

    Raises:
        ValueError: When the payload or one of its rows is malformed.
    """

    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ValueError("dataPoints must be a list.")

    out: list[DataPoint] = []
    for idx, row in enumerate(payload):
        if not isinstance(row, dict):
            raise ValueError(f"dataPoints[{idx}] must be an object.")
        category = row.get("category")
        if category is None or str(category) == "":
            raise ValueError(f"dataPoints[{idx}].category is required.")
        color = row.get("color")
        if not isinstance(color, str) or not color.strip():
            raise ValueError(f"dataPoints[{idx}].color must be a non-empty string.")

        key = row.get("selectionKey")
        if isinstance(key, dict):
            selection_id: Any = _SelectorToken(selector=key)
        else:
            selection_id = CategorySelectionId(
                query_name=query_name,
                category=str(category if key is None else key),
            )
        out.append(DataPoint(category=str(category), color=color.strip(), selection_id=selection_id))
    return out


def apply_object_values(model: SettingsModel, objects: Mapping[str, Any] | None) -> int:
    """Copy host-stored property values onto the model's static slices.

    `objects` maps card names to `{property_name: value}`. Values that cannot
    be coerced to the slice's type are skipped, as are unknown cards and
    properties. Per-category color slices are never targeted.

    Args:
        model: SettingsModel to update in place.
        objects: Host property values, or None.

    Returns:
        Number of properties applied.

    Raises:
        ValueError: When a card entry is not a mapping.
    """

    if not objects:
        return 0
    if not isinstance(objects, Mapping):
        raise ValueError("objects must be an object.")

    category_slices = {id(s) for s in model.category_slices()}
    applied = 0
    for card_name, properties in objects.items():
        try:
            card = model.get_card(card_name)
        except KeyError:
            logger.debug("Ignoring values for unknown card %r.", card_name)
            continue
        if not isinstance(properties, Mapping):
            raise ValueError(f"objects[{card_name!r}] must be an object.")

        for prop, raw in properties.items():
            target = _find_property(card, str(prop), skip=category_slices)
            if target is None:
                logger.debug("Ignoring unknown property %s.%s.", card_name, prop)
                continue
            if _apply_value(target, raw):
                applied += 1
            else:
                logger.debug("Ignoring unusable value for %s.%s: %r.", card_name, prop, raw)
    return applied


def _find_property(card: Card, name: str, *, skip: set[int]) -> Slice | None:
    for slice_ in card.slices:
        if id(slice_) in skip:
            continue
        if slice_.name == name:
            return slice_
        if isinstance(slice_, FontControl):
            for member in slice_.members():
                if member.name == name:
                    return member
    return None


def _apply_value(slice_: Slice, raw: object) -> bool:
    """Best-effort assignment of a host value; returns False when unusable."""

    if isinstance(slice_, ToggleSwitch):
        parsed_bool = _parse_bool(raw)
        if parsed_bool is None:
            return False
        slice_.value = parsed_bool
        return True

    if isinstance(slice_, ColorPicker):
        color = _parse_color(raw)
        if color is None:
            return False
        slice_.value = color
        return True

    if isinstance(slice_, NumUpDown):
        number = _parse_number(raw)
        if number is None:
            return False
        slice_.value = number
        return True

    if isinstance(slice_, (TextInput, FontPicker)):
        if raw is None or isinstance(raw, (dict, list)):
            return False
        slice_.value = str(raw)
        return True

    if isinstance(slice_, ItemDropdown):
        raw_value = raw.get("value") if isinstance(raw, dict) else raw
        try:
            slice_.select(str(raw_value))
        except ValueError:
            return False
        return True

    return False


def _parse_bool(value: object) -> bool | None:
    """Best-effort bool parsing for host values."""

    if isinstance(value, bool):
        return value
    if value is None:
        return None
    normalized = str(value).strip().casefold()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return None


def _parse_color(value: object) -> str | None:
    """Accept a plain color string or the host's `{"solid": {"color": ...}}` fill."""

    if isinstance(value, dict):
        solid = value.get("solid")
        value = solid.get("color") if isinstance(solid, dict) else None
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def _parse_number(value: object) -> float | None:
    """Best-effort number parsing; integral values come back as int."""

    if value is None or isinstance(value, bool) or value == "":
        return None
    try:
        number = float(str(value))
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def _plain(selector: Selector | None) -> Any:
    if selector is None:
        return None
    return dict(selector)
