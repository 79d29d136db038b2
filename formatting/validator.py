"""Structural validation for formatting settings models.

The host builds its editing pane purely from the model, so a malformed card
(duplicate property names, a gate that is not a toggle, a dropdown pointing at
a missing member) shows up as a broken pane rather than an exception. The
checks here catch those problems up front and report them as plain strings.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Iterable

from .cards import Card
from .model import SettingsModel
from .primitives import ColorPicker, FontControl, ItemDropdown, NumUpDown, Selector, Slice, ToggleSwitch

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_SYMBOLIC_COLOR_RE = re.compile(r"^[A-Za-z]+$")


class FormattingModelError(ValueError):
    """Raised when a settings model fails validation."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = tuple(errors)
        super().__init__("Invalid formatting model:\n" + "\n".join(f"- {error}" for error in self.errors))


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating a card or a whole model."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def is_valid_color(value: str) -> bool:
    """Return True for `#RGB`/`#RRGGBB` hex colors and symbolic names like "red"."""

    return bool(_HEX_COLOR_RE.match(value) or _SYMBOLIC_COLOR_RE.match(value))


def validate_card(card: Card) -> ValidationResult:
    """Validate a single card.

    Args:
        card: Card to validate.

    Returns:
        ValidationResult containing errors and warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []

    if not card.name.strip():
        errors.append("Card.name must be a non-empty string.")
    if not card.display_name.strip():
        errors.append(f"Card[{card.name}].display_name must be a non-empty string.")

    seen: set[tuple[str, str]] = set()
    for idx, slice_ in enumerate(card.slices):
        key = (slice_.name, _selector_key(slice_.selector))
        if key in seen:
            errors.append(f"Card[{card.name}].slices[{idx}] duplicates slice name {slice_.name!r}.")
        seen.add(key)
        errors.extend(_slice_errors(card, idx, slice_))

        is_gate = card.top_level_slice is not None and slice_.name == card.top_level_slice
        if not is_gate and not slice_.display_name:
            warnings.append(f"Card[{card.name}].slices[{idx}] ({slice_.name!r}) has no display name.")

    if card.top_level_slice is not None:
        matches = [s for s in card.slices if s.name == card.top_level_slice]
        if len(matches) != 1:
            errors.append(
                f"Card[{card.name}] top-level slice {card.top_level_slice!r} must appear in slices exactly once."
            )
        elif not isinstance(matches[0], ToggleSwitch):
            errors.append(f"Card[{card.name}] top-level slice {card.top_level_slice!r} must be a ToggleSwitch.")

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def validate_settings_model(model: SettingsModel) -> ValidationResult:
    """Validate every card in `model` plus cross-card constraints."""

    errors: list[str] = []
    warnings: list[str] = []

    names = [card.name for card in model.cards]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    for name in duplicates:
        errors.append(f"Card name {name!r} is used by more than one card.")

    for card in model.cards:
        result = validate_card(card)
        errors.extend(result.errors)
        warnings.extend(result.warnings)

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def ensure_valid(model: SettingsModel) -> SettingsModel:
    """Return `model` unchanged, or raise when it fails validation.

    Raises:
        FormattingModelError: When validation reports errors.
    """

    result = validate_settings_model(model)
    if not result.is_valid:
        raise FormattingModelError(result.errors)
    return model


def _slice_errors(card: Card, idx: int, slice_: Slice) -> list[str]:
    where = f"Card[{card.name}].slices[{idx}] ({slice_.name!r})"
    errors: list[str] = []

    if not slice_.name.strip():
        errors.append(f"Card[{card.name}].slices[{idx}].name must be a non-empty string.")

    if isinstance(slice_, ColorPicker) and not is_valid_color(slice_.value):
        errors.append(f"{where} has an unrecognized color {slice_.value!r}.")

    if isinstance(slice_, NumUpDown):
        errors.extend(_numeric_errors(where, slice_))

    if isinstance(slice_, FontControl):
        errors.extend(_numeric_errors(f"{where}.font_size", slice_.font_size))
        if not slice_.font_family.value.strip():
            errors.append(f"{where}.font_family must be a non-empty string.")

    if isinstance(slice_, ItemDropdown) and slice_.value not in slice_.items:
        errors.append(f"{where} value is not one of its items.")

    return errors


def _numeric_errors(where: str, slice_: NumUpDown) -> list[str]:
    options = slice_.options
    if options.min_value is not None and options.max_value is not None and options.min_value > options.max_value:
        return [f"{where} declares min_value={options.min_value} greater than max_value={options.max_value}."]
    if not slice_.is_within_bounds():
        return [
            f"{where} value {slice_.value} is outside [{options.min_value}, {options.max_value}]."
        ]
    return []


def _selector_key(selector: Selector | None) -> str:
    if selector is None:
        return ""
    return json.dumps(selector, sort_keys=True, default=str)
