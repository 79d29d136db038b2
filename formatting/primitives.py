"""Option primitives ("slices") exposed to the host's formatting pane.

Each primitive is a small typed value holder that describes one configurable
option: its stable name, an optional label, the current value, optional
numeric bounds, visibility, and an optional selector that scopes the option to
a single data element instead of the whole dataset.

Primitives are mutable because the host writes user edits back into `value`,
but two rules always hold:

- `name` is fixed once the primitive is constructed.
- `value` keeps the primitive's value type across assignments.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, ClassVar, TypeAlias

Selector: TypeAlias = Mapping[str, Any]


class VisualEnumerationInstanceKind(IntEnum):
    """How a color option may be specified by the user."""

    CONSTANT = 1
    RULE = 2
    CONSTANT_OR_RULE = 3


class DataViewWildcardMatchingOption(IntEnum):
    """Which data-view instances a wildcard selector matches."""

    INSTANCES_AND_TOTALS = 0
    INSTANCES_ONLY = 1
    TOTALS_ONLY = 2


def create_wildcard_selector(matching_option: DataViewWildcardMatchingOption) -> Selector:
    """Return a selector that targets every instance matched by `matching_option`.

    Args:
        matching_option: Which instances (and/or totals) the selector covers.

    Returns:
        Host selector mapping.
    """

    return {"data": [{"dataViewWildcard": {"matchingOption": int(matching_option)}}]}


def _is_set(obj: object, attr: str) -> bool:
    try:
        getattr(obj, attr)
    except AttributeError:
        return False
    return True


@dataclass(slots=True, kw_only=True)
class Slice:
    """Base type for every formatting option.

    Args:
        name: Stable property name; the host and persisted user edits key off it.
        display_name: Optional label. `None` means no label is shown.
        visible: Whether the host shows the option.
        selector: Optional scoping token binding the option to one data element.
    """

    name: str
    display_name: str | None = None
    visible: bool = True
    selector: Selector | None = None

    def __setattr__(self, key: str, value: Any) -> None:
        if key == "name" and _is_set(self, "name"):
            raise AttributeError(f"{type(self).__name__}.name cannot change after construction.")
        if key == "value":
            self.check_value(value)
        object.__setattr__(self, key, value)

    def check_value(self, value: Any) -> None:
        """Raise when `value` is not acceptable for this primitive."""

        raise AttributeError(f"{type(self).__name__} does not hold a settable value.")


@dataclass(slots=True, kw_only=True)
class SimpleSlice(Slice):
    """A slice holding a single scalar value."""

    value_types: ClassVar[tuple[type, ...]] = (object,)

    def check_value(self, value: Any) -> None:
        if isinstance(value, bool) and bool not in self.value_types:
            raise TypeError(f"{type(self).__name__}[{self.name}].value must not be a bool.")
        if not isinstance(value, self.value_types):
            expected = ", ".join(t.__name__ for t in self.value_types)
            raise TypeError(
                f"{type(self).__name__}[{self.name}].value must be {expected}, got {type(value).__name__}."
            )


@dataclass(slots=True, kw_only=True)
class ToggleSwitch(SimpleSlice):
    """Boolean on/off option."""

    value_types: ClassVar[tuple[type, ...]] = (bool,)

    value: bool = False


@dataclass(slots=True, kw_only=True)
class ColorPicker(SimpleSlice):
    """Color option.

    Args:
        value: Hex (`#RRGGBB`) or symbolic color.
        instance_kind: Set only on options that support rule-based formatting.
        alt_constant_selector: Fallback selector used when no instance rule exists.
    """

    value_types: ClassVar[tuple[type, ...]] = (str,)

    value: str
    instance_kind: VisualEnumerationInstanceKind | None = None
    alt_constant_selector: Selector | None = None


@dataclass(frozen=True, slots=True)
class NumericValidators:
    """Inclusive numeric bounds declared for a `NumUpDown`.

    The bounds are declarative; enforcing them is the host input control's job.
    """

    min_value: float | None = None
    max_value: float | None = None

    def contains(self, value: float) -> bool:
        """Return True when `value` lies inside the declared bounds."""

        if self.min_value is not None and value < self.min_value:
            return False
        if self.max_value is not None and value > self.max_value:
            return False
        return True


@dataclass(slots=True, kw_only=True)
class NumUpDown(SimpleSlice):
    """Numeric option with optional inclusive bounds."""

    value_types: ClassVar[tuple[type, ...]] = (int, float)

    value: float
    options: NumericValidators = field(default_factory=NumericValidators)

    def is_within_bounds(self) -> bool:
        return self.options.contains(self.value)


@dataclass(slots=True, kw_only=True)
class TextInput(SimpleSlice):
    """Free text option."""

    value_types: ClassVar[tuple[type, ...]] = (str,)

    value: str = ""
    placeholder: str = ""


@dataclass(slots=True, kw_only=True)
class FontPicker(SimpleSlice):
    """Font family option (a CSS-style font stack string)."""

    value_types: ClassVar[tuple[type, ...]] = (str,)

    value: str


@dataclass(frozen=True, slots=True)
class EnumMember:
    """One entry of an `ItemDropdown`."""

    display_name: str
    value: str


@dataclass(slots=True, kw_only=True)
class ItemDropdown(Slice):
    """Single choice from a fixed, ordered list of members.

    When `value` is omitted the first member is selected.
    """

    items: tuple[EnumMember, ...]
    value: EnumMember | None = None

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError(f"ItemDropdown[{self.name}] requires at least one item.")
        if self.value is None:
            self.value = self.items[0]

    def check_value(self, value: Any) -> None:
        if value is None and not _is_set(self, "value"):
            return
        if not isinstance(value, EnumMember):
            raise TypeError(f"ItemDropdown[{self.name}].value must be an EnumMember.")
        if value not in self.items:
            raise ValueError(f"ItemDropdown[{self.name}].value {value.value!r} is not one of its items.")

    def select(self, raw_value: str) -> EnumMember:
        """Select the member whose `value` equals `raw_value`.

        Raises:
            ValueError: When no member matches.
        """

        for item in self.items:
            if item.value == raw_value:
                self.value = item
                return item
        raise ValueError(f"ItemDropdown[{self.name}] has no item with value {raw_value!r}.")


@dataclass(frozen=True, slots=True)
class FontValue:
    """Snapshot of a `FontControl`'s member values."""

    font_family: str
    font_size: float
    bold: bool | None
    italic: bool | None
    underline: bool | None


@dataclass(slots=True, kw_only=True)
class FontControl(Slice):
    """Composite text style: family, size and optional emphasis toggles."""

    font_family: FontPicker
    font_size: NumUpDown
    bold: ToggleSwitch | None = None
    italic: ToggleSwitch | None = None
    underline: ToggleSwitch | None = None

    @property
    def value(self) -> FontValue:
        return FontValue(
            font_family=self.font_family.value,
            font_size=self.font_size.value,
            bold=self.bold.value if self.bold is not None else None,
            italic=self.italic.value if self.italic is not None else None,
            underline=self.underline.value if self.underline is not None else None,
        )

    def members(self) -> tuple[SimpleSlice, ...]:
        """Return the member primitives that are present, in display order."""

        candidates = (self.font_family, self.font_size, self.bold, self.italic, self.underline)
        return tuple(member for member in candidates if member is not None)
