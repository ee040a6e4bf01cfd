"""Generic config form: one editable control per schema field."""

import base64
import logging
import mimetypes
from pathlib import Path
from typing import Callable, Type

from postergen.schema import ChoiceField, FileField, RangeField, Schema
from postergen.types import ConfigValue
from postergen.utils.colors import is_hex_color, normalize_hex

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[str, ConfigValue], None]


class Control:
    """
    Base class for form controls.

    A control displays the live value of one field and reports changes made
    through it to the form's callback. It never mutates a config map itself.
    """

    def __init__(self, descriptor, value: ConfigValue, on_change: ChangeCallback) -> None:
        """
        Initialize control.

        Args:
            descriptor: Field descriptor this control edits.
            value: Current value from the config map.
            on_change: Callback invoked with (key, new_value).
        """
        self.descriptor = descriptor
        self._value = value
        self._on_change = on_change

    @property
    def key(self) -> str:
        return self.descriptor.key

    @property
    def label(self) -> str:
        return self.descriptor.label

    @property
    def kind(self) -> str:
        return self.descriptor.kind

    @property
    def default(self) -> ConfigValue:
        return self.descriptor.default

    @property
    def value(self) -> ConfigValue:
        """Value as displayed by the control."""
        return self._value

    @property
    def is_modified(self) -> bool:
        """Whether the live value differs from the schema default."""
        return self._value != self.descriptor.default

    def change(self, raw: object) -> bool:
        """
        Handle a user edit.

        Args:
            raw: Value entered through the control.

        Returns:
            True if a new value was emitted.
        """
        value = self.coerce(raw)
        if value is _REJECTED:
            return False
        self._emit(value)
        return True

    def reset(self) -> bool:
        """
        Emit the schema default if the value was modified.

        Returns:
            True if the default was emitted.
        """
        if not self.is_modified:
            return False
        self._emit(self.descriptor.default)
        return True

    def coerce(self, raw: object) -> object:
        """Convert raw input into a field value, or _REJECTED."""
        return raw

    def _emit(self, value: ConfigValue) -> None:
        self._value = value
        self._on_change(self.key, value)


class _Rejected:
    def __repr__(self) -> str:
        return "<rejected>"


_REJECTED = _Rejected()


class TextControl(Control):
    """Free-text input; values pass through unchanged."""

    def coerce(self, raw: object) -> object:
        return "" if raw is None else str(raw)


class ColorControl(Control):
    """Color picker emitting "#rrggbb"."""

    def coerce(self, raw: object) -> object:
        if not is_hex_color(raw):
            logger.warning(f"Ignoring invalid color for '{self.key}': {raw!r}")
            return _REJECTED
        return normalize_hex(raw)  # type: ignore[arg-type]


class RangeControl(Control):
    """Bounded slider; every emitted value lies within [min, max]."""

    descriptor: RangeField

    def __init__(self, descriptor: RangeField, value: ConfigValue, on_change: ChangeCallback) -> None:
        super().__init__(descriptor, value, on_change)
        # Programmatic values are clamped before display
        number = self._to_number(value)
        self._value = descriptor.clamp(number) if number is not None else descriptor.default

    @property
    def min(self) -> int | float:
        return self.descriptor.min

    @property
    def max(self) -> int | float:
        return self.descriptor.max

    @property
    def step(self) -> int | float:
        return self.descriptor.step

    def _to_number(self, raw: object) -> int | float | None:
        if isinstance(raw, bool):
            return None
        if isinstance(raw, (int, float)):
            return raw
        try:
            number = float(str(raw).strip())
        except ValueError:
            return None
        if number.is_integer() and all(
            isinstance(v, int) for v in (self.descriptor.min, self.descriptor.max, self.descriptor.default)
        ):
            return int(number)
        return number

    def coerce(self, raw: object) -> object:
        number = self._to_number(raw)
        if number is None:
            logger.warning(f"Ignoring non-numeric value for '{self.key}': {raw!r}")
            return _REJECTED
        return self.descriptor.clamp(number)


class ChoiceControl(Control):
    """Selector populated from the field's options; emits the option id."""

    descriptor: ChoiceField

    @property
    def options(self):
        return self.descriptor.options

    @property
    def selected_label(self) -> str:
        option = self.descriptor.get_option(str(self._value))
        return option.label if option else "Select..."

    def coerce(self, raw: object) -> object:
        if raw not in self.descriptor.option_ids():
            logger.warning(f"Ignoring unknown option for '{self.key}': {raw!r}")
            return _REJECTED
        return raw


class FileControl(Control):
    """File picker; the selected file is emitted as a base64 data URI."""

    descriptor: FileField

    @property
    def status(self) -> str:
        """Either "Uploaded" (a data URI is stored) or "Original"."""
        if isinstance(self._value, str) and self._value.startswith("data:"):
            return "Uploaded"
        return "Original"

    def accepts(self, mime_type: str | None) -> bool:
        """Check a MIME type against the field's accept filter."""
        accepted = self.descriptor.accepted_types()
        if not accepted:
            return True
        if mime_type is None:
            return False
        mime_type = mime_type.lower()
        for pattern in accepted:
            if pattern.endswith("/*") and mime_type.startswith(pattern[:-1]):
                return True
            if pattern == mime_type:
                return True
        return False

    def coerce(self, raw: object) -> object:
        if raw is None or raw == "":
            return _REJECTED
        path = Path(str(raw)).expanduser()
        mime_type, _ = mimetypes.guess_type(path.name)
        if not self.accepts(mime_type):
            logger.warning(f"Ignoring '{path.name}' for '{self.key}': {mime_type} not in {self.descriptor.accept}")
            return _REJECTED
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.warning(f"Could not read '{path}' for '{self.key}': {e}")
            return _REJECTED
        encoded = base64.b64encode(data).decode("ascii")
        return f"data:{mime_type or 'application/octet-stream'};base64,{encoded}"


# Registry of control classes by field kind
CONTROL_TYPES: dict[str, Type[Control]] = {
    "text": TextControl,
    "color": ColorControl,
    "range": RangeControl,
    "choice": ChoiceControl,
    "file": FileControl,
}


class ConfigForm:
    """
    Editable form generated from a schema.

    Controls are produced in schema order. Edits are reported through
    ``on_change``; the owner applies them to its config map and calls
    ``refresh`` with the result.
    """

    def __init__(self, schema: Schema, config, on_change: ChangeCallback) -> None:
        """
        Initialize form.

        Args:
            schema: Schema describing the fields.
            config: Current config map (any mapping of key to value).
            on_change: Callback invoked with (key, new_value) on every edit.
        """
        self.schema = schema
        self._on_change = on_change
        self.controls: list[Control] = []
        self.refresh(config)

    def refresh(self, config) -> None:
        """Rebuild controls from a new config map."""
        self.controls = [
            CONTROL_TYPES[descriptor.kind](
                descriptor, config.get(descriptor.key, descriptor.default), self._on_change
            )
            for descriptor in self.schema.fields
        ]

    def __iter__(self):
        return iter(self.controls)

    def __len__(self) -> int:
        return len(self.controls)

    def control(self, key: str) -> Control:
        """
        Get the control for a field.

        Raises:
            KeyError: If the form has no such field.
        """
        for control in self.controls:
            if control.key == key:
                return control
        raise KeyError(key)

    def modified_keys(self) -> list[str]:
        """Keys whose live value differs from the default (reset affordance shown)."""
        return [control.key for control in self.controls if control.is_modified]
