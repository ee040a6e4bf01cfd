"""Config maps: current values for one schema instance."""

import logging
from collections.abc import Mapping
from typing import Iterator

from postergen.schema import RangeField, Schema, defaults
from postergen.types import ConfigValue

logger = logging.getLogger(__name__)


class UnknownKeyError(KeyError):
    """Raised when updating a key that is not part of the map's schema."""

    def __init__(self, key: str, schema_name: str) -> None:
        super().__init__(key)
        self.key = key
        self.schema_name = schema_name

    def __str__(self) -> str:
        return f"'{self.key}' is not a field of the '{self.schema_name}' schema"


class ConfigMap(Mapping):
    """
    Immutable key/value assignment for one schema.

    Every operation returns a new map; the map remembers the schema it was
    created from so updates can be checked against it.
    """

    __slots__ = ("_schema", "_values")

    def __init__(self, schema: Schema, values: Mapping[str, ConfigValue]) -> None:
        self._schema = schema
        self._values = dict(values)

    @property
    def schema(self) -> Schema:
        """Schema this map was created from."""
        return self._schema

    def __getitem__(self, key: str) -> ConfigValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ConfigMap):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(sorted((k, repr(v)) for k, v in self._values.items())))

    def __repr__(self) -> str:
        return f"ConfigMap({self._schema.name!r}, {self._values!r})"

    def to_dict(self) -> dict[str, ConfigValue]:
        """Plain dict copy of the values."""
        return dict(self._values)


def initialize(schema: Schema) -> ConfigMap:
    """Create a config map holding every field's default."""
    return ConfigMap(schema, defaults(schema))


def _coerce(schema: Schema, key: str, value: ConfigValue) -> ConfigValue:
    descriptor = schema.get(key)
    if descriptor is None:
        raise UnknownKeyError(key, schema.name)
    if isinstance(descriptor, RangeField) and isinstance(value, (int, float)) and not isinstance(value, bool):
        clamped = descriptor.clamp(value)
        if clamped != value:
            logger.debug(f"Clamped {key}={value} into [{descriptor.min}, {descriptor.max}]")
        return clamped
    return value


def update(config: ConfigMap, key: str, value: ConfigValue) -> ConfigMap:
    """
    Return a new map equal to ``config`` except ``key -> value``.

    Numeric range values are clamped into the field's bounds.

    Raises:
        UnknownKeyError: If ``key`` is not a field of the map's schema.
    """
    values = config.to_dict()
    values[key] = _coerce(config.schema, key, value)
    return ConfigMap(config.schema, values)


def merge(config: ConfigMap, updates: Mapping[str, ConfigValue]) -> ConfigMap:
    """
    Apply several updates at once.

    Raises:
        UnknownKeyError: If any key is not a field of the map's schema.
    """
    values = config.to_dict()
    for key, value in updates.items():
        values[key] = _coerce(config.schema, key, value)
    return ConfigMap(config.schema, values)


def reset(config: ConfigMap, key: str, schema: Schema | None = None) -> ConfigMap:
    """
    Set ``key`` back to the schema's declared default.

    Args:
        config: Current config map.
        key: Field to reset.
        schema: Schema to take the default from (defaults to the map's own).

    Raises:
        UnknownKeyError: If ``key`` is not a field of the schema.
    """
    schema = schema or config.schema
    descriptor = schema.get(key)
    if descriptor is None:
        raise UnknownKeyError(key, schema.name)
    values = config.to_dict()
    values[key] = descriptor.default
    return ConfigMap(config.schema, values)
