"""
Response shaping.

A ``Shape`` is an explicit allow-list: an ordered mapping of output field
name to ``ShapeField``. ``shape()`` builds the outgoing JSON-ready dict from
an internal record and returns nothing the shape does not declare.

Records may be mappings or objects (Beanie documents, dataclasses); nested
shapes are applied to related records and lists are shaped element-wise.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

Transform = Callable[[Any], Any]


@dataclass(frozen=True)
class ShapeField:
    """
    One output field.

    Attributes:
        source: Attribute or key read from the record. Defaults to the output name.
        transform: Applied to non-null values after reading.
        shape: Nested shape applied to the related record.
        many: Apply ``shape`` to every element of a list value.
        default: Used when the record has no value.
    """

    source: Optional[str] = None
    transform: Optional[Transform] = None
    shape: Optional["Shape"] = None
    many: bool = False
    default: Any = None


class Shape:
    """Named, ordered allow-list of output fields."""

    def __init__(self, name: str, fields: Mapping[str, ShapeField]):
        self.name = name
        self.fields: Dict[str, ShapeField] = dict(fields)

    @property
    def field_names(self) -> frozenset:
        return frozenset(self.fields)

    def __call__(self, record: Any, extra: Optional[Mapping[str, Any]] = None) -> Optional[Dict[str, Any]]:
        return shape(record, self, extra)

    def __repr__(self) -> str:
        return f"Shape({self.name!r}, fields={list(self.fields)})"


_MISSING = object()


def _read(record: Any, key: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(key, _MISSING)
    return getattr(record, key, _MISSING)


def shape(
    record: Any,
    descriptor: Shape,
    extra: Optional[Mapping[str, Any]] = None,
) -> Optional[Dict[str, Any]]:
    """
    Map ``record`` onto ``descriptor``.

    ``extra`` supplies values computed by the handler (for example a favorite
    flag); they only land in the output when the shape declares the field.
    Returns None for a None record.
    """
    if record is None:
        return None

    overrides = extra or {}
    output: Dict[str, Any] = {}
    for name, declared in descriptor.fields.items():
        if name in overrides:
            value = overrides[name]
        else:
            value = _read(record, declared.source or name)
            if value is _MISSING:
                value = declared.default
        output[name] = _shape_value(value, declared)
    return output


def shape_many(
    records: Iterable[Any],
    descriptor: Shape,
    extra: Optional[Callable[[Any], Mapping[str, Any]]] = None,
) -> list:
    """Shape every record; ``extra`` is called per record when given."""
    return [shape(record, descriptor, extra(record) if extra else None) for record in records]


def _shape_value(value: Any, declared: ShapeField) -> Any:
    if value is None:
        return None
    if declared.shape is not None:
        if declared.many:
            return [shape(item, declared.shape) for item in value]
        return shape(value, declared.shape)
    if declared.transform is not None:
        if declared.many:
            return [declared.transform(item) for item in value]
        return declared.transform(value)
    return value


# Common transforms


def as_str(value: Any) -> str:
    return str(value)


def as_iso(value: Any) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def as_enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value
