"""
Field path parsing and resolution.

A field path is a dotted address into a Record using the camelCase
aliases, with numeric segments indexing into lists:
``"firstName"``, ``"address.city"``, ``"hobbies.2.name"``.
"""

from typing import Any

from pydantic import BaseModel

from form_engine.errors import FieldPathError, OutOfRangeError

PathSegment = str | int


def parse_path(path: str) -> tuple[PathSegment, ...]:
    """Split a field path into name and index segments."""
    if not isinstance(path, str) or not path:
        raise FieldPathError(str(path), "Empty field path")

    segments: list[PathSegment] = []
    for raw in path.split("."):
        if not raw:
            raise FieldPathError(path, "Empty segment in field path")
        segments.append(int(raw) if raw.isdigit() else raw)

    if isinstance(segments[0], int):
        raise FieldPathError(path, "Field path must start with a field name")
    return tuple(segments)


def format_path(*segments: PathSegment) -> str:
    """Join segments back into a dotted field path."""
    return ".".join(str(segment) for segment in segments)


def attribute_for(model: type[BaseModel], segment: str, path: str) -> str:
    """Map a path segment (the field's alias) to the model attribute name."""
    for name, info in model.model_fields.items():
        if (info.alias or name) == segment:
            return name
    raise FieldPathError(path)


def step(current: Any, segment: PathSegment, path: str) -> Any:
    """Resolve one segment against the current value."""
    if isinstance(segment, int):
        if not isinstance(current, list):
            raise FieldPathError(path, "Index applied to a non-list field")
        if segment >= len(current):
            raise OutOfRangeError(path, segment, len(current))
        return current[segment]

    if not isinstance(current, BaseModel):
        raise FieldPathError(path, "Name applied to a non-object field")
    return getattr(current, attribute_for(type(current), segment, path))


def read_path(record: BaseModel, path: str) -> Any:
    """Read the value a field path points at."""
    current: Any = record
    for segment in parse_path(path):
        current = step(current, segment, path)
    return current
