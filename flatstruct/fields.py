import dataclasses
import functools
import logging
import types
import typing
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel

from .config import DEFAULT_CONFIG, FlattenConfig
from .errors import CyclicValueError
from .extract import is_composite
from .types import Embedded, FieldDescriptor, Tag

logger = logging.getLogger(__name__)


def parse_tag(tag: str) -> Tuple[str, List[str]]:
    """Split a tag into its override name and option list."""
    name, _, opts = tag.partition(",")
    return name, [opt.strip() for opt in opts.split(",") if opt.strip()]


def read_markers(metadata: typing.Iterable[Any]) -> Tuple[Optional[str], bool]:
    tag = None
    embedded = False
    for meta in metadata:
        if isinstance(meta, Tag):
            tag = meta.tag
        elif isinstance(meta, Embedded):
            embedded = True
    return tag, embedded


@functools.lru_cache(maxsize=256)
def _dataclass_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        # unresolvable annotation, fall back to the raw field.type values
        logger.debug(f"Cannot resolve type hints of {cls.__name__}: {e}")
        return {}


def describe_fields(value: Any, config: FlattenConfig = DEFAULT_CONFIG) -> List[FieldDescriptor]:
    """Field descriptors of a model or dataclass instance, in declaration order."""
    if isinstance(value, BaseModel):
        descriptors = []
        for name, field in type(value).model_fields.items():
            # Annotated[...] extras end up in field.metadata
            tag, embedded = read_markers(field.metadata)
            descriptors.append(FieldDescriptor(
                name=name,
                exported=not name.startswith("_"),
                embedded=embedded,
                tag=tag,
                excluded=field.exclude is True,
                annotation=field.annotation,
            ))
        return descriptors

    hints = _dataclass_hints(type(value))
    descriptors = []
    for field in dataclasses.fields(value):
        annotation = hints.get(field.name, field.type)
        tag, embedded = read_markers(getattr(annotation, "__metadata__", ()))
        if tag is None:
            tag = field.metadata.get(config.tag_key)
        descriptors.append(FieldDescriptor(
            name=field.name,
            exported=not field.name.startswith("_"),
            embedded=embedded or bool(field.metadata.get("embedded", False)),
            tag=tag,
            annotation=annotation,
        ))
    return descriptors


def _field_values(value: Any) -> List[Tuple[Any, Any]]:
    """(value, declared type) of every field of a composite, private ones included."""
    if isinstance(value, BaseModel):
        pairs = [(getattr(value, name), field.annotation) for name, field in type(value).model_fields.items()]
        return pairs + [(v, None) for v in (value.__pydantic_private__ or {}).values()]
    hints = _dataclass_hints(type(value))
    return [(getattr(value, field.name), hints.get(field.name, field.type)) for field in dataclasses.fields(value)]


def _nullable(annotation: Any) -> bool:
    """True when the declared type's default value is None."""
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return _nullable(typing.get_args(annotation)[0])
    if annotation is Any or annotation is object or annotation is type(None):
        return True
    if origin is typing.Union or origin is types.UnionType:
        return type(None) in typing.get_args(annotation)
    return False


def is_zero(value: Any, annotation: Any = None, active: Tuple[Any, ...] = ()) -> bool:
    """True when value equals the default value of its declared type.

    Optional, Any and object fields default to None, so only None is zero for
    them. Otherwise a composite is zero when all of its fields are, and
    anything else is compared with what its type builds when called with no
    arguments. Without an annotation the runtime type stands in.
    """
    if value is None:
        return True
    if _nullable(annotation):
        return False
    if is_composite(value):
        if any(parent is value for parent in active):
            raise CyclicValueError("", value)
        active = active + (value,)
        return all(is_zero(v, a, active) for v, a in _field_values(value))
    try:
        zero = type(value)()
    except (TypeError, ValueError):
        return False
    return value == zero


def resolve_key(field: FieldDescriptor, value: Any, config: FlattenConfig = DEFAULT_CONFIG) -> Tuple[str, bool, bool]:
    """Work out (key, skip, promoted) for a field holding value.

    An explicit tag name always wins over embedding. Without one, an embedded
    field is promoted and its key is irrelevant.
    """
    if field.excluded:
        return "", True, False

    if field.tag:
        name, opts = parse_tag(field.tag)
        if name == "-":
            return "", True, False
        if config.omit_option in opts and is_zero(value, field.annotation):
            return "", True, False
        if name:
            return name, False, False

    if field.embedded:
        return "", False, True
    return field.name, False, False
