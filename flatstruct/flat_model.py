import types
import typing
from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, RootModel, model_serializer, model_validator

from .config import DEFAULT_CONFIG, FlattenConfig
from .fields import read_markers, parse_tag
from .flatten import flatten
from .types import FlatMap


def nested_model_type(annotation: Any) -> Optional[type[BaseModel]]:
    """ The model class a field holds, looking through Optional and Annotated """
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return nested_model_type(typing.get_args(annotation)[0])
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return nested_model_type(args[0])
        return None
    if origin is not None:
        return None
    if isinstance(annotation, type) and issubclass(annotation, BaseModel) and not issubclass(annotation, RootModel):
        return annotation
    return None


def gather_flat(
    model: type[BaseModel],
    data: dict[str, Any],
    prefix: str = "",
    config: FlattenConfig = DEFAULT_CONFIG,
) -> dict[str, Any]:
    """Pop the dotted keys belonging to model out of data and nest them.

    This is the inverse of what flatten() does to an instance of model, minus
    omitted fields, which simply stay unset.
    """
    collected: dict[str, Any] = {}
    for name, field in model.model_fields.items():
        if field.exclude is True:
            continue
        tag, embedded = read_markers(field.metadata)
        tag_name = parse_tag(tag)[0] if tag else ""
        if tag_name == "-":
            continue
        key = tag_name or name
        promoted = embedded and not tag_name

        input_name = field.alias or name
        nested = nested_model_type(field.annotation)
        if nested is not None:
            child_prefix = prefix if promoted else prefix + key + config.separator
            sub = gather_flat(nested, data, child_prefix, config)
            if sub:
                collected[input_name] = sub
                continue
        if not promoted and prefix + key in data:
            collected[input_name] = data.pop(prefix + key)
    return collected


class FlatModel(BaseModel):
    """Model that serializes to, and validates from, its flattened form."""
    flat_config: ClassVar[FlattenConfig] = DEFAULT_CONFIG

    @model_validator(mode='before')
    @classmethod
    def _gather_flat(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        remaining = dict(data)
        collected = gather_flat(cls, remaining, config=cls.flat_config)
        return {**remaining, **collected}

    @model_serializer(mode='plain')
    def _flatten(self) -> Dict[str, Any]:
        return self.flat().snapshot()

    def flat(self) -> FlatMap:
        return flatten(self, self.flat_config)
