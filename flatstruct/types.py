from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pydantic_core import to_json

from .extract import deref
from .refs import Reference


class Tag:
    """ Serialization tag: "name", "name,opt1,opt2" or ",opt1" """
    def __init__(self, tag: str):
        self.tag = tag

    def __repr__(self) -> str:
        return f"Tag({self.tag!r})"


class Embedded:
    """ Promote the field's own fields into the parent, with no path segment """
    def __repr__(self) -> str:
        return "Embedded()"


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    exported: bool = True
    embedded: bool = False
    tag: Optional[str] = None
    excluded: bool = False
    # declared type, decides the zero value for omitempty
    annotation: Any = field(default=None, compare=False)


class FlatMap(Dict[str, Reference]):
    """Dotted path -> live reference into the flattened value.

    Built once by flatten(); every read goes through the references, so the
    mapping reflects later writes to the flattened fields.

    A reference is bound to the object that owned the field at flatten()
    time. Replacing a whole sub-object (shape.point = Point(...)) leaves the
    old references reading the old object; flatten again after doing that.
    """

    def get_value(self, key: str) -> Any:
        return self[key].get()

    def set_value(self, key: str, value: Any) -> None:
        self[key].set(value)

    def snapshot(self) -> dict[str, Any]:
        return {key: deref(ref.get()) for key, ref in self.items()}

    def dump_json(self, **kwargs: Any) -> bytes:
        return to_json(self.snapshot(), **kwargs)
