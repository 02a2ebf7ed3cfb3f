from .config import FlattenConfig
from .errors import FlattenError, InvalidInputKind, CyclicValueError
from .flat_model import FlatModel
from .flatten import flatten
from .refs import Reference, FieldRef, ValueRef
from .types import FlatMap, Tag, Embedded

__all__ = [
    "flatten",
    "FlatMap",
    "FlatModel",
    "FlattenConfig",
    "Reference",
    "FieldRef",
    "ValueRef",
    "Tag",
    "Embedded",
    "FlattenError",
    "InvalidInputKind",
    "CyclicValueError",
]
