import dataclasses
import weakref
from typing import Any

from pydantic import BaseModel, RootModel

from .errors import CyclicValueError
from .refs import Reference

# What a dead weak reference unwraps to
ABSENT = object()


def is_composite(value: Any) -> bool:
    """True for model and dataclass instances, the values flatten() descends into"""
    if isinstance(value, RootModel):
        return False
    if isinstance(value, BaseModel):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def unwrap(value: Any) -> tuple[Any, bool]:
    """Peel one layer of indirection off value.

    Returns the inner value and True, or value itself and False when value is
    not a reference, a weak reference or a RootModel box.
    """
    if isinstance(value, Reference):
        return value.get(), True
    if isinstance(value, weakref.ref):
        target = value()
        return (ABSENT if target is None else target), True
    if isinstance(value, RootModel):
        return value.root, True
    return value, False


def extract(value: Any, fallback: Any) -> Any:
    """Unwrap value until a composite shows up.

    Anything that does not end in a composite yields fallback, the value the
    caller started from, not whatever layer the unwrapping stopped at.
    """
    seen: list[Any] = []
    while not is_composite(value):
        if any(v is value for v in seen):
            raise CyclicValueError("", value)
        seen.append(value)
        value, unwrapped = unwrap(value)
        if not unwrapped:
            return fallback
    return value


def deref(value: Any) -> Any:
    seen: list[Any] = []
    while True:
        if any(v is value for v in seen):
            raise CyclicValueError("", value)
        seen.append(value)
        inner, unwrapped = unwrap(value)
        if not unwrapped:
            return value
        if inner is ABSENT:
            return None
        value = inner
