from abc import ABC, abstractmethod
from typing import Any


class Reference(ABC):
    """ Live handle on a value stored somewhere else """

    @abstractmethod
    def get(self) -> Any:
        ...

    @abstractmethod
    def set(self, value: Any) -> None:
        ...


class FieldRef(Reference):
    """Reference to one attribute of a model or dataclass instance.

    Reads and writes go straight to the owner, so the reference always sees
    the current value of the field.
    """
    __slots__ = ("owner", "name")

    def __init__(self, owner: Any, name: str):
        self.owner = owner
        self.name = name

    def get(self) -> Any:
        return getattr(self.owner, self.name)

    def set(self, value: Any) -> None:
        setattr(self.owner, self.name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldRef):
            return NotImplemented
        return self.owner is other.owner and self.name == other.name

    def __hash__(self) -> int:
        return hash((id(self.owner), self.name))

    def __repr__(self) -> str:
        return f"FieldRef({type(self.owner).__name__}.{self.name})"


class ValueRef(Reference):
    """Reference to an object reached through an indirection."""
    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = value

    def get(self) -> Any:
        return self.value

    def set(self, value: Any) -> None:
        raise TypeError(f"cannot assign through a reference to {type(self.value).__name__}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueRef):
            return NotImplemented
        return self.value is other.value

    def __hash__(self) -> int:
        return id(self.value)

    def __repr__(self) -> str:
        return f"ValueRef({self.value!r})"
