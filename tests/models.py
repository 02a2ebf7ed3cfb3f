from dataclasses import dataclass, field
from typing import Annotated, Any, Optional

from pydantic import BaseModel, Field, PrivateAttr

from flatstruct import Embedded, Tag


class Point(BaseModel):
    x: int
    y: int


class Shape(BaseModel):
    point: Annotated[Point, Embedded(), Tag("pt")]
    color: str


class Inner(BaseModel):
    n: int


class Outer(BaseModel):
    inner: Annotated[Inner, Embedded()]
    label: str


class TaggedOuter(BaseModel):
    inner: Annotated[Inner, Embedded(), Tag("pt")]
    label: str


class Counter(BaseModel):
    count: Annotated[int, Tag("count,omitempty")] = 0
    secret: Annotated[str, Tag("-")] = "hidden"
    internal: int = Field(default=0, exclude=True)
    _cache: dict = PrivateAttr(default_factory=dict)


class Empty(BaseModel):
    pass


class WithEmpty(BaseModel):
    empty: Empty
    name: str


class Maybe(BaseModel):
    limit: Optional[int] = None
    origin: Optional[Point] = None


@dataclass
class DPoint:
    x: int
    y: int


@dataclass
class DShape:
    point: DPoint = field(metadata={"json": "pt", "embedded": True})
    color: str = ""
    count: int = field(default=0, metadata={"json": "count,omitempty"})
    _secret: str = "hidden"


@dataclass
class DOuter:
    inner: Annotated[DPoint, Embedded()]
    label: Annotated[str, Tag("name")] = ""


@dataclass
class Holder:
    target: Any = None
    label: str = ""


@dataclass
class Node:
    name: str
    child: Optional["Node"] = None


class Opt(BaseModel):
    count: Annotated[Optional[int], Tag("count,omitempty")] = None
    origin: Annotated[Optional[Point], Tag("origin,omitempty")] = None


class Wrap(BaseModel):
    outer: Outer
    tagged: TaggedOuter


@dataclass
class Ring:
    name: str
    next: "Ring"


@dataclass
class RingHolder:
    ring: Annotated[Ring, Tag("ring,omitempty")]


@dataclass
class Link:
    name: str
    child: Annotated[Any, Tag("child,omitempty")] = None
