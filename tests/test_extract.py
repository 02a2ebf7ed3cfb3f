import gc
import weakref

import pytest
from pydantic import RootModel

from flatstruct import CyclicValueError, FieldRef, ValueRef
from flatstruct.extract import deref, extract, is_composite
from tests.models import DPoint, Holder, Point


def _dead_ref():
    point = Point(x=1, y=2)
    ref = weakref.ref(point)
    del point
    gc.collect()
    return ref


@pytest.mark.parametrize(
    "value,expected",
    [
        (Point(x=1, y=2), True),
        (DPoint(x=1, y=2), True),
        (DPoint, False),
        (Point, False),
        (RootModel[int](3), False),
        (3, False),
        ("x", False),
        ([Point(x=1, y=2)], False),
        ({"x": 1}, False),
        (None, False),
    ],
)
def test_is_composite(value, expected):
    assert is_composite(value) is expected


def test_extract_composite_unchanged():
    point = Point(x=1, y=2)
    assert extract(point, point) is point


def test_extract_leaf_returns_fallback():
    assert extract(3, "fallback") == "fallback"


def test_extract_through_references():
    point = Point(x=1, y=2)
    holder = Holder(target=point)
    ref = FieldRef(holder, "target")
    assert extract(ref, ref) is point
    assert extract(weakref.ref(point), None) is point
    assert extract(ValueRef(weakref.ref(point)), None) is point


def test_extract_through_box():
    point = Point(x=1, y=2)
    box = RootModel[Point](point)
    assert extract(box, box) is box.root


def test_extract_boxed_leaf_returns_original():
    box = RootModel[int](3)
    assert extract(box, box) is box


def test_extract_dead_reference_returns_original():
    ref = _dead_ref()
    assert extract(ref, ref) is ref


def test_extract_reference_cycle():
    holder = Holder()
    holder.target = FieldRef(holder, "target")
    with pytest.raises(CyclicValueError):
        extract(holder.target, holder.target)


def test_deref():
    point = Point(x=1, y=2)
    holder = Holder(target=RootModel[int](7))
    assert deref(FieldRef(holder, "target")) == 7
    assert deref(weakref.ref(point)) is point
    assert deref(_dead_ref()) is None
    assert deref("plain") == "plain"
