import pytest

from tests.models import DPoint, DShape, Point, Shape


@pytest.fixture
def shape():
    return Shape(point=Point(x=1, y=2), color="red")


@pytest.fixture
def dshape():
    return DShape(point=DPoint(x=1, y=2), color="red")
