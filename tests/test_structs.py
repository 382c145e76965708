import pytest

import msgspec

from geomember import (
    Feature,
    FeatureCollection,
    GeometryCollection,
    LineString,
    MemberKind,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from geomember.kinds import GEOMETRY_TYPES
from geomember.structs import MEMBER_TYPES

GEOMETRIES = [
    Point,
    MultiPoint,
    LineString,
    MultiLineString,
    Polygon,
    MultiPolygon,
    GeometryCollection,
]


@pytest.mark.parametrize("cls", GEOMETRIES)
def test_geometry_kind_and_type(cls):
    assert cls.kind is MemberKind.GEOMETRY
    assert cls.__struct_config__.tag_field == "type"
    assert cls.__struct_config__.tag == cls.__name__


def test_type_property():
    assert Point((1.0, 2.0)).type == "Point"
    assert Feature(None).type == "Feature"
    assert FeatureCollection([]).type == "FeatureCollection"


def test_kinds():
    assert Feature.kind is MemberKind.FEATURE
    assert FeatureCollection.kind is MemberKind.FEATURE_COLLECTION
    assert Feature(None).kind is MemberKind.FEATURE


def test_member_types_match_vocabulary():
    assert set(MEMBER_TYPES) == GEOMETRY_TYPES | {"Feature", "FeatureCollection"}
    geometry_names = {
        name for name, cls in MEMBER_TYPES.items() if cls.kind is MemberKind.GEOMETRY
    }
    assert geometry_names == GEOMETRY_TYPES


def test_kind_is_not_a_field():
    assert Point.__struct_fields__ == ("coordinates",)
    assert GeometryCollection.__struct_fields__ == ("geometries",)
    assert Feature.__struct_fields__ == ("geometry", "properties", "id")
    assert FeatureCollection.__struct_fields__ == ("features",)


def test_feature_defaults():
    f = Feature(Point((1.0, 2.0)))
    assert f.properties == {}
    assert f.id is msgspec.UNSET
    # Defaults aren't shared between instances
    assert Feature(None).properties is not f.properties


def test_members_are_frozen():
    p = Point((1.0, 2.0))
    with pytest.raises(AttributeError):
        p.coordinates = (3.0, 4.0)
    f = Feature(p, {"a": "b"})
    with pytest.raises(AttributeError):
        f.geometry = None


def test_equality():
    assert Point((1.0, 2.0)) == Point((1.0, 2.0))
    assert Point((1.0, 2.0)) != Point((2.0, 1.0))
    # Same coordinates, different types
    assert MultiPoint([(1.0, 2.0)]) != LineString([(1.0, 2.0)])


def test_point_hashable():
    assert hash(Point((1.0, 2.0))) == hash(Point((1.0, 2.0)))
