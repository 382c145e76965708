import pytest

from geomember import (
    CoordinateShapeError,
    DecodeError,
    FieldTypeError,
    InvalidNestingError,
    MalformedEncodingError,
    MemberKind,
    MissingFieldError,
    NestingDepthError,
    PropertyTypeError,
    UnknownTypeError,
)
from geomember._errors import at


@pytest.mark.parametrize(
    "cls",
    [
        MalformedEncodingError,
        MissingFieldError,
        UnknownTypeError,
        CoordinateShapeError,
        InvalidNestingError,
        PropertyTypeError,
        FieldTypeError,
        NestingDepthError,
    ],
)
def test_hierarchy(cls):
    assert issubclass(cls, DecodeError)
    assert issubclass(cls, ValueError)


def test_root_error_has_no_location():
    err = MissingFieldError("type")
    assert err.path == "$"
    assert str(err) == "Object missing required field `type`"
    assert err.parent_type is None
    assert err.index is None


def test_at_prefixes_path():
    with pytest.raises(MissingFieldError) as rec:
        with at("features", 3):
            with at("geometry"):
                raise MissingFieldError("coordinates")
    assert rec.value.path == "$.features[3].geometry"
    assert str(rec.value) == (
        "Object missing required field `coordinates` - at `$.features[3].geometry`"
    )


def test_at_ignores_other_errors():
    with pytest.raises(KeyError):
        with at("x"):
            raise KeyError("x")


def test_parent_type_innermost_wins():
    err = UnknownTypeError("point")
    err._set_parent("Feature")
    err._set_parent("FeatureCollection")
    assert err.parent_type == "Feature"


def test_messages():
    assert str(UnknownTypeError("point")) == "Invalid GeoJSON type 'point'"
    assert str(FieldTypeError("features", "array", "null")) == "Expected `array`, got `null`"
    assert str(PropertyTypeError("n", "int")) == "Expected `str` for property 'n', got `int`"
    err = InvalidNestingError(MemberKind.GEOMETRY, MemberKind.FEATURE, "Feature")
    assert str(err) == "Expected a `Geometry` member, got `Feature` (Feature)"


def test_nesting_depth_message():
    err = NestingDepthError(64)
    assert err.max_depth == 64
    assert str(err) == "Members are nested deeper than the maximum of 64"
    err = NestingDepthError()
    assert err.max_depth is None
    assert str(err) == "Members are nested too deeply to decode"


def test_coordinate_shape_message():
    err = CoordinateShapeError("Point", "[1, 2, 3]", "Expected `array` of length 2, got 3")
    assert str(err) == (
        "Expected `array` of length 2, got 3 in `Point` coordinates [1, 2, 3]"
    )
    err = CoordinateShapeError("Point", "", "Oh no!")
    assert str(err) == "Oh no! in `Point` coordinates"
