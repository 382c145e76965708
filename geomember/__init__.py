from ._errors import (
    CoordinateShapeError,
    DecodeError,
    FieldTypeError,
    InvalidNestingError,
    MalformedEncodingError,
    MissingFieldError,
    NestingDepthError,
    PropertyTypeError,
    UnknownTypeError,
)
from .kinds import MemberKind, classify
from .coordinates import Position, decode_coordinates
from .structs import (
    Feature,
    FeatureCollection,
    Geometry,
    GeometryCollection,
    LineString,
    Member,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from .json import Decoder, decode_member, decode_members, encode

from . import coordinates, json, kinds, structs
from ._version import __version__
