from typing import ClassVar, Dict, List, Optional, Union

import msgspec
from msgspec import UNSET, UnsetType

from .coordinates import Position
from .kinds import MemberKind

__all__ = (
    "Point",
    "MultiPoint",
    "LineString",
    "MultiLineString",
    "Polygon",
    "MultiPolygon",
    "GeometryCollection",
    "Geometry",
    "Feature",
    "FeatureCollection",
    "Member",
    "MEMBER_TYPES",
)


def __dir__():
    return __all__


class _Member(msgspec.Struct, frozen=True, tag=True):
    """Common base of all decoded members.

    Every subclass is tagged with its own class name, so the ``type`` field
    of the GeoJSON object is written (and read) by msgspec itself.
    """

    kind: ClassVar[MemberKind]

    @property
    def type(self) -> str:
        """The GeoJSON ``type`` discriminator of this member"""
        return self.__struct_config__.tag


class _Geometry(_Member, frozen=True):
    kind = MemberKind.GEOMETRY


class Point(_Geometry, frozen=True):
    coordinates: Position


class MultiPoint(_Geometry, frozen=True):
    coordinates: List[Position]


class LineString(_Geometry, frozen=True):
    coordinates: List[Position]


class MultiLineString(_Geometry, frozen=True):
    coordinates: List[List[Position]]


class Polygon(_Geometry, frozen=True):
    coordinates: List[List[Position]]


class MultiPolygon(_Geometry, frozen=True):
    coordinates: List[List[List[Position]]]


class GeometryCollection(_Geometry, frozen=True):
    geometries: List["Geometry"]


Geometry = Union[
    Point,
    MultiPoint,
    LineString,
    MultiLineString,
    Polygon,
    MultiPolygon,
    GeometryCollection,
]


class Feature(_Member, frozen=True):
    """A located (or, when ``geometry`` is None, unlocated) feature.

    Parameters
    ----------
    geometry: Geometry or None
        The feature's geometry. Never a Feature or FeatureCollection.
    properties: dict, optional
        String keys mapped to string values.
    id: str or int, optional
        The feature identifier. Left `UNSET`, and omitted when encoding, if
        the object carries none. Non-integer numbers (``1.5``) are
        rejected when decoding, though RFC 7946 allows any number.
    """

    kind = MemberKind.FEATURE

    geometry: Optional[Geometry]
    properties: Dict[str, str] = {}
    id: Union[str, int, UnsetType] = UNSET


class FeatureCollection(_Member, frozen=True):
    kind = MemberKind.FEATURE_COLLECTION

    features: List[Feature]


# A union of all 9 member types
Member = Union[Geometry, Feature, FeatureCollection]

MEMBER_TYPES = {
    cls.__struct_config__.tag: cls
    for cls in (
        Point,
        MultiPoint,
        LineString,
        MultiLineString,
        Polygon,
        MultiPolygon,
        GeometryCollection,
        Feature,
        FeatureCollection,
    )
}
