import enum
from typing import Any

import msgspec

from ._errors import UnknownTypeError

__all__ = (
    "MemberKind",
    "Classification",
    "GEOMETRY_TYPES",
    "classify",
    "is_geometry_type",
)


def __dir__():
    return __all__


class MemberKind(enum.Enum):
    """The coarse kind of a GeoJSON member"""

    GEOMETRY = "Geometry"
    FEATURE = "Feature"
    FEATURE_COLLECTION = "FeatureCollection"


GEOMETRY_TYPES = frozenset(
    [
        "Point",
        "LineString",
        "Polygon",
        "MultiPoint",
        "MultiLineString",
        "MultiPolygon",
        "GeometryCollection",
    ]
)

_KINDS = dict.fromkeys(GEOMETRY_TYPES, MemberKind.GEOMETRY)
_KINDS["Feature"] = MemberKind.FEATURE
_KINDS["FeatureCollection"] = MemberKind.FEATURE_COLLECTION


class Classification(msgspec.Struct, frozen=True):
    """The result of classifying a ``type`` discriminator.

    Parameters
    ----------
    kind: MemberKind
        The kind the discriminator maps to.
    type: str
        The original discriminator, used to dispatch on the geometry sub-kind.
    """

    kind: MemberKind
    type: str


def classify(type_string: Any) -> Classification:
    """Classify a GeoJSON ``type`` discriminator.

    Matching is exact and case-sensitive; ``"point"`` is not ``"Point"``.

    Parameters
    ----------
    type_string : str
        The value of an object's ``type`` field.

    Returns
    -------
    classification : Classification

    Raises
    ------
    UnknownTypeError
        If ``type_string`` isn't one of the nine GeoJSON types.
    """
    try:
        kind = _KINDS[type_string]
    except (KeyError, TypeError):
        # TypeError covers unhashable values like lists or objects
        raise UnknownTypeError(type_string) from None
    return Classification(kind, type_string)


def is_geometry_type(type_string: Any) -> bool:
    """Whether ``type_string`` names one of the seven geometry types"""
    return isinstance(type_string, str) and type_string in GEOMETRY_TYPES
