import re
from typing import Any, List, Tuple, Union

import msgspec

from ._errors import (
    CoordinateShapeError,
    MalformedEncodingError,
    UnknownTypeError,
    at,
)

__all__ = (
    "Position",
    "COORDINATE_SHAPES",
    "decode_coordinates",
    "check_coordinates",
)


def __dir__():
    return __all__


# A single position: longitude, latitude
Position = Tuple[float, float]

# The expected coordinate shape for every geometry type carrying
# `coordinates`. GeometryCollection carries `geometries` instead.
COORDINATE_SHAPES = {
    "Point": Position,
    "MultiPoint": List[Position],
    "LineString": List[Position],
    "MultiLineString": List[List[Position]],
    "Polygon": List[List[Position]],
    "MultiPolygon": List[List[List[Position]]],
}

_DECODERS = {
    name: msgspec.json.Decoder(shape) for name, shape in COORDINATE_SHAPES.items()
}

# msgspec appends the location of a validation error as " - at `$...`"
_LOCATION = re.compile(r"^(.*) - at `\$((?:\[\d+\])*)`$", re.DOTALL)
_INDEX = re.compile(r"\[(\d+)\]")


def _fragment_text(raw):
    if isinstance(raw, str):
        return raw
    return bytes(raw).decode("utf-8", errors="replace")


def _shape_error(type_string, fragment, exc):
    msg = str(exc)
    match = _LOCATION.match(msg)
    if match is None:
        reason, segments = msg, ()
    else:
        reason = match.group(1)
        segments = tuple(int(i) for i in _INDEX.findall(match.group(2)))
    err = CoordinateShapeError(type_string, fragment, reason)
    err._push(*segments)
    return err


def decode_coordinates(
    type_string: str, raw: Union[bytes, str], *, strict: bool = False
) -> Any:
    """Decode a raw ``coordinates`` fragment into the shape required by
    ``type_string``.

    Parameters
    ----------
    type_string : str
        A geometry type carrying coordinates (anything but
        ``GeometryCollection``).
    raw : bytes-like or str
        The raw JSON text of the ``coordinates`` value, usually a
        `msgspec.Raw`.
    strict : bool, optional
        If True, additionally enforce minimum position counts and ring
        closure. See `check_coordinates`.

    Returns
    -------
    coordinates : tuple or list
        A ``(lon, lat)`` tuple for ``Point``, nested lists of such tuples
        for the other types. Integers are converted to floats.

    Raises
    ------
    CoordinateShapeError
        If the nesting depth, the point arity, or a leaf type is wrong.
    UnknownTypeError
        If ``type_string`` has no coordinate shape.
    MalformedEncodingError
        If ``raw`` isn't valid JSON.
    """
    try:
        decoder = _DECODERS[type_string]
    except (KeyError, TypeError):
        raise UnknownTypeError(type_string) from None

    try:
        coordinates = decoder.decode(raw)
    except msgspec.ValidationError as exc:
        raise _shape_error(type_string, _fragment_text(raw), exc) from exc
    except msgspec.DecodeError as exc:
        raise MalformedEncodingError(str(exc)) from exc

    if strict:
        check_coordinates(type_string, coordinates, _fragment_text(raw))
    return coordinates


def _check_line(type_string, line, fragment):
    if len(line) < 2:
        raise CoordinateShapeError(
            type_string,
            fragment,
            f"Expected at least 2 positions in a line, got {len(line)}",
        )


def _check_polygon(type_string, rings, fragment):
    for i, ring in enumerate(rings):
        with at(i):
            if len(ring) < 4:
                raise CoordinateShapeError(
                    type_string,
                    fragment,
                    f"Expected at least 4 positions in a ring, got {len(ring)}",
                )
            if ring[0] != ring[-1]:
                raise CoordinateShapeError(
                    type_string,
                    fragment,
                    f"Ring isn't closed, {list(ring[0])} != {list(ring[-1])}",
                )


def check_coordinates(type_string: str, coordinates: Any, fragment: str = "") -> None:
    """Enforce the structural rules GeoJSON places on already decoded
    coordinates.

    - Lines (``LineString`` and each line of a ``MultiLineString``) need at
      least 2 positions.
    - Rings (each ring of a ``Polygon`` or ``MultiPolygon``) need at least
      4 positions, with the first equal to the last.

    Raises `CoordinateShapeError` on the first violation. Other types are
    accepted as is.
    """
    if type_string == "LineString":
        _check_line(type_string, coordinates, fragment)
    elif type_string == "MultiLineString":
        for i, line in enumerate(coordinates):
            with at(i):
                _check_line(type_string, line, fragment)
    elif type_string == "Polygon":
        _check_polygon(type_string, coordinates, fragment)
    elif type_string == "MultiPolygon":
        for i, polygon in enumerate(coordinates):
            with at(i):
                _check_polygon(type_string, polygon, fragment)
