import logging
from typing import Any, Dict, List, Literal, Optional, Union

import msgspec
from msgspec import UNSET

from ._errors import (
    DecodeError,
    FieldTypeError,
    InvalidNestingError,
    MalformedEncodingError,
    MissingFieldError,
    NestingDepthError,
    PropertyTypeError,
    at,
)
from .coordinates import decode_coordinates
from .kinds import MemberKind, classify
from .structs import (
    MEMBER_TYPES,
    Feature,
    FeatureCollection,
    GeometryCollection,
    Member,
)

__all__ = ("Decoder", "decode_member", "decode_members", "encode")

logger = logging.getLogger(__name__)


def __dir__():
    return __all__


_ABSENT = msgspec.Raw()


class _Envelope(msgspec.Struct):
    """First pass over a member object.

    Everything but ``type`` and ``id`` is kept as a raw JSON fragment, to be
    decoded once the member has been classified. Unknown fields (``bbox``,
    foreign members) are ignored.
    """

    type: Any = UNSET
    id: Any = UNSET
    coordinates: msgspec.Raw = _ABSENT
    geometries: msgspec.Raw = _ABSENT
    geometry: msgspec.Raw = _ABSENT
    properties: msgspec.Raw = _ABSENT
    features: msgspec.Raw = _ABSENT


_raw_decoder = msgspec.json.Decoder(msgspec.Raw)
_envelope_decoder = msgspec.json.Decoder(_Envelope)
_array_decoder = msgspec.json.Decoder(List[msgspec.Raw])
_properties_decoder = msgspec.json.Decoder(Optional[Dict[str, msgspec.Raw]])
_str_decoder = msgspec.json.Decoder(str)
_any_decoder = msgspec.json.Decoder()
_encoder = msgspec.json.Encoder()

_RAW_TYPES = {
    b"{": "object",
    b"[": "array",
    b'"': "str",
    b"t": "bool",
    b"f": "bool",
    b"n": "null",
}


def _raw_type(raw):
    """The JSON type name of a raw fragment, in msgspec's vocabulary"""
    return _RAW_TYPES.get(bytes(raw)[:1], "number")


def _value_type(obj):
    if obj is None:
        return "null"
    if isinstance(obj, dict):
        return "object"
    if isinstance(obj, list):
        return "array"
    return type(obj).__name__


def _is_null(raw):
    return len(raw) == 4 and bytes(raw) == b"null"


def _decode(decoder, raw):
    # msgspec raises RecursionError once its own nesting limit is hit
    try:
        return decoder.decode(raw)
    except RecursionError:
        raise NestingDepthError() from None


def _parse(buf):
    try:
        return _decode(_raw_decoder, buf)
    except msgspec.DecodeError as exc:
        raise MalformedEncodingError(str(exc)) from exc


class Decoder(msgspec.Struct, frozen=True, kw_only=True):
    """A GeoJSON member decoder.

    Decoders are immutable and may be shared between threads.

    Parameters
    ----------
    strict : bool, optional
        Whether to also enforce the structural rules GeoJSON places on
        coordinates: lines need at least 2 positions, rings at least 4 with
        the first equal to the last. Defaults to False.
    properties : {'strict', 'permissive'}, optional
        How to handle non-string property values. ``'strict'`` (the default)
        raises a `PropertyTypeError`. ``'permissive'`` keeps numbers,
        booleans and null as their original JSON text (``1.5`` becomes
        ``"1.5"``, ``1e400`` stays ``"1e400"``); arrays and objects still
        raise.
    allow_null_geometry : bool, optional
        Whether a Feature may carry ``"geometry": null``, decoded as
        ``None``. By default a null geometry is treated as missing.
    max_depth : int, optional
        The deepest a member may be nested below the top-level one. A
        Feature's geometry or a collection's element is one level below its
        parent. Deeper input raises a `NestingDepthError`. Defaults to 64.
    """

    strict: bool = False
    properties: Literal["strict", "permissive"] = "strict"
    allow_null_geometry: bool = False
    max_depth: int = 64

    def __post_init__(self):
        if self.properties not in ("strict", "permissive"):
            raise ValueError(
                "`properties` must be 'strict' or 'permissive', "
                f"got {self.properties!r}"
            )
        if (
            isinstance(self.max_depth, bool)
            or not isinstance(self.max_depth, int)
            or self.max_depth < 0
        ):
            raise ValueError(
                f"`max_depth` must be a non-negative int, got {self.max_depth!r}"
            )

    def decode(self, buf: Union[bytes, str]) -> Member:
        """Decode a single GeoJSON member.

        Parameters
        ----------
        buf : bytes-like or str
            The JSON text of one GeoJSON object.

        Returns
        -------
        member : Member
            A Geometry, Feature, or FeatureCollection struct.

        Raises
        ------
        DecodeError
            Or one of its subclasses, if the text is malformed or doesn't
            describe a valid member.
        """
        raw = _parse(buf)
        try:
            return self._decode_member(raw)
        except RecursionError:
            raise NestingDepthError() from None

    def decode_members(self, buf: Union[bytes, str]) -> List[Member]:
        """Decode a JSON array of GeoJSON members.

        Elements are decoded in order, and the first failure aborts the whole
        batch. The raised error has ``index`` set to the position of the
        failing element, and its path starts with ``$[index]``.
        """
        raw = _parse(buf)
        try:
            raws = _decode(_array_decoder, raw)
        except msgspec.ValidationError:
            raise FieldTypeError(None, "array", _raw_type(raw)) from None

        logger.debug("Decoding %d members", len(raws))
        out = []
        for i, item in enumerate(raws):
            try:
                with at(i):
                    try:
                        out.append(self._decode_member(item))
                    except RecursionError:
                        raise NestingDepthError() from None
            except DecodeError as exc:
                exc.index = i
                logger.debug("Member %d failed to decode: %s", i, exc)
                raise
        return out

    def _decode_member(self, raw, expected=None, depth=0):
        if depth > self.max_depth:
            raise NestingDepthError(self.max_depth)
        try:
            env = _decode(_envelope_decoder, raw)
        except msgspec.ValidationError:
            raise FieldTypeError(None, "object", _raw_type(raw)) from None

        if env.type is UNSET:
            raise MissingFieldError("type")
        with at("type"):
            cls = classify(env.type)

        # Nesting is checked before descending, so a misplaced member is
        # rejected no matter how deep its own content goes.
        if expected is not None and cls.kind is not expected:
            raise InvalidNestingError(expected, cls.kind, cls.type)

        try:
            if cls.kind is MemberKind.GEOMETRY:
                return self._decode_geometry(cls.type, env, depth)
            elif cls.kind is MemberKind.FEATURE:
                return self._decode_feature(env, depth)
            else:
                return self._decode_feature_collection(env, depth)
        except DecodeError as exc:
            exc._set_parent(cls.type)
            raise

    def _decode_geometry(self, type_string, env, depth):
        if type_string == "GeometryCollection":
            geometries = self._decode_children(
                env.geometries, "geometries", MemberKind.GEOMETRY, depth
            )
            return GeometryCollection(geometries)

        if env.coordinates is _ABSENT:
            raise MissingFieldError("coordinates")
        with at("coordinates"):
            coordinates = decode_coordinates(
                type_string, env.coordinates, strict=self.strict
            )
        return MEMBER_TYPES[type_string](coordinates)

    def _decode_feature(self, env, depth):
        if env.geometry is _ABSENT:
            raise MissingFieldError("geometry")
        if _is_null(env.geometry):
            if not self.allow_null_geometry:
                raise MissingFieldError("geometry")
            geometry = None
        else:
            with at("geometry"):
                geometry = self._decode_member(
                    env.geometry, MemberKind.GEOMETRY, depth + 1
                )

        if env.properties is _ABSENT:
            properties = {}
        else:
            with at("properties"):
                properties = self._decode_properties(env.properties)

        if env.id is UNSET or env.id is None:
            return Feature(geometry, properties)
        if isinstance(env.id, bool) or not isinstance(env.id, (str, int)):
            with at("id"):
                raise FieldTypeError("id", "str | int", _value_type(env.id))
        return Feature(geometry, properties, env.id)

    def _decode_properties(self, raw):
        try:
            obj = _decode(_properties_decoder, raw)
        except msgspec.ValidationError:
            raise FieldTypeError(
                "properties", "object | null", _raw_type(raw)
            ) from None
        if obj is None:
            return {}

        out = {}
        for key, value in obj.items():
            found = _raw_type(value)
            if found == "str":
                out[key] = _decode(_str_decoder, value)
            elif self.properties == "permissive" and found not in ("object", "array"):
                out[key] = bytes(value).decode("utf-8")
            else:
                if found == "number":
                    found = _value_type(_decode(_any_decoder, value))
                with at(key):
                    raise PropertyTypeError(key, found)
        return out

    def _decode_feature_collection(self, env, depth):
        features = self._decode_children(
            env.features, "features", MemberKind.FEATURE, depth
        )
        return FeatureCollection(features)

    def _decode_children(self, raw, field, expected, depth):
        if raw is _ABSENT:
            raise MissingFieldError(field)
        with at(field):
            try:
                raws = _decode(_array_decoder, raw)
            except msgspec.ValidationError:
                raise FieldTypeError(field, "array", _raw_type(raw)) from None
        out = []
        for i, item in enumerate(raws):
            with at(field, i):
                out.append(self._decode_member(item, expected, depth + 1))
        return out


_default_decoder = Decoder()


def decode_member(buf: Union[bytes, str], **options: Any) -> Member:
    """Decode a single GeoJSON member.

    Parameters
    ----------
    buf : bytes-like or str
        The JSON text of one GeoJSON object.
    **options
        Options forwarded to `Decoder`.

    Returns
    -------
    member : Member

    See Also
    --------
    Decoder.decode
    """
    decoder = Decoder(**options) if options else _default_decoder
    return decoder.decode(buf)


def decode_members(buf: Union[bytes, str], **options: Any) -> List[Member]:
    """Decode a JSON array of GeoJSON members, failing on the first bad
    element.

    See Also
    --------
    Decoder.decode_members
    """
    decoder = Decoder(**options) if options else _default_decoder
    return decoder.decode_members(buf)


def encode(member: Member) -> bytes:
    """Serialize a member as GeoJSON text.

    Decoding the output with a `Decoder` configured like the one that
    produced ``member`` gives back an equal member. A Feature with a null
    geometry only decodes again with ``allow_null_geometry=True``.
    """
    return _encoder.encode(member)
