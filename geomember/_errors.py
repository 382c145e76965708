from contextlib import contextmanager

__all__ = (
    "DecodeError",
    "MalformedEncodingError",
    "MissingFieldError",
    "UnknownTypeError",
    "CoordinateShapeError",
    "InvalidNestingError",
    "PropertyTypeError",
    "FieldTypeError",
    "NestingDepthError",
)


def _truncate(text, limit=60):
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def _render_path(segments):
    parts = ["$"]
    for s in segments:
        parts.append(f"[{s}]" if isinstance(s, int) else f".{s}")
    return "".join(parts)


class DecodeError(ValueError):
    """Base class for all errors raised while decoding a GeoJSON member.

    Attributes
    ----------
    path : str
        The JSON path of the fragment that failed to decode, rooted at ``$``
        (e.g. ``$.features[3].geometry``).
    parent_type : str or None
        The ``type`` of the innermost member being decoded when the error
        occurred, if one had been classified.
    index : int or None
        For batch decoding, the index of the element that failed.
    """

    def __init__(self, msg):
        super().__init__(msg)
        self.msg = msg
        self.parent_type = None
        self.index = None
        self._segments = []

    @property
    def path(self) -> str:
        return _render_path(self._segments)

    def _push(self, *segments):
        self._segments[:0] = segments

    def _set_parent(self, type_string):
        if self.parent_type is None:
            self.parent_type = type_string

    def __str__(self):
        if self._segments:
            return f"{self.msg} - at `{self.path}`"
        return self.msg


class MalformedEncodingError(DecodeError):
    """The input is not valid JSON text"""


class MissingFieldError(DecodeError):
    """A field required for the object's kind is absent"""

    def __init__(self, field):
        super().__init__(f"Object missing required field `{field}`")
        self.field = field


class UnknownTypeError(DecodeError):
    """The ``type`` value is outside the recognized vocabulary"""

    def __init__(self, type_string):
        super().__init__(f"Invalid GeoJSON type {type_string!r}")
        self.type_string = type_string


class CoordinateShapeError(DecodeError):
    """Coordinates don't match the nesting or arity required by ``type``.

    ``fragment`` holds the full raw text of the offending ``coordinates``
    value, the message only a truncated copy.
    """

    def __init__(self, type_string, fragment, reason):
        msg = f"{reason} in `{type_string}` coordinates"
        if fragment:
            msg = f"{msg} {_truncate(fragment)}"
        super().__init__(msg)
        self.type_string = type_string
        self.fragment = fragment
        self.reason = reason


class InvalidNestingError(DecodeError):
    """A nested member resolved to a kind not allowed at its position"""

    def __init__(self, expected_kind, found_kind, found_type):
        super().__init__(
            f"Expected a `{expected_kind.value}` member, "
            f"got `{found_type}` ({found_kind.value})"
        )
        self.expected_kind = expected_kind
        self.found_kind = found_kind
        self.found_type = found_type


class PropertyTypeError(DecodeError):
    """A property value isn't representable as a string"""

    def __init__(self, key, found):
        super().__init__(f"Expected `str` for property {key!r}, got `{found}`")
        self.key = key
        self.found = found


class FieldTypeError(DecodeError):
    """A field (or the member itself, when ``field`` is None) has the wrong
    JSON type"""

    def __init__(self, field, expected, found):
        super().__init__(f"Expected `{expected}`, got `{found}`")
        self.field = field
        self.expected = expected
        self.found = found


class NestingDepthError(DecodeError):
    """Members are nested deeper than the decoder allows"""

    def __init__(self, max_depth=None):
        if max_depth is None:
            msg = "Members are nested too deeply to decode"
        else:
            msg = f"Members are nested deeper than the maximum of {max_depth}"
        super().__init__(msg)
        self.max_depth = max_depth


@contextmanager
def at(*segments):
    """Prefix the path of any DecodeError raised in the block with
    ``segments``"""
    try:
        yield
    except DecodeError as exc:
        exc._push(*segments)
        raise
