"""
AS-path grammar for the Path column of 'show ip bgp' output.

The column holds AS numbers separated by spaces (commas are accepted too)
followed by a single origin code. Bracketed groups change the segment
type of the AS numbers they enclose:

    {65001 65002}   AS_SET
    [65001 65002]   AS_CONFED_SET
    (65001 65002)   AS_CONFED_SEQ

Everything outside a group is AS_SEQ.
"""

from __future__ import annotations

import re

from errors import MalformedAsPathError, UnknownOriginError
from models import AsPath, AsPathSegment, AsPathSegmentType, AsSetMode, Origin, PeerAsType

MAX_AS_NUMBER = 2**32 - 1

ORIGIN_CODES = {
    "i": Origin.IGP,
    "I": Origin.IGP,
    "e": Origin.EGP,
    "E": Origin.EGP,
    "?": Origin.INCOMPLETE,
}

SEGMENT_MARKERS = {
    "{": AsPathSegmentType.AS_SET,
    "}": AsPathSegmentType.AS_SET,
    "[": AsPathSegmentType.AS_CONFED_SET,
    "]": AsPathSegmentType.AS_CONFED_SET,
    "(": AsPathSegmentType.AS_CONFED_SEQ,
    ")": AsPathSegmentType.AS_CONFED_SEQ,
}

_SEPARATORS = re.compile(r"[\s,]+")
_AS_NUMBER = re.compile(r"^[0-9]+$")


def decode_origin(code: str) -> Origin:
    """Map an origin code (i/I, e/E, ?) to Origin."""
    code = code.strip()
    origin = ORIGIN_CODES.get(code) if len(code) == 1 else None
    if origin is None:
        raise UnknownOriginError(f"unknown origin string: {code!r}")
    return origin


def split_origin(path_text: str) -> tuple[str, Origin]:
    """Split the trailing origin code off the path text."""
    text = path_text.strip()
    if not text:
        raise UnknownOriginError("path field is empty, no origin code found")
    return text[:-1], decode_origin(text[-1])


def _segment_type(ch: str) -> AsPathSegmentType:
    if "0" <= ch <= "9":
        return AsPathSegmentType.AS_SEQ
    seg_type = SEGMENT_MARKERS.get(ch)
    if seg_type is None:
        raise MalformedAsPathError(f"invalid as path segment marker {ch!r}")
    return seg_type


def _as_number(token: str, path: str) -> int:
    if not _AS_NUMBER.match(token):
        raise MalformedAsPathError(f"invalid AS number {token!r} in as path {path!r}")
    value = int(token)
    if value > MAX_AS_NUMBER:
        raise MalformedAsPathError(f"AS number {value} out of range in as path {path!r}")
    return value


def parse_as_path(text: str) -> list[AsPathSegment]:
    """Decode AS-path text (origin code already removed) into ordered segments."""
    tokens = [t for t in _SEPARATORS.split(text.strip()) if t]
    segments: list[AsPathSegment] = []
    current = AsPathSegmentType.AS_SEQ
    members: list[int] = []

    for token in tokens:
        opening = _segment_type(token[0])
        if opening is not AsPathSegmentType.AS_SEQ:
            if current is AsPathSegmentType.AS_SEQ:
                if members:
                    segments.append(AsPathSegment(type=current, as_numbers=members))
                    members = []
                current = opening
            elif opening is not current:
                raise MalformedAsPathError(f"incorrect format of as path segment: {text!r}")
            token = token[1:]

        closing = False
        if token:
            trailing = _segment_type(token[-1])
            if trailing is not AsPathSegmentType.AS_SEQ:
                # closing marker must match the open group
                if trailing is not current:
                    raise MalformedAsPathError(f"incorrect format of as path segment: {text!r}")
                closing = True
                token = token[:-1]

        members.append(_as_number(token, text))

        if closing:
            segments.append(AsPathSegment(type=current, as_numbers=members))
            members = []
            current = AsPathSegmentType.AS_SEQ

    # an unterminated group keeps its type
    if members:
        segments.append(AsPathSegment(type=current, as_numbers=members))
    return segments


def decode_path_field(path_text: str, as_type: PeerAsType) -> tuple[Origin, AsPath]:
    """Decode the full Path column: AS segments plus the origin code."""
    as_text, origin = split_origin(path_text)
    as_set_mode = AsSetMode.DO_NOT_INCLUDE_LOCAL_AS
    if as_type is PeerAsType.EBGP:
        as_set_mode = AsSetMode.INCLUDE_AS_SEQ
    return origin, AsPath(as_set_mode=as_set_mode, segments=parse_as_path(as_text))
