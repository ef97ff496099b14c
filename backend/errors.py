"""Route import error taxonomy.

Fatal errors abort the whole import and no partial output is produced.
Decode errors belong to a single candidate row: the row is dropped and
reported, the rest of the import carries on.
"""

from __future__ import annotations

from typing import Optional


class RouteImportError(Exception):
    """Base class for everything the importer raises on purpose."""

    kind = "import_error"


# --- Fatal ---

class FatalImportError(RouteImportError):
    kind = "fatal"


class EmptyInputError(FatalImportError):
    kind = "empty_input"


class HeaderNotFoundError(FatalImportError):
    kind = "header_not_found"


class FormatError(FatalImportError):
    """Tab characters or a header missing one of its column labels."""
    kind = "format"

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.line = line


class NoTargetPeerError(FatalImportError):
    kind = "no_target_peer"


class UnsupportedMultiPeerError(FatalImportError):
    kind = "unsupported_multi_peer"


class UnsupportedFormatError(FatalImportError):
    kind = "unsupported_format"


# --- Per candidate ---

class RouteDecodeError(RouteImportError):
    kind = "decode"


class InvalidNetworkError(RouteDecodeError):
    kind = "invalid_network"


class InvalidNextHopError(RouteDecodeError):
    kind = "invalid_next_hop"


class MalformedAsPathError(RouteDecodeError):
    kind = "malformed_as_path"


class UnknownOriginError(RouteDecodeError):
    kind = "unknown_origin"


class InvalidNumericFieldError(RouteDecodeError):
    kind = "invalid_numeric_field"


class AddressFamilyMismatchError(RouteDecodeError):
    kind = "address_family_mismatch"
