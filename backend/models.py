"""
Data models for the BGP route importer.

A routing-table dump is decoded into RouteRecord objects which are then
handed to a BgpPeer (the route-range sink). Route records are immutable
once built; peers own the collections the records are appended to.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Enumerations ---

class AddressFamily(str, Enum):
    IPV4 = "ipv4"
    IPV6 = "ipv6"


class AddressFamilyMode(str, Enum):
    """Which route families an import accepts."""
    AUTO = "auto"            # any family, detected per route
    IPV4 = "ipv4"
    IPV6 = "ipv6"

    def accepts(self, family: AddressFamily) -> bool:
        if self is AddressFamilyMode.AUTO:
            return True
        return self.value == family.value


class PeerAsType(str, Enum):
    EBGP = "ebgp"
    IBGP = "ibgp"


class Origin(str, Enum):
    IGP = "igp"
    EGP = "egp"
    INCOMPLETE = "incomplete"


class AsPathSegmentType(str, Enum):
    AS_SEQ = "as_seq"
    AS_SET = "as_set"
    AS_CONFED_SEQ = "as_confed_seq"
    AS_CONFED_SET = "as_confed_set"


class AsSetMode(str, Enum):
    DO_NOT_INCLUDE_LOCAL_AS = "do_not_include_local_as"
    INCLUDE_AS_SEQ = "include_as_seq"


class NextHopMode(str, Enum):
    LOCAL_IP = "local_ip"    # use the peer's own address
    MANUAL = "manual"        # explicit address taken from the table


# --- Route records ---

class AsPathSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: AsPathSegmentType = AsPathSegmentType.AS_SEQ
    as_numbers: list[int] = Field(default_factory=list)


class AsPath(BaseModel):
    model_config = ConfigDict(frozen=True)

    as_set_mode: AsSetMode = AsSetMode.DO_NOT_INCLUDE_LOCAL_AS
    segments: list[AsPathSegment] = Field(default_factory=list)


class NextHop(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: NextHopMode = NextHopMode.LOCAL_IP
    address: Optional[str] = None
    family: Optional[AddressFamily] = None  # family of the next-hop itself, not of the route


class RouteRecord(BaseModel):
    """One imported route range."""
    model_config = ConfigDict(frozen=True)

    name: str
    family: AddressFamily
    address: str
    prefix: int
    next_hop: NextHop = Field(default_factory=NextHop)
    local_preference: Optional[int] = None
    med: Optional[int] = None
    origin: Optional[Origin] = None
    as_path: AsPath = Field(default_factory=AsPath)


# --- Route-range sink ---

class BgpPeer(BaseModel):
    """Target peer the imported route ranges are attached to."""
    name: str
    family: AddressFamily = AddressFamily.IPV4
    as_type: PeerAsType = PeerAsType.EBGP
    peer_address: Optional[str] = None
    as_number: Optional[int] = None
    v4_routes: list[RouteRecord] = Field(default_factory=list)
    v6_routes: list[RouteRecord] = Field(default_factory=list)

    def append_route(self, record: RouteRecord) -> None:
        if record.family is AddressFamily.IPV4:
            self.v4_routes.append(record)
        else:
            self.v6_routes.append(record)

    def route_names(self) -> list[str]:
        return [r.name for r in self.v4_routes] + [r.name for r in self.v6_routes]


# --- Import configuration and results ---

class ImportConfig(BaseModel):
    address_family_mode: AddressFamilyMode = AddressFamilyMode.AUTO
    best_routes_only: bool = False
    retain_next_hop: bool = False
    sequential_processing: bool = False
    name_prefix: str = "rr"
    target_v4_peers: list[BgpPeer] = Field(default_factory=list)
    target_v6_peers: list[BgpPeer] = Field(default_factory=list)
    max_workers: Optional[int] = Field(default=None, ge=1)


class RowDiagnostic(BaseModel):
    """A candidate that was dropped during decoding."""
    line: int                # 1-based line number in the dump
    row_index: int
    kind: str
    message: str


class ImportResult(BaseModel):
    names: list[str] = Field(default_factory=list)
    routes: list[RouteRecord] = Field(default_factory=list)
    diagnostics: list[RowDiagnostic] = Field(default_factory=list)
    candidate_count: int = 0
