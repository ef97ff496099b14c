"""Build typed RouteRecord objects from decoded table fields."""

from __future__ import annotations

import ipaddress
import re
from typing import Optional

from errors import (
    AddressFamilyMismatchError,
    InvalidNetworkError,
    InvalidNextHopError,
    InvalidNumericFieldError,
)
from models import (
    AddressFamily,
    AddressFamilyMode,
    NextHop,
    NextHopMode,
    PeerAsType,
    RouteRecord,
)
from parsers.as_path import decode_path_field
from parsers.cisco_table import Candidate, DecodedFields

# networks printed without a mask
DEFAULT_PREFIX_LENGTH = 24

MAX_UINT32 = 2**32 - 1
MAX_PREFIX_LENGTH = {AddressFamily.IPV4: 32, AddressFamily.IPV6: 128}

_DIGITS = re.compile(r"^[0-9]+$")

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


def _parse_ip(text: str) -> tuple[IPAddress, AddressFamily]:
    """Parse an IP literal; IPv4-mapped IPv6 addresses count as IPv4. Zoned addresses are rejected."""
    ip = ipaddress.ip_address(text)
    if isinstance(ip, ipaddress.IPv6Address) and ip.scope_id is not None:
        raise ValueError(f"zoned address not allowed: {text!r}")
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    if isinstance(ip, ipaddress.IPv4Address):
        return ip, AddressFamily.IPV4
    return ip, AddressFamily.IPV6


def parse_network(text: str) -> tuple[str, int, AddressFamily]:
    """Split 'address[/len]' into address, prefix length and family."""
    address_text, sep, length_text = text.partition("/")
    try:
        ip, family = _parse_ip(address_text)
    except ValueError:
        raise InvalidNetworkError(f"not valid ip address : {address_text!r}") from None

    prefix = DEFAULT_PREFIX_LENGTH
    if sep:
        if not _DIGITS.match(length_text):
            raise InvalidNetworkError(f"not valid prefix length : {length_text!r}")
        prefix = int(length_text)
        if prefix > MAX_PREFIX_LENGTH[family]:
            raise InvalidNetworkError(f"prefix length {prefix} out of range for {family.value} network {text!r}")
    return str(ip), prefix, family


def parse_next_hop(text: str) -> NextHop:
    try:
        ip, family = _parse_ip(text)
    except ValueError:
        raise InvalidNextHopError(f"invalid ip address: {text!r} for Nexthop processing") from None
    return NextHop(mode=NextHopMode.MANUAL, address=str(ip), family=family)


def parse_uint32(text: str, field_name: str) -> Optional[int]:
    """Empty text means the attribute is absent."""
    if not text:
        return None
    if not _DIGITS.match(text) or int(text) > MAX_UINT32:
        raise InvalidNumericFieldError(f"invalid {field_name}: {text!r}")
    return int(text)


def build_route(
    candidate: Candidate,
    fields: DecodedFields,
    name_prefix: str,
    family_mode: AddressFamilyMode = AddressFamilyMode.AUTO,
    retain_next_hop: bool = False,
    as_type: PeerAsType = PeerAsType.EBGP,
) -> RouteRecord:
    """Assemble one route record. Raises a RouteDecodeError subclass on bad fields."""
    address, prefix, family = parse_network(candidate.prefix)
    if not family_mode.accepts(family):
        raise AddressFamilyMismatchError(
            f"{family.value} network {candidate.prefix!r} excluded by address family mode {family_mode.value}"
        )

    if retain_next_hop:
        if not fields.next_hop:
            raise InvalidNextHopError("no nexthop found")
        next_hop = parse_next_hop(fields.next_hop)
    else:
        next_hop = NextHop(mode=NextHopMode.LOCAL_IP)

    local_preference = parse_uint32(fields.loc_pref, "Local Pref")
    med = parse_uint32(fields.metric, "MED")
    origin, as_path = decode_path_field(fields.path, as_type)

    return RouteRecord(
        name=f"{name_prefix}-{candidate.row_index}",
        family=family,
        address=address,
        prefix=prefix,
        next_hop=next_hop,
        local_preference=local_preference,
        med=med,
        origin=origin,
        as_path=as_path,
    )
