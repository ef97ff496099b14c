"""
Cisco 'show ip bgp' table parser.

Fields are located by the column offsets of the header line:

       Network          Next Hop            Metric LocPrf Weight Path
    *> 10.0.0.0/24      192.0.2.1                0    100      0 65001 i
    *  10.0.1.0/24      192.0.2.2                0    100      0 65002 65003 i
    *>                  192.0.2.3                0    100      0 65004 i
    *> 2001:db8:1::/48
                        2001:db8::1              0    100      0 65005 i

A blank Network column repeats the previous network. Entries too wide
for their columns wrap onto following lines that do not start with '*'.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from errors import FormatError, HeaderNotFoundError

CISCO_HEADER_CHECK = "   Network"  # starts with 3 spaces
HEADER_LABELS = ("Network", "Next Hop", "Metric", "LocPrf", "Weight", "Path")

VALID_ROUTE = "*"
BEST_ROUTE = ">"
BEST_ROUTE_OFFSET = 1


@dataclass(frozen=True)
class HeaderLayout:
    """Start column of each header label."""
    network: int
    next_hop: int
    metric: int
    loc_pref: int
    weight: int
    path: int


@dataclass(frozen=True)
class Candidate:
    row_index: int
    prefix: str


@dataclass(frozen=True)
class DecodedFields:
    next_hop: str
    metric: str
    loc_pref: str
    path: str
    final_row: int


def split_lines(buffer: bytes) -> tuple[str, ...]:
    """Split a raw dump into lines, dropping CR of CRLF line ends."""
    text = buffer.decode("utf-8", errors="replace")
    return tuple(line.rstrip("\r") for line in text.split("\n"))


def is_valid_route(line: str) -> bool:
    return line.startswith(VALID_ROUTE)


def is_best_route(line: str) -> bool:
    return line[BEST_ROUTE_OFFSET:BEST_ROUTE_OFFSET + 1] == BEST_ROUTE


def _reject_tabs(line: str, index: int, what: str = "line") -> None:
    if "\t" in line:
        raise FormatError(f"invalid format - {what} contains tab character (line {index + 1})", line=index + 1)


class CiscoTableParser:
    """Column-position parser for Cisco BGP table output."""

    @staticmethod
    def locate_header(lines: Sequence[str]) -> tuple[HeaderLayout, int]:
        """Find the header line. Returns its layout and the index of the first data line."""
        for index, line in enumerate(lines):
            if line.startswith(CISCO_HEADER_CHECK):
                _reject_tabs(line, index, "header")
                return CiscoTableParser.header_positions(line, index), index + 1
        raise HeaderNotFoundError("invalid format - failed to locate header")

    @staticmethod
    def header_positions(line: str, index: int = 0) -> HeaderLayout:
        positions = []
        offset = 0
        for label in HEADER_LABELS:
            pos = line.find(label, offset)
            if pos == -1:
                raise FormatError(f"invalid header format - missing {label}", line=index + 1)
            positions.append(pos)
            offset = pos + len(label)
        return HeaderLayout(*positions)

    @staticmethod
    def scan_candidates(
        lines: Sequence[str],
        layout: HeaderLayout,
        start: int,
        best_routes_only: bool = False,
    ) -> list[Candidate]:
        """Collect the route lines following the header, in row order."""
        candidates: list[Candidate] = []
        pos = layout.network
        prev_prefix = ""

        for index in range(start, len(lines)):
            line = lines[index]
            _reject_tabs(line, index)
            if not line or not is_valid_route(line):
                # empty, or the tail of a wrapped entry
                continue

            if len(line) > pos and line[pos] != " ":
                prefix = line[pos:].split(" ", 1)[0]
                prev_prefix = prefix
            else:
                prefix = prev_prefix

            if best_routes_only and not is_best_route(line):
                continue
            candidates.append(Candidate(row_index=index, prefix=prefix))

        return candidates

    @staticmethod
    def parse_next(lines: Sequence[str], start: int, end: Optional[int], row: int) -> tuple[str, int]:
        """
        Read the field between columns start and end.

        If the current line ends before start, move to the following line
        unless that one begins a new route. Returns the trimmed text and the
        row it was read from; an exhausted entry yields an empty field.
        """
        line = lines[row]
        while len(line) <= start:
            nxt = row + 1
            if nxt >= len(lines) or is_valid_route(lines[nxt]):
                return "", row
            row = nxt
            line = lines[row]
        return line[start:end].strip(), row

    @staticmethod
    def decode_fields(
        lines: Sequence[str],
        layout: HeaderLayout,
        candidate: Candidate,
        retain_next_hop: bool = False,
    ) -> DecodedFields:
        row = candidate.row_index
        next_hop = ""
        if retain_next_hop:
            next_hop, row = CiscoTableParser.parse_next(lines, layout.next_hop, layout.metric, row)
        metric, row = CiscoTableParser.parse_next(lines, layout.metric, layout.loc_pref, row)
        loc_pref, row = CiscoTableParser.parse_next(lines, layout.loc_pref, layout.weight, row)
        path, row = CiscoTableParser.parse_next(lines, layout.path, None, row)
        return DecodedFields(
            next_hop=next_hop,
            metric=metric,
            loc_pref=loc_pref,
            path=path,
            final_row=row,
        )
