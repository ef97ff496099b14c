"""Parsers for BGP routing-table dumps."""

from .cisco_table import CiscoTableParser, HeaderLayout, Candidate, DecodedFields, split_lines
from .as_path import decode_origin, decode_path_field, parse_as_path
from .route_builder import build_route, parse_network, parse_next_hop

__all__ = [
    "CiscoTableParser",
    "HeaderLayout",
    "Candidate",
    "DecodedFields",
    "split_lines",
    "decode_origin",
    "decode_path_field",
    "parse_as_path",
    "build_route",
    "parse_network",
    "parse_next_hop",
]
