"""
Cisco Importer: turn 'show ip bgp' output into route ranges on a target peer.

Pipeline:
1. locate the column header
2. collect candidate route lines (row order)
3. decode every candidate independently, on a thread pool or sequentially
4. append the built records to the peer in row order

Rows that fail to decode are dropped and reported in the result's
diagnostics. Header, tab and peer problems abort the whole import.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from errors import (
    EmptyInputError,
    NoTargetPeerError,
    RouteDecodeError,
    UnsupportedMultiPeerError,
)
from importers import ImportService
from models import (
    BgpPeer,
    ImportConfig,
    ImportResult,
    PeerAsType,
    RouteRecord,
    RowDiagnostic,
)
from parsers.cisco_table import Candidate, CiscoTableParser, HeaderLayout, split_lines
from parsers.route_builder import build_route

logger = logging.getLogger(__name__)

# (record, error), exactly one of them is set
Slot = tuple[Optional[RouteRecord], Optional[RouteDecodeError]]


def _elapsed_ms(t0: float) -> float:
    return (time.monotonic() - t0) * 1000


class CiscoImporter(ImportService):
    """Import Cisco IOS 'show ip bgp' / 'show bgp ipv6' table dumps."""

    def __init__(self, session_id: int = 0):
        super().__init__(session_id)
        self.valid_routes = 0
        self.candidate_count = 0
        logger.info(f"CiscoImporter: {self} created")

    def __str__(self) -> str:
        return f"Cisco Route Importer, session id: {self.session_id:8d}, validRoutes:{self.valid_routes}"

    @staticmethod
    def target_peer(config: ImportConfig) -> BgpPeer:
        """Pick the peer the routes go to: the v4 peer, else the v6 peer."""
        if len(config.target_v4_peers) > 1:
            raise UnsupportedMultiPeerError("multiple target v4 peers currently not supported")
        if len(config.target_v6_peers) > 1:
            raise UnsupportedMultiPeerError("multiple target v6 peers currently not supported")
        if config.target_v4_peers:
            return config.target_v4_peers[0]
        if config.target_v6_peers:
            return config.target_v6_peers[0]
        raise NoTargetPeerError("cannot import, no target v4 or v6 peers found")

    def import_routes(self, config: ImportConfig, buffer: bytes) -> ImportResult:
        if not buffer:
            raise EmptyInputError("cannot import - empty route buffer")

        self.valid_routes = 0
        self.candidate_count = 0
        started = time.monotonic()

        t0 = time.monotonic()
        lines = split_lines(buffer)
        layout, first_data_line = CiscoTableParser.locate_header(lines)
        logger.info(f"Header parsing: {_elapsed_ms(t0):.1f} ms")

        peer = self.target_peer(config)

        t0 = time.monotonic()
        candidates = CiscoTableParser.scan_candidates(
            lines, layout, first_data_line, config.best_routes_only
        )
        # fixed before fan-out; workers only read it
        self.candidate_count = len(candidates)
        logger.info(f"Line parsing: {_elapsed_ms(t0):.1f} ms, {len(candidates)} candidates")

        t0 = time.monotonic()
        slots = self._process_candidates(lines, layout, candidates, config, peer.as_type)
        logger.info(f"Process route attributes: {_elapsed_ms(t0):.1f} ms")

        result = ImportResult(candidate_count=len(candidates))
        for candidate, (record, error) in zip(candidates, slots):
            if record is None:
                diag = RowDiagnostic(
                    line=candidate.row_index + 1,
                    row_index=candidate.row_index,
                    kind=error.kind,
                    message=str(error),
                )
                logger.info(f"Row {diag.line}: {diag.message}")
                result.diagnostics.append(diag)
                continue
            peer.append_route(record)
            result.names.append(record.name)
            result.routes.append(record)

        self.valid_routes = len(result.routes)
        logger.info(
            f"Peer {peer.name}: v4 routes count = {len(peer.v4_routes)}, "
            f"v6 routes count = {len(peer.v6_routes)}, "
            f"imported {self.valid_routes}/{len(candidates)} in {_elapsed_ms(started):.1f} ms"
        )
        return result

    def _process_candidates(
        self,
        lines: Sequence[str],
        layout: HeaderLayout,
        candidates: list[Candidate],
        config: ImportConfig,
        as_type: PeerAsType,
    ) -> list[Slot]:
        """Decode every candidate into its own pre-allocated slot."""
        slots: list[Optional[Slot]] = [None] * len(candidates)

        def run(index: int) -> None:
            slots[index] = self._process_candidate(lines, layout, candidates[index], config, as_type)

        if config.sequential_processing:
            for index in range(len(candidates)):
                run(index)
        else:
            with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
                futures = [executor.submit(run, index) for index in range(len(candidates))]
                for future in futures:
                    future.result()

        return slots

    @staticmethod
    def _process_candidate(
        lines: Sequence[str],
        layout: HeaderLayout,
        candidate: Candidate,
        config: ImportConfig,
        as_type: PeerAsType,
    ) -> Slot:
        try:
            fields = CiscoTableParser.decode_fields(lines, layout, candidate, config.retain_next_hop)
            record = build_route(
                candidate,
                fields,
                name_prefix=config.name_prefix,
                family_mode=config.address_family_mode,
                retain_next_hop=config.retain_next_hop,
                as_type=as_type,
            )
        except RouteDecodeError as e:
            return None, e
        return record, None
