#!/usr/bin/env python3
"""
Import a saved 'show ip bgp' dump into a configured peer and print the result.

Usage: python3 scripts/import_table.py table.txt [--peer peerA] [--best] [--retain-next-hop]
"""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from errors import RouteImportError
from importers import ImportFileType, get_importer_service
from models import AddressFamilyMode, ImportConfig
from peers import load_peers

PEERS_PATH = Path(__file__).parent.parent / "peers" / "example-peers.yml"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Import a BGP table dump into route ranges")
    parser.add_argument("table", help="file holding the router output")
    parser.add_argument("--peers", default=str(PEERS_PATH), help="YAML peer file")
    parser.add_argument("--peer", default="peerA", help="target peer name")
    parser.add_argument("--format", default=ImportFileType.CISCO.value,
                        choices=[t.value for t in ImportFileType])
    parser.add_argument("--family", default=AddressFamilyMode.AUTO.value,
                        choices=[m.value for m in AddressFamilyMode])
    parser.add_argument("--best", action="store_true", help="import best routes only")
    parser.add_argument("--retain-next-hop", action="store_true", help="keep next hops from the table")
    parser.add_argument("--sequential", action="store_true", help="decode rows on a single thread")
    parser.add_argument("--prefix", default="rr", help="route name prefix")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    registry = load_peers(args.peers)
    if registry.get_peer(args.peer) is None:
        print(f"peer {args.peer!r} not found in {args.peers}", file=sys.stderr)
        return 1
    v4_peers, v6_peers = registry.import_targets(args.peer)

    config = ImportConfig(
        address_family_mode=AddressFamilyMode(args.family),
        best_routes_only=args.best,
        retain_next_hop=args.retain_next_hop,
        sequential_processing=args.sequential,
        name_prefix=args.prefix,
        target_v4_peers=v4_peers,
        target_v6_peers=v6_peers,
    )

    try:
        importer = get_importer_service(ImportFileType(args.format), session_id=1)
    except RouteImportError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    result, error = importer.import_routes_buffer(config, Path(args.table).read_bytes())
    if error is not None:
        print(f"error: {error}", file=sys.stderr)
        return 1

    print(json.dumps({
        "names": result.names,
        "diagnostics": [d.model_dump() for d in result.diagnostics],
    }, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
