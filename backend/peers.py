"""
Peer Loader: parse the YAML peer file into BgpPeer import targets.

Format:

    peers:
      peerA:
        family: ipv4          # ipv4 | ipv6
        as_type: ebgp         # ebgp | ibgp
        peer_address: 1.1.1.1
        as_number: 65001

Peers that fail validation are logged and skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from models import AddressFamily, BgpPeer

logger = logging.getLogger(__name__)


@dataclass
class PeerRegistry:
    """Configured peers by name. Peers keep the routes imported into them."""
    peers: dict[str, BgpPeer] = field(default_factory=dict)

    def get_peer(self, name: str) -> Optional[BgpPeer]:
        return self.peers.get(name)

    def import_targets(self, name: str) -> tuple[list[BgpPeer], list[BgpPeer]]:
        """Target lists (v4, v6) for ImportConfig with the named peer as the only target."""
        peer = self.peers.get(name)
        if peer is None:
            return [], []
        if peer.family is AddressFamily.IPV4:
            return [peer], []
        return [], [peer]


def load_peers(path: str | Path) -> PeerRegistry:
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f)

    registry = PeerRegistry()
    if not raw or not isinstance(raw, dict):
        return registry

    for name, data in (raw.get("peers") or {}).items():
        data = data or {}
        try:
            registry.peers[name] = BgpPeer.model_validate({**data, "name": name})
        except ValidationError as e:
            logger.warning("Skipping peer %s in %s: %s", name, path, e)

    return registry
