"""Tests for the YAML peer loader."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from models import AddressFamily, PeerAsType
from peers import PeerRegistry, load_peers

EXAMPLE_PEERS = Path(__file__).parent.parent / "peers" / "example-peers.yml"


class TestLoadPeers:

    def test_example_file(self):
        registry = load_peers(EXAMPLE_PEERS)
        assert set(registry.peers) == {"peerA", "peerB", "peerV6"}
        peer = registry.get_peer("peerA")
        assert peer.name == "peerA"
        assert peer.as_type == PeerAsType.EBGP
        assert peer.as_number == 65001
        assert registry.get_peer("peerB").as_type == PeerAsType.IBGP
        assert registry.get_peer("peerV6").family == AddressFamily.IPV6

    def test_invalid_peer_skipped(self, tmp_path):
        path = tmp_path / "peers.yml"
        path.write_text(
            "peers:\n"
            "  good:\n"
            "    as_type: ibgp\n"
            "  bad:\n"
            "    family: ipx\n"
            "  bare:\n"
        )
        registry = load_peers(path)
        assert set(registry.peers) == {"good", "bare"}
        assert registry.get_peer("bare").family == AddressFamily.IPV4

    def test_empty_file(self, tmp_path):
        path = tmp_path / "peers.yml"
        path.write_text("")
        assert load_peers(path).peers == {}


class TestImportTargets:

    def setup_method(self):
        self.registry = load_peers(EXAMPLE_PEERS)

    def test_v4_peer(self):
        v4, v6 = self.registry.import_targets("peerA")
        assert [p.name for p in v4] == ["peerA"]
        assert v6 == []

    def test_v6_peer(self):
        v4, v6 = self.registry.import_targets("peerV6")
        assert v4 == []
        assert [p.name for p in v6] == ["peerV6"]

    def test_unknown_peer(self):
        assert self.registry.import_targets("nope") == ([], [])

    def test_targets_are_registry_instances(self):
        v4, _ = self.registry.import_targets("peerA")
        assert v4[0] is self.registry.get_peer("peerA")

    def test_empty_registry(self):
        assert PeerRegistry().get_peer("peerA") is None
