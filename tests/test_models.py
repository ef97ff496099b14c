import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from models import (
    AddressFamily,
    AddressFamilyMode,
    BgpPeer,
    ImportConfig,
    RouteRecord,
)


def test_route_record_model_validation():
    route = RouteRecord(name="rr-1", family="ipv4", address="10.0.0.0", prefix=8, med=0)
    assert route.family == AddressFamily.IPV4
    assert route.next_hop.mode.value == "local_ip"
    assert route.as_path.segments == []


def test_peer_files_routes_by_family():
    peer = BgpPeer(name="p1")
    peer.append_route(RouteRecord(name="a", family="ipv6", address="2001:db8::", prefix=32))
    peer.append_route(RouteRecord(name="b", family="ipv4", address="10.0.0.0", prefix=8))
    assert [r.name for r in peer.v4_routes] == ["b"]
    assert peer.route_names() == ["b", "a"]


def test_family_mode_accepts():
    assert AddressFamilyMode.AUTO.accepts(AddressFamily.IPV6)
    assert AddressFamilyMode.IPV4.accepts(AddressFamily.IPV4)
    assert not AddressFamilyMode.IPV4.accepts(AddressFamily.IPV6)


def test_import_config_defaults():
    config = ImportConfig()
    assert config.name_prefix == "rr"
    assert not config.best_routes_only
    assert config.max_workers is None


def test_import_config_keeps_peer_instances():
    peer = BgpPeer(name="p1")
    config = ImportConfig(target_v4_peers=[peer])
    assert config.target_v4_peers[0] is peer


def test_import_config_rejects_zero_workers():
    with pytest.raises(ValidationError):
        ImportConfig(max_workers=0)
