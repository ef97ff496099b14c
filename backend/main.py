"""BGP Route Importer API."""

from __future__ import annotations

import asyncio
import itertools
import logging
import os
import threading
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from errors import RouteImportError
from importers import ImportFileType, get_importer_service
from models import AddressFamilyMode, ImportConfig, ImportResult
from peers import PeerRegistry, load_peers

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"

app = FastAPI(title="BGP Route Importer", description="Routing-table dump to route ranges", version=VERSION)

backend_dir = Path(__file__).parent
project_dir = backend_dir.parent
peers_path = Path(os.environ.get("ROUTE_IMPORTER_PEERS", project_dir / "peers" / "example-peers.yml"))

registry: PeerRegistry
try:
    registry = load_peers(peers_path)
except Exception as e:
    logger.warning("Could not load peers: %s", e)
    registry = PeerRegistry()

_sessions = itertools.count(1)
_import_lock = threading.Lock()


class ImportRequest(BaseModel):
    peer: str
    table: str
    format: ImportFileType = ImportFileType.CISCO
    address_family_mode: AddressFamilyMode = AddressFamilyMode.AUTO
    best_routes_only: bool = False
    retain_next_hop: bool = False
    sequential_processing: bool = False
    name_prefix: Optional[str] = None


def _run_import(file_type: ImportFileType, session_id: int, config: ImportConfig, buffer: bytes):
    # one import at a time per process; peers are shared sinks
    with _import_lock:
        try:
            importer = get_importer_service(file_type, session_id=session_id)
        except RouteImportError as e:
            return None, e
        return importer.import_routes_buffer(config, buffer)


@app.post("/api/import")
async def import_table(request: ImportRequest):
    if registry.get_peer(request.peer) is None:
        raise HTTPException(404, f"Peer '{request.peer}' not configured")

    v4_peers, v6_peers = registry.import_targets(request.peer)
    session_id = next(_sessions)
    config = ImportConfig(
        address_family_mode=request.address_family_mode,
        best_routes_only=request.best_routes_only,
        retain_next_hop=request.retain_next_hop,
        sequential_processing=request.sequential_processing,
        name_prefix=request.name_prefix or f"{request.peer}-imp{session_id}",
        target_v4_peers=v4_peers,
        target_v6_peers=v6_peers,
    )

    loop = asyncio.get_event_loop()
    result, error = await loop.run_in_executor(
        None, _run_import, request.format, session_id, config, request.table.encode()
    )
    if error is not None:
        logger.warning("Import %d into %s failed: %s", session_id, request.peer, error)
        raise HTTPException(400, f"{error.kind}: {error}")
    return _serialize_result(session_id, result)


@app.get("/api/peers")
async def list_peers():
    return {
        "peers": [
            {
                "name": name,
                "family": peer.family.value,
                "as_type": peer.as_type.value,
                "peer_address": peer.peer_address,
                "v4_routes": len(peer.v4_routes),
                "v6_routes": len(peer.v6_routes),
            }
            for name, peer in registry.peers.items()
        ]
    }


@app.get("/api/peers/{name}/routes")
async def peer_routes(name: str):
    peer = registry.get_peer(name)
    if peer is None:
        raise HTTPException(404, f"Peer '{name}' not configured")
    return {
        "peer": name,
        "v4_routes": [r.model_dump(mode="json") for r in peer.v4_routes],
        "v6_routes": [r.model_dump(mode="json") for r in peer.v6_routes],
    }


@app.delete("/api/peers/{name}/routes")
# plain def: runs in the threadpool while it waits on _import_lock
def clear_peer_routes(name: str):
    peer = registry.get_peer(name)
    if peer is None:
        raise HTTPException(404, f"Peer '{name}' not configured")
    with _import_lock:
        removed = len(peer.v4_routes) + len(peer.v6_routes)
        peer.v4_routes.clear()
        peer.v6_routes.clear()
    return {"peer": name, "removed": removed}


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": VERSION, "peers": len(registry.peers)}


def _serialize_result(session_id: int, result: ImportResult) -> dict:
    return {
        "session_id": session_id,
        "candidate_count": result.candidate_count,
        "names": result.names,
        "routes": [r.model_dump(mode="json") for r in result.routes],
        "diagnostics": [d.model_dump() for d in result.diagnostics],
    }
