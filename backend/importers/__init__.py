"""Route importers. One per router CLI format, all producing RouteRecord objects."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from errors import RouteImportError, UnsupportedFormatError
from models import ImportConfig, ImportResult

logger = logging.getLogger(__name__)


class ImportFileType(str, Enum):
    CISCO = "cisco"
    JUNIPER = "juniper"


class ImportService(ABC):
    """Base class for format-specific importers."""

    def __init__(self, session_id: int = 0):
        self.session_id = session_id

    @abstractmethod
    def import_routes(self, config: ImportConfig, buffer: bytes) -> ImportResult:
        """Import a table dump into the configured target peer. Raises RouteImportError."""
        ...

    def import_routes_buffer(
        self, config: ImportConfig, buffer: bytes
    ) -> tuple[Optional[ImportResult], Optional[RouteImportError]]:
        """Same as import_routes, but returns (result, error) instead of raising."""
        try:
            return self.import_routes(config, buffer), None
        except RouteImportError as e:
            logger.warning(f"{self}: import failed: {e}")
            return None, e


def get_importer_service(file_type: ImportFileType, session_id: int = 0) -> ImportService:
    """Create the importer for a dump format."""
    if file_type == ImportFileType.CISCO:
        from importers.cisco import CiscoImporter
        return CiscoImporter(session_id=session_id)
    if file_type == ImportFileType.JUNIPER:
        raise UnsupportedFormatError("support for Juniper is not yet implemented")
    raise UnsupportedFormatError(f"unknown importer type format : {file_type!r}")
