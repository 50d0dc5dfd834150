from __future__ import annotations

from pathlib import Path

import structlog

from pulse.core.errors import CorruptRegion
from pulse.core.protocols import Region
from pulse.core.utils import atomic_write_bytes

log: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class FileStorage:
    """Keeps each region in ``<base_dir>/<region>.json``.

    Writes go through a temp file and an atomic replace, so a reader sees
    either the previous or the new content of a region.
    """

    def __init__(self, base_dir: Path) -> None:
        self._base_dir = base_dir
        self._base_dir.mkdir(parents=True, exist_ok=True)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _path_for(self, region: Region) -> Path:
        return self._base_dir / f"{Region(region).value}.json"

    def get(self, region: Region) -> bytes | None:
        path = self._path_for(region)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as exc:
            log.error("region_read_failed", region=str(region), error=str(exc))
            raise CorruptRegion(Region(region).value, str(exc)) from exc

    def set(self, region: Region, data: bytes) -> None:
        atomic_write_bytes(self._path_for(region), data)
