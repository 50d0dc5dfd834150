from __future__ import annotations

from pulse.core.protocols import Region


class MemoryStorage:
    """Dict-backed storage, used for tests and embedding."""

    def __init__(self, initial: dict[Region, bytes] | None = None) -> None:
        self._regions: dict[Region, bytes] = dict(initial or {})

    def get(self, region: Region) -> bytes | None:
        return self._regions.get(region)

    def set(self, region: Region, data: bytes) -> None:
        self._regions[region] = data

    def snapshot(self) -> dict[Region, bytes]:
        return dict(self._regions)
