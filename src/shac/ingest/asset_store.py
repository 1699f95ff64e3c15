"""Content-addressed asset store.

Every declared asset is copied into the asset directory under the SHA-1 hex
digest of its bytes. Identical content always maps to the same file, so
re-ingesting it is a plain overwrite with identical bytes and assets are
deduplicated across documents and runs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from ..errors import AssetDirectoryError, AssetReadError, AssetWriteError
from ..ids import compute_content_id
from ..model.document import ResolvedAsset

logger = logging.getLogger(__name__)


class AssetStore:
    def __init__(self, asset_dir: Path, *, base_dir: Path | None = None) -> None:
        self.asset_dir = Path(asset_dir)
        # Relative asset paths resolve against base_dir, or the working directory
        self.base_dir = base_dir

    def ensure_directory(self) -> None:
        try:
            self.asset_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise AssetDirectoryError(self.asset_dir, exc) from exc

    def path_for(self, asset_id: str) -> Path:
        return self.asset_dir / asset_id

    def _source_path(self, source: str | Path) -> Path:
        path = Path(source)
        if self.base_dir is not None and not path.is_absolute():
            return self.base_dir / path
        return path

    def ingest(self, source: str | Path) -> str:
        """Store the bytes of ``source`` and return their content id."""

        src = self._source_path(source)
        try:
            data = src.read_bytes()
        except OSError as exc:
            raise AssetReadError(src, exc) from exc

        asset_id = compute_content_id(data)
        dest = self.path_for(asset_id)
        try:
            dest.write_bytes(data)
        except OSError as exc:
            raise AssetWriteError(dest, exc) from exc

        logger.debug("Stored %s (%d bytes) as %s", src, len(data), asset_id)
        return asset_id

    def ingest_all(self, sources: Iterable[str]) -> list[ResolvedAsset]:
        """Ingest assets in declaration order; position equals placeholder index."""

        resolved: list[ResolvedAsset] = []
        for index, source in enumerate(sources):
            asset_id = self.ingest(source)
            resolved.append(ResolvedAsset(index=index, source=source, asset_id=asset_id))
        return resolved


__all__ = ["AssetStore"]
