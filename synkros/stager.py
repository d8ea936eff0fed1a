import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

logger = logging.getLogger(__name__)

STAGED_SUFFIX = '.jpeg'


@dataclass
class StagedAsset:
    path: Path
    size: int


class AssetStager:
    """Writes product photos to a scratch directory, one file per product code."""

    def __init__(self, directory):
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, code: str) -> Path:
        # Codes may contain path separators; keep one flat file per code.
        return self._directory / f"{quote(code, safe='')}{STAGED_SUFFIX}"

    def stage(self, code: str, photo: bytes) -> StagedAsset:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(code)
        path.write_bytes(photo)
        size = path.stat().st_size
        logger.info("Photo for %s staged at %s (%d bytes).", code, path, size)
        return StagedAsset(path=path, size=size)

    def purge(self) -> int:
        """Remove staged files left behind by an interrupted run."""
        if not self._directory.is_dir():
            return 0
        removed = 0
        for leftover in self._directory.glob(f"*{STAGED_SUFFIX}"):
            leftover.unlink()
            removed += 1
        if removed:
            logger.info("Removed %d leftover staged file(s) from %s.", removed, self._directory)
        return removed
