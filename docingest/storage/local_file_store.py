from pathlib import Path

from docingest.storage.base import BaseObjectStore
from docingest.storage.exceptions import ObjectNotFoundError, TransientIOError


class LocalFileStore(BaseObjectStore):
    """Resolves storage keys to files under a root directory."""

    def __init__(self, files_root: Path) -> None:
        self._files_root = files_root.resolve()

    def fetch(self, storage_key: str) -> bytes:
        path = self._resolve_path(storage_key)
        if not path.is_file():
            raise ObjectNotFoundError(f"Object not found: {storage_key}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise TransientIOError(f"Failed to read {storage_key}: {exc}") from exc

    def _resolve_path(self, storage_key: str) -> Path:
        path = (self._files_root / storage_key.lstrip("/")).resolve()
        if not path.is_relative_to(self._files_root):
            raise ObjectNotFoundError(f"Object not found: {storage_key}")
        return path
