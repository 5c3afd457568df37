import uuid
from pathlib import Path, PurePosixPath

from intake.storage.base import BaseFileStore, StoredFile
from intake.storage.exceptions import FileStoreError, StoredFileNotFoundError


def stored_file_path(files_root: Path, locator: str) -> Path:
    """Build path to a stored file: {files_root}/{owner_id}/{uuid}{ext}"""
    return files_root.joinpath(*PurePosixPath(locator).parts)


class LocalFileStore(BaseFileStore):
    """Keeps uploaded files on the local filesystem, one directory per owner."""

    disk = "local"

    def __init__(self, files_root: Path) -> None:
        self._files_root = files_root

    def store(self, owner_id: str, content: bytes, mime_type: str, filename: str) -> StoredFile:
        if owner_id in ("", ".", "..") or "/" in owner_id or "\\" in owner_id:
            raise FileStoreError(f"Owner id {owner_id!r} cannot be used as a directory name")
        locator = f"{owner_id}/{uuid.uuid4()}{PurePosixPath(filename.lower()).suffix}"
        path = stored_file_path(self._files_root, locator)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            raise FileStoreError(f"Could not write {path}: {exc}") from exc
        return StoredFile(locator=locator, size=len(content))

    def retrieve_url(self, locator: str) -> str:
        path = self._resolve_existing(locator)
        return path.resolve().as_uri()

    def remove(self, locator: str) -> None:
        path = self._resolve_existing(locator)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise StoredFileNotFoundError(f"Stored file not found: {locator}") from exc
        except OSError as exc:
            raise FileStoreError(f"Could not remove {path}: {exc}") from exc

    def _resolve_existing(self, locator: str) -> Path:
        relative = PurePosixPath(locator)
        if relative.is_absolute() or ".." in relative.parts:
            raise StoredFileNotFoundError(f"Stored file not found: {locator}")
        path = stored_file_path(self._files_root, locator)
        if not path.is_file():
            raise StoredFileNotFoundError(f"Stored file not found: {locator}")
        return path
