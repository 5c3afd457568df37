from intake.config.settings import Settings
from intake.storage.base import BaseFileStore
from intake.storage.exceptions import UnsupportedStorageDiskError
from intake.storage.local_store import LocalFileStore


class FileStoreFactory:
    """Creates the file store named by settings.storage_disk."""

    @classmethod
    def create(cls, settings: Settings) -> BaseFileStore:
        disk = settings.storage_disk.lower()
        if disk == LocalFileStore.disk:
            return LocalFileStore(files_root=settings.files_root)
        raise UnsupportedStorageDiskError(
            f"storage_disk '{settings.storage_disk}' is not supported. "
            f"Choose from: {[LocalFileStore.disk]}"
        )
