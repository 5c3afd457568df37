class StorageError(Exception):
    """Base exception for all file-store errors."""


class UnsupportedStorageDiskError(StorageError):
    """Raised when settings name a storage disk with no adapter."""


class StoredFileNotFoundError(StorageError):
    """Raised when a locator does not resolve to a stored file."""


class FileStoreError(StorageError):
    """Raised when the underlying storage fails to read or write."""
