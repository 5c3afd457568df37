from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class StoredFile:
    """Handle returned by a file store after a successful write."""

    locator: str
    size: int


class BaseFileStore(ABC):
    """Contract for all file-store adapters."""

    disk: str

    @abstractmethod
    def store(self, owner_id: str, content: bytes, mime_type: str, filename: str) -> StoredFile:
        """Durably persist a blob for an owner.

        Args:
            owner_id: Authenticated owner of the file.
            content: Raw file bytes.
            mime_type: Declared MIME type of the content.
            filename: Original filename, used only for its extension.

        Returns:
            StoredFile with an opaque locator for later retrieval.

        Raises:
            FileStoreError: if the blob cannot be written.
        """

    @abstractmethod
    def retrieve_url(self, locator: str) -> str:
        """Return a display-ready reference to stored bytes.

        Raises:
            StoredFileNotFoundError: if nothing is stored under the locator.
        """

    @abstractmethod
    def remove(self, locator: str) -> None:
        """Delete stored bytes.

        Raises:
            StoredFileNotFoundError: if nothing is stored under the locator.
        """
