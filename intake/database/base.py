from abc import ABC, abstractmethod

from intake.database.models import ImageRecord, NewImageRecord
from intake.taxonomy.models import Category


class BaseMetadataStore(ABC):
    """Contract for persisting parsed image records."""

    @abstractmethod
    def insert_many(self, records: list[NewImageRecord]) -> list[ImageRecord]:
        """Insert all records in one transaction; return them with generated ids."""

    @abstractmethod
    def list_by_owner(self, owner_id: str, category: Category | None = None) -> list[ImageRecord]:
        """Return an owner's records in upload order, optionally for one category."""

    @abstractmethod
    def list_filenames(self, owner_id: str) -> list[str]:
        """Return the filenames of every record an owner already has."""

    @abstractmethod
    def find_by_id(self, owner_id: str, image_id: int) -> ImageRecord:
        """Raises ImageNotFoundError if the owner has no such record."""

    @abstractmethod
    def delete_by_id(self, owner_id: str, image_id: int) -> None:
        """Raises ImageNotFoundError if the owner has no such record."""

    @abstractmethod
    def delete_by_category(self, owner_id: str, category: Category) -> int:
        """Delete an owner's records in a category and return how many went."""
