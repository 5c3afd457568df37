from collections.abc import Iterable

from intake.auth.base import BaseAuthProvider
from intake.auth.env_provider import EnvAuthProvider
from intake.classifier.classifier import FilenameClassifier
from intake.classifier.models import UploadCandidate
from intake.config.settings import Settings
from intake.database.base import BaseMetadataStore
from intake.database.models import ImageRecord, NewImageRecord
from intake.database.repositories.image_repository import ImageRepository
from intake.logging.logger import Log
from intake.service.models import UploadReport
from intake.storage.base import BaseFileStore, StoredFile
from intake.storage.exceptions import StoredFileNotFoundError
from intake.storage.factory import FileStoreFactory
from intake.taxonomy.models import Category
from intake.taxonomy.table import DISPLAY_ORDER

_GROUP_ORDER: tuple[Category, ...] = (*DISPLAY_ORDER, Category.UNCATEGORIZED)


def group_by_category(records: Iterable[ImageRecord]) -> dict[Category, list[ImageRecord]]:
    """Group records for the gallery in display order, Uncategorized last, no empty groups."""
    buckets: dict[Category, list[ImageRecord]] = {category: [] for category in _GROUP_ORDER}
    for record in records:
        buckets[record.category].append(record)
    return {category: items for category, items in buckets.items() if items}


def category_counts(records: Iterable[ImageRecord]) -> dict[Category, int]:
    return {category: len(items) for category, items in group_by_category(records).items()}


class IntakeService:
    """Accepts, lists and deletes inspection files for the authenticated owner.

    Upload pipeline: authenticate -> existing names -> validate batch ->
    store blobs -> insert metadata.
    """

    def __init__(
        self,
        classifier: FilenameClassifier,
        file_store: BaseFileStore,
        metadata_store: BaseMetadataStore,
        auth: BaseAuthProvider,
    ) -> None:
        self._classifier = classifier
        self._file_store = file_store
        self._metadata_store = metadata_store
        self._auth = auth

    def upload(self, candidates: list[UploadCandidate]) -> UploadReport:
        """Validate a batch and persist the accepted files.

        Raises:
            UnauthenticatedError: before anything is read or written.
            FileStoreError, MetadataStoreError: blobs written by this call are
                removed before the error propagates.
        """
        owner_id = self._auth.current_owner_id()
        existing = self._metadata_store.list_filenames(owner_id)
        batch = self._classifier.validate_batch(candidates, existing)
        Log.info(
            f"Upload batch for owner {owner_id}: {len(batch.accepted)} accepted, "
            f"{len(batch.rejected)} rejected"
        )
        for rejection in batch.rejected:
            Log.debug(f"Rejected {rejection.describe()} ({rejection.reason.value})")

        report = UploadReport(rejected=batch.rejected)
        if not batch.accepted:
            return report

        stored: list[StoredFile] = []
        try:
            new_records: list[NewImageRecord] = []
            for item in batch.accepted:
                candidate = item.candidate
                blob = self._file_store.store(
                    owner_id, candidate.content, candidate.mime_type, candidate.filename
                )
                stored.append(blob)
                new_records.append(
                    NewImageRecord(
                        owner_id=owner_id,
                        filename=candidate.filename,
                        storage_disk=self._file_store.disk,
                        storage_locator=blob.locator,
                        file_size_bytes=blob.size,
                        mime_type=candidate.mime_type,
                        parsed=item.parsed,
                    )
                )
            report.stored = self._metadata_store.insert_many(new_records)
        except Exception:
            Log.exception(
                f"Upload failed for owner {owner_id}, removing {len(stored)} stored files"
            )
            self._discard(stored)
            raise

        Log.info(f"Stored {len(report.stored)} files for owner {owner_id}")
        return report

    def list_images(
        self,
        category: Category | None = None,
        search: str | None = None,
    ) -> list[ImageRecord]:
        """Owner's records in upload order, filtered by category and filename substring."""
        owner_id = self._auth.current_owner_id()
        records = self._metadata_store.list_by_owner(owner_id, category)
        if search:
            needle = search.lower()
            records = [record for record in records if needle in record.filename.lower()]
        return records

    def image_url(self, record: ImageRecord) -> str:
        return self._file_store.retrieve_url(record.storage_locator)

    def delete_image(self, image_id: int) -> None:
        """Delete a record and its stored file.

        Raises:
            ImageNotFoundError: if the owner has no record with this ID.
        """
        owner_id = self._auth.current_owner_id()
        record = self._metadata_store.find_by_id(owner_id, image_id)
        self._metadata_store.delete_by_id(owner_id, image_id)
        self._remove_blob(record.storage_locator)
        Log.info(f"Deleted image {image_id} ({record.filename}) for owner {owner_id}")

    def delete_category(self, category: Category) -> int:
        owner_id = self._auth.current_owner_id()
        records = self._metadata_store.list_by_owner(owner_id, category)
        deleted = self._metadata_store.delete_by_category(owner_id, category)
        for record in records:
            self._remove_blob(record.storage_locator)
        Log.info(f"Deleted {deleted} {category.value} images for owner {owner_id}")
        return deleted

    def _remove_blob(self, locator: str) -> None:
        try:
            self._file_store.remove(locator)
        except StoredFileNotFoundError:
            Log.warning(f"Stored file {locator} was already gone")

    def _discard(self, stored: list[StoredFile]) -> None:
        for blob in stored:
            try:
                self._file_store.remove(blob.locator)
            except Exception as exc:
                Log.warning(f"Could not remove {blob.locator} after failed upload: {exc}")


def build_intake_service(settings: Settings) -> IntakeService:
    """Build an IntakeService with the configured adapters."""
    return IntakeService(
        classifier=FilenameClassifier(allow_uncategorized=settings.allow_uncategorized),
        file_store=FileStoreFactory.create(settings),
        metadata_store=ImageRepository(),
        auth=EnvAuthProvider(settings),
    )
