from typing import Any

import psycopg
from psycopg.rows import dict_row

from intake.database.base import BaseMetadataStore
from intake.database.connection import get_connection
from intake.database.models import ImageRecord, NewImageRecord
from intake.service.exceptions import ImageNotFoundError, MetadataStoreError
from intake.taxonomy.models import Category

_COLUMNS = """
    id, owner_id, filename, storage_disk, storage_locator, file_size_bytes,
    mime_type, category, item_type, location, date_taken, sequence, prefix,
    created_at
"""


def _row_to_record(row: dict[str, Any]) -> ImageRecord:
    return ImageRecord(
        id=row["id"],
        owner_id=row["owner_id"],
        filename=row["filename"],
        storage_disk=row["storage_disk"],
        storage_locator=row["storage_locator"],
        file_size_bytes=row["file_size_bytes"],
        mime_type=row["mime_type"],
        category=Category(row["category"]),
        item_type=row["item_type"],
        location=row["location"],
        date_taken=row["date_taken"],
        sequence=row["sequence"],
        prefix=row["prefix"],
        created_at=row["created_at"],
    )


class ImageRepository(BaseMetadataStore):
    """Database operations for the inspection_images table.

    Driver and pool failures surface as MetadataStoreError.
    """

    def insert_many(self, records: list[NewImageRecord]) -> list[ImageRecord]:
        """Insert every record in a single transaction.

        Raises:
            MetadataStoreError: if any insert fails; nothing is committed.
        """
        if not records:
            return []
        inserted: list[ImageRecord] = []
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    for record in records:
                        cur.execute(
                            f"""
                            INSERT INTO inspection_images
                            (owner_id, filename, storage_disk, storage_locator,
                             file_size_bytes, mime_type, category, item_type,
                             location, date_taken, sequence, prefix)
                            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                            RETURNING {_COLUMNS}
                            """,
                            (
                                record.owner_id,
                                record.filename,
                                record.storage_disk,
                                record.storage_locator,
                                record.file_size_bytes,
                                record.mime_type,
                                record.parsed.category.value,
                                record.parsed.item_type,
                                record.parsed.location,
                                record.parsed.date_taken,
                                record.parsed.sequence,
                                record.parsed.prefix,
                            ),
                        )
                        row = cur.fetchone()
                        if row is None:
                            raise MetadataStoreError(
                                f"Insert of {record.filename} returned no row"
                            )
                        inserted.append(_row_to_record(row))
                conn.commit()
        except psycopg.Error as exc:
            raise MetadataStoreError(
                f"Failed to insert {len(records)} image records: {exc}"
            ) from exc
        return inserted

    def list_by_owner(self, owner_id: str, category: Category | None = None) -> list[ImageRecord]:
        query = f"SELECT {_COLUMNS} FROM inspection_images WHERE owner_id = %s"
        params: tuple[Any, ...] = (owner_id,)
        if category is not None:
            query += " AND category = %s"
            params = (owner_id, category.value)
        query += " ORDER BY created_at, id"
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(query, params)
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise MetadataStoreError(f"Failed to list images for {owner_id}: {exc}") from exc
        return [_row_to_record(row) for row in rows]

    def list_filenames(self, owner_id: str) -> list[str]:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "SELECT filename FROM inspection_images WHERE owner_id = %s ORDER BY id",
                        (owner_id,),
                    )
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise MetadataStoreError(f"Failed to list filenames for {owner_id}: {exc}") from exc
        return [row[0] for row in rows]

    def find_by_id(self, owner_id: str, image_id: int) -> ImageRecord:
        """Find one of an owner's image records by ID.

        Raises:
            ImageNotFoundError: if the owner has no record with this ID.
        """
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        SELECT {_COLUMNS}
                        FROM inspection_images
                        WHERE id = %s AND owner_id = %s
                        """,
                        (image_id, owner_id),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise MetadataStoreError(f"Failed to load image {image_id}: {exc}") from exc

        if row is None:
            raise ImageNotFoundError(f"Image {image_id} not found")
        return _row_to_record(row)

    def delete_by_id(self, owner_id: str, image_id: int) -> None:
        """Delete one of an owner's image records.

        Raises:
            ImageNotFoundError: if the owner has no record with this ID.
        """
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "DELETE FROM inspection_images WHERE id = %s AND owner_id = %s",
                        (image_id, owner_id),
                    )
                    deleted = cur.rowcount
                if deleted:
                    conn.commit()
        except psycopg.Error as exc:
            raise MetadataStoreError(f"Failed to delete image {image_id}: {exc}") from exc
        if deleted == 0:
            raise ImageNotFoundError(f"Image {image_id} not found")

    def delete_by_category(self, owner_id: str, category: Category) -> int:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "DELETE FROM inspection_images WHERE owner_id = %s AND category = %s",
                        (owner_id, category.value),
                    )
                    deleted = cur.rowcount
                conn.commit()
        except psycopg.Error as exc:
            raise MetadataStoreError(
                f"Failed to delete {category.value} images for {owner_id}: {exc}"
            ) from exc
        return deleted
