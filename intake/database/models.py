from dataclasses import dataclass
from datetime import datetime

from intake.classifier.models import ParsedFilename
from intake.taxonomy.models import Category


@dataclass(frozen=True)
class NewImageRecord:
    """A row to insert into inspection_images: storage linkage plus parsed fields."""

    owner_id: str
    filename: str
    storage_disk: str
    storage_locator: str
    file_size_bytes: int
    mime_type: str
    parsed: ParsedFilename


@dataclass
class ImageRecord:
    """Represents a row from the inspection_images table."""

    id: int
    owner_id: str
    filename: str
    storage_disk: str
    storage_locator: str
    file_size_bytes: int
    mime_type: str
    category: Category
    item_type: str = ""
    location: str = ""
    date_taken: str = ""
    sequence: str = ""
    prefix: str = ""
    created_at: datetime | None = None
