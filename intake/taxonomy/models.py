from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    """Business classification of an inspection file. Values are display labels."""

    GENERAL = "General"
    SUBSTATION_CONDITION = "Substation Condition"
    STICKER = "Sticker"
    VISUAL_DEFECT = "Visual Defect"
    MAINTENANCE_INFO = "Maintenance Info"
    TEST_SHEET = "Test Sheet"
    UNCATEGORIZED = "Uncategorized"


class FileKind(str, Enum):
    """Which kind of file a category accepts."""

    IMAGE_ONLY = "image_only"
    DOCUMENT_ONLY = "document_only"


class ExtensionKind(str, Enum):
    """Kind of a file as judged by its extension alone."""

    IMAGE = "image"
    DOCUMENT = "document"


@dataclass(frozen=True)
class TaxonomyEntry:
    """One (prefix, shortform) -> category mapping."""

    prefix: str
    shortform: str
    category: Category
