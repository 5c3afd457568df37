from intake.taxonomy.display import CategoryStyle, category_display_style, format_item_type
from intake.taxonomy.models import Category, ExtensionKind, FileKind, TaxonomyEntry
from intake.taxonomy.table import DEFAULT_TAXONOMY, DISPLAY_ORDER, TaxonomyTable

__all__ = [
    "DEFAULT_TAXONOMY",
    "DISPLAY_ORDER",
    "Category",
    "CategoryStyle",
    "ExtensionKind",
    "FileKind",
    "TaxonomyEntry",
    "TaxonomyTable",
    "category_display_style",
    "format_item_type",
]
