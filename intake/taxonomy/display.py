"""Cosmetic category metadata for the gallery: labels, colors, item-type captions."""

import re
from dataclasses import dataclass

from intake.taxonomy.models import Category


@dataclass(frozen=True)
class CategoryStyle:
    """Display hint for a category badge."""

    label: str
    color: str


_COLORS: dict[Category, str] = {
    Category.GENERAL: "blue",
    Category.SUBSTATION_CONDITION: "green",
    Category.STICKER: "yellow",
    Category.VISUAL_DEFECT: "red",
    Category.MAINTENANCE_INFO: "purple",
    Category.TEST_SHEET: "orange",
    Category.UNCATEGORIZED: "gray",
}

_CAMEL_HUMP_RE = re.compile(r"(?<!^)(?=[A-Z])")


def category_display_style(category: Category) -> CategoryStyle:
    color = _COLORS.get(category, _COLORS[Category.UNCATEGORIZED])
    return CategoryStyle(label=category.value, color=color)


def format_item_type(item_type: str) -> str:
    """Turn an item type token into a caption: 'fireExt' -> 'Fire Ext'."""
    if not item_type:
        return ""
    spaced = _CAMEL_HUMP_RE.sub(" ", item_type)
    return (spaced[0].upper() + spaced[1:]).strip()
