from collections.abc import Iterable, Iterator
from types import MappingProxyType

from intake.taxonomy.models import Category, FileKind, TaxonomyEntry

DISPLAY_ORDER: tuple[Category, ...] = (
    Category.GENERAL,
    Category.SUBSTATION_CONDITION,
    Category.STICKER,
    Category.VISUAL_DEFECT,
    Category.MAINTENANCE_INFO,
    Category.TEST_SHEET,
)

_SHORTFORMS: dict[str, tuple[Category, tuple[str, ...]]] = {
    "gen": (Category.GENERAL, ("logo",)),
    "sc": (
        Category.SUBSTATION_CONDITION,
        (
            "substationoverview",
            "signboard",
            "switchgear",
            "switchgearnameplate",
            "transformer",
            "transformernameplate",
            "lvdb",
            "lvdbnameplate",
            "battery",
            "batterynameplate",
            "fireext",
            "efi",
            "sf6",
        ),
    ),
    "stk": (Category.STICKER, ("normal", "defect")),
    "vi": (
        Category.VISUAL_DEFECT,
        (
            "switchgear",
            "cablepilc",
            "ptx",
            "ltx",
            "lvdb",
            "linkbox",
            "efi",
            "earthing",
            "signboard",
            "fireext",
            "batterycharger",
            "rubbermat",
            "trenching",
            "louver",
            "exhaustfan",
            "lighting",
            "substation",
            "aircond",
            "hpole",
            "firefighting",
        ),
    ),
    "mi": (Category.MAINTENANCE_INFO, ("pmsticker", "rmsticker", "oltt")),
    "ts": (Category.TEST_SHEET, ("cbm", "vitest")),
}


class TaxonomyTable:
    """Read-only mapping of (prefix, shortform) pairs to categories.

    Keys are stored lowercased; lookups normalize their arguments the same way.
    """

    def __init__(self, entries: Iterable[TaxonomyEntry]) -> None:
        table: dict[tuple[str, str], Category] = {}
        for entry in entries:
            key = (entry.prefix.lower(), entry.shortform.lower())
            if not key[0] or not key[1]:
                raise ValueError(f"Empty prefix or shortform in taxonomy entry {entry!r}")
            if entry.category is Category.UNCATEGORIZED:
                raise ValueError(f"'{key[0]}_{key[1]}' cannot map to {entry.category.value}")
            if key in table:
                raise ValueError(f"Duplicate taxonomy entry '{key[0]}_{key[1]}'")
            table[key] = entry.category
        self._table = MappingProxyType(table)

    def lookup(self, prefix: str, shortform: str) -> Category | None:
        """Return the category for the pair, or None when the pair is unknown."""
        return self._table.get((prefix.lower(), shortform.lower()))

    def allowed_file_kind(self, category: Category) -> FileKind:
        """File kind accepted by a category.

        Raises:
            ValueError: for Uncategorized, which carries no file-kind policy.
        """
        if category is Category.UNCATEGORIZED:
            raise ValueError("Uncategorized has no file-kind policy")
        if category is Category.TEST_SHEET:
            return FileKind.DOCUMENT_ONLY
        return FileKind.IMAGE_ONLY

    def categories(self) -> tuple[Category, ...]:
        return DISPLAY_ORDER

    def entries(self) -> Iterator[TaxonomyEntry]:
        for (prefix, shortform), category in self._table.items():
            yield TaxonomyEntry(prefix=prefix, shortform=shortform, category=category)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        prefix, shortform = pair
        return self.lookup(str(prefix), str(shortform)) is not None


def _default_entries() -> Iterator[TaxonomyEntry]:
    for prefix, (category, shortforms) in _SHORTFORMS.items():
        for shortform in shortforms:
            yield TaxonomyEntry(prefix=prefix, shortform=shortform, category=category)


DEFAULT_TAXONOMY = TaxonomyTable(_default_entries())
