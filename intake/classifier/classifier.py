"""Filename validation and classification against the inspection taxonomy.

Naming convention: {prefix}_{shortform}[_{location}[_{date}[_{sequence}]]].{ext}

Normalization, shared by every operation:
1. Lowercase the whole filename.
2. Strip one trailing .jpg/.jpeg/.png/.tif/.tiff/.pdf extension.
3. Split the rest on underscores (and only underscores).

Nothing here touches storage or file contents; every call is a pure function
of the filename, the declared MIME type and the taxonomy table.
"""

import re
from collections.abc import Iterable

from intake.classifier.exceptions import (
    CandidateRejectedError,
    DuplicateFilenameError,
    FileKindMismatchError,
    MalformedNameError,
    UnknownCategoryError,
    UnsupportedMediaTypeError,
)
from intake.classifier.models import (
    AcceptedCandidate,
    BatchResult,
    ParsedFilename,
    Rejection,
    UploadCandidate,
)
from intake.taxonomy.models import Category, ExtensionKind, FileKind
from intake.taxonomy.table import DEFAULT_TAXONOMY, TaxonomyTable

IMAGE_EXTENSIONS: tuple[str, ...] = (".jpg", ".jpeg", ".png", ".tif", ".tiff")
DOCUMENT_EXTENSIONS: tuple[str, ...] = (".pdf",)

_EXTENSION_RE = re.compile(r"\.(jpg|jpeg|png|tif|tiff|pdf)$")
_NAMING_HINT = "must follow {prefix}_{shortform}[_location][_date][_sequence].ext"


def _strip_extension(filename_lower: str) -> str:
    return _EXTENSION_RE.sub("", filename_lower, count=1)


def _tokens(filename: str) -> list[str]:
    return _strip_extension(filename.lower()).split("_")


def extension_kind(filename: str) -> ExtensionKind | None:
    """Classify a filename by extension; None when it is neither image nor document."""
    lowered = filename.lower()
    if lowered.endswith(DOCUMENT_EXTENSIONS):
        return ExtensionKind.DOCUMENT
    if lowered.endswith(IMAGE_EXTENSIONS):
        return ExtensionKind.IMAGE
    return None


def _is_supported_media_type(mime_type: str) -> bool:
    essence = mime_type.split(";", 1)[0].strip().lower()
    return essence.startswith("image/") or essence == "application/pdf"


class FilenameClassifier:
    """Validates and parses inspection filenames.

    Args:
        taxonomy: Table of valid (prefix, shortform) pairs.
        allow_uncategorized: Accept well-formed names whose pair is not in the
            table as Uncategorized instead of rejecting them in batches.
    """

    def __init__(
        self,
        taxonomy: TaxonomyTable = DEFAULT_TAXONOMY,
        allow_uncategorized: bool = False,
    ) -> None:
        self._taxonomy = taxonomy
        self._allow_uncategorized = allow_uncategorized

    @property
    def taxonomy(self) -> TaxonomyTable:
        return self._taxonomy

    def is_valid_naming_format(self, filename: str) -> bool:
        """True when the first two tokens form a known (prefix, shortform) pair."""
        parts = _tokens(filename)
        if len(parts) < 2:
            return False
        return self._taxonomy.lookup(parts[0], parts[1]) is not None

    def parse_image_filename(self, filename: str) -> ParsedFilename:
        """Split a filename into its positional fields. Never raises.

        Unknown or missing (prefix, shortform) pairs yield Category.UNCATEGORIZED.
        """
        parts = _tokens(filename)
        padded = parts + [""] * (5 - len(parts))
        prefix, item_type, location, date_taken, sequence = padded[:5]
        category = self._taxonomy.lookup(prefix, item_type) or Category.UNCATEGORIZED
        return ParsedFilename(
            category=category,
            item_type=item_type,
            location=location,
            date_taken=date_taken,
            sequence=sequence,
            prefix=prefix,
        )

    def check_file_type(self, filename: str) -> ParsedFilename:
        """Enforce naming and the category's file-kind policy.

        Returns:
            The parsed filename when the file is acceptable.

        Raises:
            MalformedNameError: no recognized extension or fewer than two tokens.
            UnknownCategoryError: the (prefix, shortform) pair is not in the table.
            FileKindMismatchError: image submitted for a document-only category,
                or a PDF submitted for an image-only one.
        """
        kind = self._require_well_formed(filename)
        parsed = self.parse_image_filename(filename)
        if parsed.category is Category.UNCATEGORIZED:
            raise UnknownCategoryError(
                f"Unknown naming prefix '{parsed.prefix}_{parsed.item_type}' ({_NAMING_HINT})"
            )
        self._require_matching_kind(parsed.category, kind)
        return parsed

    def is_valid_file_type(self, filename: str) -> bool:
        try:
            self.check_file_type(filename)
        except CandidateRejectedError:
            return False
        return True

    def check_candidate(self, candidate: UploadCandidate) -> ParsedFilename:
        """Apply every per-file rule except the duplicate check.

        Raises:
            CandidateRejectedError: subclass naming the first rule broken.
        """
        kind = self._require_well_formed(candidate.filename)
        if candidate.mime_type and not _is_supported_media_type(candidate.mime_type):
            raise UnsupportedMediaTypeError(
                f"Invalid file type '{candidate.mime_type}' (images or PDF only)"
            )
        parsed = self.parse_image_filename(candidate.filename)
        if parsed.category is Category.UNCATEGORIZED:
            if not self._allow_uncategorized:
                raise UnknownCategoryError(
                    f"Unknown naming prefix '{parsed.prefix}_{parsed.item_type}' "
                    f"({_NAMING_HINT})"
                )
            return parsed
        self._require_matching_kind(parsed.category, kind)
        return parsed

    def validate_batch(
        self,
        candidates: Iterable[UploadCandidate],
        existing_filenames: Iterable[str],
    ) -> BatchResult:
        """Split a batch into accepted and rejected candidates.

        Candidates are checked in input order. A name colliding (ignoring case)
        with an existing filename, or with any earlier candidate of the same
        batch, is rejected as a duplicate. A rejection never affects the
        classification of the other candidates.
        """
        taken = {name.lower() for name in existing_filenames}
        batch_names: set[str] = set()
        result = BatchResult()
        for candidate in candidates:
            try:
                parsed = self.check_candidate(candidate)
                self._require_unique(candidate.filename, taken, batch_names)
            except CandidateRejectedError as exc:
                result.rejected.append(
                    Rejection(candidate=candidate, reason=exc.reason, message=str(exc))
                )
            else:
                result.accepted.append(AcceptedCandidate(candidate=candidate, parsed=parsed))
            batch_names.add(candidate.filename.lower())
        return result

    def _require_well_formed(self, filename: str) -> ExtensionKind:
        kind = extension_kind(filename)
        if kind is None:
            raise MalformedNameError(
                "Invalid file type (allowed: jpg, jpeg, png, tif, tiff, pdf)"
            )
        if len(_tokens(filename)) < 2:
            raise MalformedNameError(f"Invalid naming format ({_NAMING_HINT})")
        return kind

    def _require_matching_kind(self, category: Category, kind: ExtensionKind) -> None:
        allowed = self._taxonomy.allowed_file_kind(category)
        if allowed is FileKind.DOCUMENT_ONLY and kind is not ExtensionKind.DOCUMENT:
            raise FileKindMismatchError(
                f"{category.value} files must be PDF documents, not images"
            )
        if allowed is FileKind.IMAGE_ONLY and kind is not ExtensionKind.IMAGE:
            raise FileKindMismatchError(
                f"{category.value} files must be images (jpg, jpeg, png, tif, tiff), "
                "not PDF documents"
            )

    @staticmethod
    def _require_unique(filename: str, taken: set[str], batch_names: set[str]) -> None:
        key = filename.lower()
        if key in taken:
            raise DuplicateFilenameError("A file with this name already exists")
        if key in batch_names:
            raise DuplicateFilenameError("Duplicate of an earlier file in this batch")


_default_classifier = FilenameClassifier()


def is_valid_naming_format(filename: str) -> bool:
    return _default_classifier.is_valid_naming_format(filename)


def parse_image_filename(filename: str) -> ParsedFilename:
    return _default_classifier.parse_image_filename(filename)


def is_valid_file_type(filename: str) -> bool:
    return _default_classifier.is_valid_file_type(filename)


def validate_batch(
    candidates: Iterable[UploadCandidate],
    existing_filenames: Iterable[str],
) -> BatchResult:
    return _default_classifier.validate_batch(candidates, existing_filenames)
