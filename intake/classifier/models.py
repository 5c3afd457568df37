from dataclasses import dataclass, field
from enum import Enum

from intake.taxonomy.models import Category


@dataclass(frozen=True)
class ParsedFilename:
    """Fields derived from an inspection filename.

    Optional positional fields are empty strings when the name has no token there.
    """

    category: Category
    item_type: str
    location: str = ""
    date_taken: str = ""
    sequence: str = ""
    prefix: str = ""


@dataclass(frozen=True)
class UploadCandidate:
    """A caller-supplied file awaiting validation. Only filename and mime_type are read."""

    filename: str
    mime_type: str = ""
    content: bytes = field(default=b"", repr=False)


class RejectionReason(str, Enum):
    MALFORMED_NAME = "malformed_name"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    UNKNOWN_CATEGORY = "unknown_category"
    FILE_KIND_MISMATCH = "file_kind_mismatch"
    DUPLICATE_FILENAME = "duplicate_filename"


@dataclass(frozen=True)
class AcceptedCandidate:
    candidate: UploadCandidate
    parsed: ParsedFilename


@dataclass(frozen=True)
class Rejection:
    """A candidate paired with the rule it broke and a user-facing message."""

    candidate: UploadCandidate
    reason: RejectionReason
    message: str

    def describe(self) -> str:
        return f"{self.candidate.filename} - {self.message}"


@dataclass
class BatchResult:
    """Outcome of validating one batch; both lists keep input order."""

    accepted: list[AcceptedCandidate] = field(default_factory=list)
    rejected: list[Rejection] = field(default_factory=list)

    @property
    def has_rejections(self) -> bool:
        return bool(self.rejected)
