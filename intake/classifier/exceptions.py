from intake.classifier.models import RejectionReason


class ClassifierError(Exception):
    """Base exception for all classifier-related errors."""


class CandidateRejectedError(ClassifierError):
    """Raised when a single candidate breaks an intake rule."""

    reason: RejectionReason


class MalformedNameError(CandidateRejectedError):
    """Raised when a filename lacks a recognized extension or a prefix_shortform head."""

    reason = RejectionReason.MALFORMED_NAME


class UnsupportedMediaTypeError(CandidateRejectedError):
    """Raised when the declared MIME type is neither an image nor a PDF."""

    reason = RejectionReason.UNSUPPORTED_MEDIA_TYPE


class UnknownCategoryError(CandidateRejectedError):
    """Raised when uncategorized files are not accepted and the pair is unknown."""

    reason = RejectionReason.UNKNOWN_CATEGORY


class FileKindMismatchError(CandidateRejectedError):
    """Raised when the extension kind violates the category's file-kind policy."""

    reason = RejectionReason.FILE_KIND_MISMATCH


class DuplicateFilenameError(CandidateRejectedError):
    """Raised when a filename collides, ignoring case, with a known one."""

    reason = RejectionReason.DUPLICATE_FILENAME
