from intake.classifier.classifier import (
    FilenameClassifier,
    extension_kind,
    is_valid_file_type,
    is_valid_naming_format,
    parse_image_filename,
    validate_batch,
)
from intake.classifier.models import (
    AcceptedCandidate,
    BatchResult,
    ParsedFilename,
    Rejection,
    RejectionReason,
    UploadCandidate,
)

__all__ = [
    "AcceptedCandidate",
    "BatchResult",
    "FilenameClassifier",
    "ParsedFilename",
    "Rejection",
    "RejectionReason",
    "UploadCandidate",
    "extension_kind",
    "is_valid_file_type",
    "is_valid_naming_format",
    "parse_image_filename",
    "validate_batch",
]
