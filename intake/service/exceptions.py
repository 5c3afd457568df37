class IntakeError(Exception):
    """Base exception for all intake-service errors."""


class ImageNotFoundError(IntakeError):
    """Raised when an image record cannot be found for the owner."""


class MetadataStoreError(IntakeError):
    """Raised when the metadata store cannot be reached or rejects a statement."""


class UnreadableUploadError(IntakeError):
    """Raised when a local file offered for upload cannot be read."""
