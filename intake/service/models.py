from dataclasses import dataclass, field

from intake.classifier.models import Rejection
from intake.database.models import ImageRecord


@dataclass
class UploadReport:
    """What happened to one upload batch: stored records and per-file rejections."""

    stored: list[ImageRecord] = field(default_factory=list)
    rejected: list[Rejection] = field(default_factory=list)

    def rejection_lines(self) -> list[str]:
        return [rejection.describe() for rejection in self.rejected]
