"""Review session data models."""

from enum import Enum

from pydantic import BaseModel, Field

from .candidate import ParsedCandidate


class ReviewStatus(str, Enum):
    """Review status of a single item."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    EDITED = "edited"
    SKIPPED = "skipped"


class TierAction(str, Enum):
    """Bulk action applied to every item of a tier."""

    CONFIRM_ALL = "confirm_all"
    SKIP_ALL = "skip_all"


class ItemAction(str, Enum):
    """Status action applied to a single item."""

    CONFIRM = "confirm"
    SKIP = "skip"


READY_STATUSES = frozenset({ReviewStatus.CONFIRMED, ReviewStatus.EDITED})


class ReviewItem(BaseModel):
    """A parsed candidate under operator review."""

    id: str = Field(..., description="Identifier stable per batch position")
    folder_name: str = Field(..., description="Original folder name")
    candidate: ParsedCandidate = Field(..., description="Current studio/model guess")
    status: ReviewStatus = Field(default=ReviewStatus.PENDING, description="Review status")

    @property
    def is_ready(self) -> bool:
        """Check if the item is eligible for import."""
        return self.status in READY_STATUSES
