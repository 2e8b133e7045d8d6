"""Import result data models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ImportStatus(str, Enum):
    """Per-item import status."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


class ImportItem(BaseModel):
    """A folder accepted for import."""

    folder_name: str = Field(..., description="Source folder name")
    studio: str = Field(default="", description="Studio name")
    model: str = Field(default="", description="Model name")
    title: str = Field(default="", description="Parsed title (the album uses the folder name)")


class ImportOutcome(BaseModel):
    """Result of importing a single folder."""

    source_folder: str = Field(..., description="Source folder name")
    status: ImportStatus = Field(..., description="Import status")
    reason: Optional[str] = Field(None, description="Failure or skip reason")
    album_id: Optional[int] = Field(None, description="Created album ID")
    studio: Optional[str] = Field(None, description="Studio name")
    model: Optional[str] = Field(None, description="Model name")
    title: Optional[str] = Field(None, description="Album title")


class ImportSummary(BaseModel):
    """Summary of an import batch."""

    success: bool = Field(default=True, description="False if the batch could not run at all")
    total: int = Field(default=0, description="Number of input items")
    imported: int = Field(default=0, description="Successfully imported items")
    skipped: int = Field(default=0, description="Skipped items")
    failed: int = Field(default=0, description="Failed items")
    details: List[ImportOutcome] = Field(
        default_factory=list, description="Per-item outcomes in processing order"
    )
    processing_time_seconds: float = Field(default=0.0, description="Total processing time")

    @classmethod
    def failed_summary(cls) -> "ImportSummary":
        """Summary for a batch that could not start."""
        return cls(success=False)

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        if self.total == 0:
            return 0.0
        return self.imported / self.total

    def add_outcome(self, outcome: ImportOutcome) -> None:
        """Add an item outcome to the summary."""
        self.details.append(outcome)

        if outcome.status == ImportStatus.SUCCESS:
            self.imported += 1
        elif outcome.status == ImportStatus.SKIPPED:
            self.skipped += 1
        elif outcome.status == ImportStatus.FAILED:
            self.failed += 1
