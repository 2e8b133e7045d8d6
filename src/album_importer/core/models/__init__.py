"""Core data models."""

from .candidate import ConfidenceTier, FieldConfidence, ParsedCandidate, ParseMethod
from .catalog import AlbumDraft, AlbumInfo, ModelInfo, StudioInfo
from .import_result import ImportItem, ImportOutcome, ImportStatus, ImportSummary
from .review import ItemAction, ReviewItem, ReviewStatus, TierAction

__all__ = [
    "ParseMethod",
    "ConfidenceTier",
    "FieldConfidence",
    "ParsedCandidate",
    "ReviewStatus",
    "TierAction",
    "ItemAction",
    "ReviewItem",
    "ImportStatus",
    "ImportItem",
    "ImportOutcome",
    "ImportSummary",
    "StudioInfo",
    "ModelInfo",
    "AlbumDraft",
    "AlbumInfo",
]
