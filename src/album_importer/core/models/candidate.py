"""Parsed folder name data models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ParseMethod(str, Enum):
    """Strategy that produced a parsed candidate."""

    BRACKET = "bracket"
    SEPARATOR_AT = "separator-at"
    SEPARATOR_HYPHEN = "separator-hyphen"
    TEXT_EXTRACTION = "text-extraction"
    SMART_ANALYSIS = "smart-analysis"
    NONE = "none"


class ConfidenceTier(str, Enum):
    """Coarse confidence bucket driving bulk review actions."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FieldConfidence(BaseModel):
    """Per-field confidence scores (0-100)."""

    studio: int = Field(default=0, ge=0, le=100, description="Studio confidence")
    model: int = Field(default=0, ge=0, le=100, description="Model confidence")
    overall: int = Field(default=0, ge=0, le=100, description="Overall confidence")


class ParsedCandidate(BaseModel):
    """Studio/model/title guess for a single folder name.

    ``title`` always holds the verbatim folder name unless an explicit
    title suffix was present in ``[Studio][Model]Title`` form.
    """

    studio: str = Field(default="", description="Studio name, empty if unknown")
    model: str = Field(default="", description="Model name, empty if unknown")
    title: str = Field(..., description="Album title")
    confidence: FieldConfidence = Field(
        default_factory=FieldConfidence, description="Confidence scores"
    )
    method: ParseMethod = Field(default=ParseMethod.NONE, description="Producing strategy")
    valid: bool = Field(default=True, description="Whether parsing succeeded")
    error: Optional[str] = Field(default=None, description="Reason when not valid")
    tier: Optional[ConfidenceTier] = Field(default=None, description="Confidence tier")
    strategies: List[ParseMethod] = Field(
        default_factory=list, description="Strategies that contributed a field, in order"
    )
