"""Catalog entity data models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class StudioInfo(BaseModel):
    """Studio as stored in the catalog."""

    id: int = Field(..., description="Studio ID")
    name: str = Field(..., description="Studio name")


class ModelInfo(BaseModel):
    """Model (performer) as stored in the catalog."""

    id: int = Field(..., description="Model ID")
    name: str = Field(..., description="Model name")


class AlbumDraft(BaseModel):
    """Fields needed to create an album record."""

    title: str = Field(..., description="Album title")
    studio_id: int = Field(..., description="Existing studio ID")
    model_id: Optional[int] = Field(None, description="Model ID, None for no model")
    resource_url: str = Field(..., description="Resource URL, unique per import attempt")
    source_page_url: Optional[str] = Field(None, description="Source page URL")


class AlbumInfo(BaseModel):
    """Album as stored in the catalog."""

    id: int = Field(..., description="Album ID")
    title: str = Field(..., description="Album title")
    studio_id: int = Field(..., description="Studio ID")
    model_id: Optional[int] = Field(None, description="Model ID")
    resource_url: str = Field(..., description="Resource URL")
    source_page_url: Optional[str] = Field(None, description="Source page URL")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
